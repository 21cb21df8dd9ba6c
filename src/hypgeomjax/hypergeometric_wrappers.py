"""Array entry points for the hypergeometric families.

``*_batch`` evaluates elementwise on the host over broadcast float64 arrays,
``*_batch_jit`` does the same from inside ``jax.jit`` through
``jax.pure_callback``, ``*_batch_prec`` evaluates each element with mpmath at
``prec_bits`` and rounds to float64, and ``*_mode`` selects between the
float64 and the multiprecision path with ``impl="baseline"|"mp"``.

Unless a policy is passed, batch evaluation reports domain, pole and
convergence errors as NaN entries instead of raising.
"""

from __future__ import annotations

import inspect
from functools import partial
from typing import Callable, Sequence

import jax

from . import hypergeometric as hg
from . import wrappers_common as wc
from .policy import Policy

jax.config.update("jax_enable_x64", True)

BATCH_POLICY = Policy(on_domain_error="nan", on_pole_error="nan", on_evaluation_error="nan")


def _batch_policy(pol: Policy | None) -> Policy:
    return BATCH_POLICY if pol is None else pol


def hypergeometric_0f1_batch(b, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_batch(partial(hg.hypergeometric_0f1, pol=_batch_policy(pol)), b, z)


def hypergeometric_1f0_batch(a, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_batch(partial(hg.hypergeometric_1f0, pol=_batch_policy(pol)), a, z)


def hypergeometric_1f1_batch(a, b, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_batch(partial(hg.hypergeometric_1f1, pol=_batch_policy(pol)), a, b, z)


def hypergeometric_1f2_batch(a, b1, b2, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_batch(partial(hg.hypergeometric_1f2, pol=_batch_policy(pol)), a, b1, b2, z)


def hypergeometric_2f0_batch(a1, a2, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_batch(partial(hg.hypergeometric_2f0, pol=_batch_policy(pol)), a1, a2, z)


def hypergeometric_2f1_batch(a1, a2, b, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_batch(partial(hg.hypergeometric_2f1, pol=_batch_policy(pol)), a1, a2, b, z)


def hypergeometric_pfq_batch(a: Sequence, b: Sequence, z, pol: Policy | None = None) -> jax.Array:
    """Batch over ``z`` only; the parameter lists are shared by every element."""
    return wc.host_batch(partial(hg.hypergeometric_pfq, tuple(a), tuple(b), pol=_batch_policy(pol)), z)


@partial(jax.jit, static_argnames=("pol",))
def hypergeometric_0f1_batch_jit(b, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_callback(partial(hg.hypergeometric_0f1, pol=_batch_policy(pol)), b, z)


@partial(jax.jit, static_argnames=("pol",))
def hypergeometric_1f0_batch_jit(a, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_callback(partial(hg.hypergeometric_1f0, pol=_batch_policy(pol)), a, z)


@partial(jax.jit, static_argnames=("pol",))
def hypergeometric_1f1_batch_jit(a, b, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_callback(partial(hg.hypergeometric_1f1, pol=_batch_policy(pol)), a, b, z)


@partial(jax.jit, static_argnames=("pol",))
def hypergeometric_1f2_batch_jit(a, b1, b2, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_callback(partial(hg.hypergeometric_1f2, pol=_batch_policy(pol)), a, b1, b2, z)


@partial(jax.jit, static_argnames=("pol",))
def hypergeometric_2f0_batch_jit(a1, a2, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_callback(partial(hg.hypergeometric_2f0, pol=_batch_policy(pol)), a1, a2, z)


@partial(jax.jit, static_argnames=("pol",))
def hypergeometric_2f1_batch_jit(a1, a2, b, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_callback(partial(hg.hypergeometric_2f1, pol=_batch_policy(pol)), a1, a2, b, z)


@partial(jax.jit, static_argnames=("a", "b", "pol"))
def hypergeometric_pfq_batch_jit(a: tuple, b: tuple, z, pol: Policy | None = None) -> jax.Array:
    return wc.host_callback(partial(hg.hypergeometric_pfq, a, b, pol=_batch_policy(pol)), z)


def hypergeometric_0f1_batch_prec(b, z, prec_bits: int | None = None, pol: Policy | None = None) -> jax.Array:
    pb = wc.resolve_prec_bits(None, prec_bits)
    return wc.host_batch(partial(hg.hypergeometric_0f1_prec, prec_bits=pb, pol=_batch_policy(pol)), b, z)


def hypergeometric_1f0_batch_prec(a, z, prec_bits: int | None = None, pol: Policy | None = None) -> jax.Array:
    pb = wc.resolve_prec_bits(None, prec_bits)
    return wc.host_batch(partial(hg.hypergeometric_1f0_prec, prec_bits=pb, pol=_batch_policy(pol)), a, z)


def hypergeometric_1f1_batch_prec(a, b, z, prec_bits: int | None = None, pol: Policy | None = None) -> jax.Array:
    pb = wc.resolve_prec_bits(None, prec_bits)
    return wc.host_batch(partial(hg.hypergeometric_1f1_prec, prec_bits=pb, pol=_batch_policy(pol)), a, b, z)


def hypergeometric_1f2_batch_prec(
    a, b1, b2, z, prec_bits: int | None = None, pol: Policy | None = None
) -> jax.Array:
    pb = wc.resolve_prec_bits(None, prec_bits)
    return wc.host_batch(
        partial(hg.hypergeometric_1f2_prec, prec_bits=pb, pol=_batch_policy(pol)), a, b1, b2, z
    )


def hypergeometric_2f0_batch_prec(a1, a2, z, prec_bits: int | None = None, pol: Policy | None = None) -> jax.Array:
    pb = wc.resolve_prec_bits(None, prec_bits)
    return wc.host_batch(partial(hg.hypergeometric_2f0_prec, prec_bits=pb, pol=_batch_policy(pol)), a1, a2, z)


def hypergeometric_2f1_batch_prec(
    a1, a2, b, z, prec_bits: int | None = None, pol: Policy | None = None
) -> jax.Array:
    pb = wc.resolve_prec_bits(None, prec_bits)
    return wc.host_batch(
        partial(hg.hypergeometric_2f1_prec, prec_bits=pb, pol=_batch_policy(pol)), a1, a2, b, z
    )


def hypergeometric_pfq_batch_prec(
    a: Sequence, b: Sequence, z, prec_bits: int | None = None, pol: Policy | None = None
) -> jax.Array:
    pb = wc.resolve_prec_bits(None, prec_bits)
    return wc.host_batch(
        partial(hg.hypergeometric_pfq_prec, tuple(a), tuple(b), prec_bits=pb, pol=_batch_policy(pol)), z
    )


def _make_wrapper(name: str) -> Callable[..., jax.Array]:
    mp_fn = globals()[name]
    base_fn = globals()[name[: -len("_prec")]]

    def wrapper(*args, impl: str = "baseline", dps: int | None = None, prec_bits: int | None = None, **kwargs):
        pb = wc.resolve_prec_bits(dps, prec_bits)
        return wc.dispatch_mode(impl, base_fn, mp_fn, pb, args, kwargs)

    wrapper.__name__ = name.replace("_batch_prec", "_mode")
    wrapper.__doc__ = f"Mode-dispatched wrapper around {name}. impl: baseline|mp."
    return wrapper


__all__: list[str] = [
    "BATCH_POLICY",
    "hypergeometric_0f1_batch",
    "hypergeometric_1f0_batch",
    "hypergeometric_1f1_batch",
    "hypergeometric_1f2_batch",
    "hypergeometric_2f0_batch",
    "hypergeometric_2f1_batch",
    "hypergeometric_pfq_batch",
    "hypergeometric_0f1_batch_jit",
    "hypergeometric_1f0_batch_jit",
    "hypergeometric_1f1_batch_jit",
    "hypergeometric_1f2_batch_jit",
    "hypergeometric_2f0_batch_jit",
    "hypergeometric_2f1_batch_jit",
    "hypergeometric_pfq_batch_jit",
    "hypergeometric_0f1_batch_prec",
    "hypergeometric_1f0_batch_prec",
    "hypergeometric_1f1_batch_prec",
    "hypergeometric_1f2_batch_prec",
    "hypergeometric_2f0_batch_prec",
    "hypergeometric_2f1_batch_prec",
    "hypergeometric_pfq_batch_prec",
]

for _name in list(globals()):
    if not (_name.startswith("hypergeometric_") and _name.endswith("_batch_prec")):
        continue
    if "prec_bits" not in inspect.signature(globals()[_name]).parameters:
        continue
    _wrapper = _make_wrapper(_name)
    globals()[_wrapper.__name__] = _wrapper
    __all__.append(_wrapper.__name__)

from __future__ import annotations

from typing import Callable

import jax
import jax.numpy as jnp
import numpy as np

from . import checks
from . import precision

jax.config.update("jax_enable_x64", True)

MODES = ("baseline", "mp")


def resolve_prec_bits(dps: int | None, prec_bits: int | None) -> int:
    if prec_bits is not None:
        return int(prec_bits)
    if dps is not None:
        return precision.dps_to_bits(int(dps))
    return precision.get_prec_bits()


def dispatch_mode(
    impl: str,
    base_fn: Callable[..., jax.Array],
    mp_fn: Callable[..., jax.Array],
    prec_bits: int,
    args: tuple,
    kwargs: dict,
) -> jax.Array:
    checks.check_in_set(impl, MODES, "wrappers_common.impl")
    if impl == "mp":
        return mp_fn(*args, prec_bits=prec_bits, **kwargs)
    return base_fn(*args, **kwargs)


def host_map(fn: Callable[..., object], *arrays) -> np.ndarray:
    """Apply a scalar host kernel elementwise over broadcast float64 arrays."""
    arrs = np.broadcast_arrays(*[np.asarray(a, dtype=np.float64) for a in arrays])
    shape = arrs[0].shape if arrs else ()
    out = np.empty(shape, dtype=np.float64)
    for idx in np.ndindex(shape):
        out[idx] = float(fn(*[float(a[idx]) for a in arrs]))
    return out


def host_batch(fn: Callable[..., object], *arrays) -> jax.Array:
    return jnp.asarray(host_map(fn, *arrays))


def host_callback(fn: Callable[..., object], *arrays) -> jax.Array:
    """Traceable elementwise evaluation of a scalar host kernel."""
    arrs = [jnp.asarray(a, dtype=jnp.float64) for a in arrays]
    shape = jnp.broadcast_shapes(*[a.shape for a in arrs])
    arrs = [jnp.broadcast_to(a, shape) for a in arrs]
    out_type = jax.ShapeDtypeStruct(shape, jnp.float64)
    return jax.pure_callback(
        lambda *a: host_map(fn, *a), out_type, *arrs, vmap_method="broadcast_all"
    )


__all__ = [
    "MODES",
    "resolve_prec_bits",
    "dispatch_mode",
    "host_map",
    "host_batch",
    "host_callback",
]

"""``*_mp`` entry points over the ``*_prec`` hypergeometric families.

``hypergeometric_1f1_mp(a, b, z, dps=50)`` is ``hypergeometric_1f1_prec`` at 50
significant digits, and ``hypergeometric_1f1_batch_mp`` does the same for the
batched ``hypergeometric_1f1_batch_prec``. ``prec_bits=`` wins over ``dps=``;
with neither, the global working precision applies.
"""

from __future__ import annotations

from functools import wraps
from typing import Callable

from . import hypergeometric as hg
from . import hypergeometric_wrappers as hw
from .wrappers_common import resolve_prec_bits

_SCALAR_PREC = (
    hg.hypergeometric_0f1_prec,
    hg.hypergeometric_1f0_prec,
    hg.hypergeometric_1f1_prec,
    hg.hypergeometric_1f2_prec,
    hg.hypergeometric_2f0_prec,
    hg.hypergeometric_2f1_prec,
    hg.hypergeometric_pfq_prec,
)

_BATCH_PREC = (
    hw.hypergeometric_0f1_batch_prec,
    hw.hypergeometric_1f0_batch_prec,
    hw.hypergeometric_1f1_batch_prec,
    hw.hypergeometric_1f2_batch_prec,
    hw.hypergeometric_2f0_batch_prec,
    hw.hypergeometric_2f1_batch_prec,
    hw.hypergeometric_pfq_batch_prec,
)


def mp_name(prec_name: str) -> str:
    """``hypergeometric_1f1_prec`` -> ``hypergeometric_1f1_mp``."""
    if not prec_name.endswith("_prec"):
        raise ValueError(f"mp_mode.mp_name: {prec_name!r} is not a *_prec function")
    return prec_name[: -len("_prec")] + "_mp"


def make_mp(prec_fn: Callable[..., object]) -> Callable[..., object]:
    @wraps(prec_fn)
    def wrapper(*args, dps: int | None = None, prec_bits: int | None = None, **kwargs):
        return prec_fn(*args, prec_bits=resolve_prec_bits(dps, prec_bits), **kwargs)

    wrapper.__name__ = mp_name(prec_fn.__name__)
    wrapper.__qualname__ = wrapper.__name__
    return wrapper


__all__: list[str] = ["mp_name", "make_mp"]

for _prec_fn in _SCALAR_PREC + _BATCH_PREC:
    _wrapper = make_mp(_prec_fn)
    globals()[_wrapper.__name__] = _wrapper
    __all__.append(_wrapper.__name__)

from __future__ import annotations

import os
from contextlib import contextmanager
from math import ceil, log10

import jax.numpy as jnp


def dps_to_bits(dps: int) -> int:
    return int(ceil(dps * log10(10) / log10(2)))


def bits_to_dps(prec_bits: int) -> int:
    return int(ceil(prec_bits * log10(2) / log10(10)))


_DPS = int(os.getenv("HYPGEOMJAX_DPS", "30"))
_PREC_BITS = dps_to_bits(_DPS)


def set_dps(dps: int) -> None:
    global _DPS, _PREC_BITS
    if int(dps) < 1:
        raise ValueError(f"precision.set_dps: expected a positive digit count, got {dps}")
    _DPS = int(dps)
    _PREC_BITS = dps_to_bits(_DPS)


def set_prec_bits(prec_bits: int) -> None:
    global _DPS, _PREC_BITS
    if int(prec_bits) < 2:
        raise ValueError(f"precision.set_prec_bits: expected at least 2 bits, got {prec_bits}")
    _PREC_BITS = int(prec_bits)
    _DPS = bits_to_dps(_PREC_BITS)


def get_dps() -> int:
    return _DPS


def get_prec_bits() -> int:
    return _PREC_BITS


@contextmanager
def workdps(dps: int):
    old = _PREC_BITS
    set_dps(dps)
    try:
        yield
    finally:
        set_prec_bits(old)


@contextmanager
def workprec(prec_bits: int):
    old = _PREC_BITS
    set_prec_bits(prec_bits)
    try:
        yield
    finally:
        set_prec_bits(old)


def eps_from_dps(dps: int | None = None) -> jnp.ndarray:
    bits = dps_to_bits(_DPS if dps is None else dps)
    return jnp.exp2(jnp.float64(1 - bits))


__all__ = [
    "dps_to_bits",
    "bits_to_dps",
    "set_dps",
    "set_prec_bits",
    "get_dps",
    "get_prec_bits",
    "workdps",
    "workprec",
    "eps_from_dps",
]

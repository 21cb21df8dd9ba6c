"""Elementary and special functions used by the hypergeometric kernels.

Elementary functions of fixed-width numpy scalars are evaluated with numpy so
that overflow produces IEEE infinities. Everything else is evaluated with
mpmath a few guard bits above the working precision and rounded back to the
evaluation type. Fixed-width evaluation goes through a per-thread
``mpmath.MPContext`` and never touches the precision of the global ``mp``
context, which belongs to ``mpf`` evaluation.
"""

from __future__ import annotations

import numpy as np

from .numeric import private_context

_GUARD_BITS = 16


def _mp_eval(rt, fn, *args):
    """Evaluate ``fn(ctx, *args)`` in mpmath and round back to ``rt``."""
    prec_bits = rt.digits + _GUARD_BITS
    if rt.is_mpf:
        with rt.ctx.workprec(prec_bits):
            out = fn(rt.ctx, *args)
        return rt.from_mpf(out)
    ctx = private_context("special")
    ctx.prec = prec_bits
    out = fn(ctx, *[rt.to_mpf(x, ctx) for x in args])
    return rt.from_mpf(out, ctx)


def pi(rt):
    return _mp_eval(rt, lambda ctx: +ctx.pi)


def exp(rt, x):
    if rt.is_mpf:
        return rt.ctx.exp(x)
    return np.exp(x)


def expm1(rt, x):
    if rt.is_mpf:
        return rt.ctx.expm1(x)
    return np.expm1(x)


def log(rt, x):
    if rt.is_mpf:
        return rt.ctx.log(x)
    return np.log(x)


def sqrt(rt, x):
    if rt.is_mpf:
        return rt.ctx.sqrt(x)
    return np.sqrt(x)


def pow(rt, x, y):
    if rt.is_mpf:
        return rt.ctx.power(x, y)
    return np.power(x, y)


def cos_pi(rt, x):
    return _mp_eval(rt, lambda ctx, v: ctx.cospi(v), x)


def tgamma(rt, x):
    return _mp_eval(rt, lambda ctx, v: ctx.gamma(v), x)


def gamma_product(rt, num: list, den: list):
    """prod Gamma(num) / prod Gamma(den); denominator poles give zero."""
    k = len(num)
    return _mp_eval(rt, lambda ctx, *v: ctx.gammaprod(list(v[:k]), list(v[k:])), *num, *den)


def tgamma_ratio(rt, a, b):
    """Gamma(a) / Gamma(b) without forming either factor in the evaluation type."""
    return gamma_product(rt, [a], [b])


def lgamma(rt, x) -> tuple[object, int]:
    """Return ``(log|Gamma(x)|, sign(Gamma(x)))``."""

    def _lg(ctx, v):
        return ctx.re(ctx.loggamma(v))

    value = _mp_eval(rt, _lg, x)
    if x > 0:
        return value, 1
    sign = 1 if int(rt.floor(x)) % 2 == 0 else -1
    return value, sign


def cyl_bessel_j(rt, v, x):
    return _mp_eval(rt, lambda ctx, vv, xx: ctx.besselj(vv, xx), v, x)


def cyl_bessel_i(rt, v, x):
    return _mp_eval(rt, lambda ctx, vv, xx: ctx.besseli(vv, xx), v, x)


def laguerre(rt, n: int, m, x):
    """Associated Laguerre polynomial L_n^m(x)."""
    return _mp_eval(rt, lambda ctx, mm, xx: ctx.laguerre(n, mm, xx), m, x)


def factorial(rt, n: int):
    return _mp_eval(rt, lambda ctx: ctx.factorial(n))


__all__ = [
    "pi",
    "exp",
    "expm1",
    "log",
    "sqrt",
    "pow",
    "cos_pi",
    "tgamma",
    "gamma_product",
    "tgamma_ratio",
    "lgamma",
    "cyl_bessel_j",
    "cyl_bessel_i",
    "laguerre",
    "factorial",
]

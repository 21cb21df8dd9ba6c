"""Real-argument hypergeometric functions 0F1, 1F0, 1F1, 1F2, 2F0, 2F1 and pFq.

The ``*_imp`` dispatchers take an evaluation type ``rt`` (see ``numeric``),
arguments already converted to it and a ``Policy``. They must run inside
``rt.context()``. The public functions promote their arguments, apply the
policy and narrow the result.
"""

from __future__ import annotations

import logging
from typing import Sequence

from . import special
from .hypergeometric_1f1_recurrence import (
    hypergeometric_1f1_backward_recurrence_a,
    hypergeometric_1f1_recurrence_a_and_b,
    hypergeometric_1f1_recurrence_b,
)
from .hypergeometric_asym import (
    hypergeometric_1f1_asym_large_z_negative,
    hypergeometric_1f1_asym_large_z_positive,
    hypergeometric_1f1_asym_region,
)
from .hypergeometric_bessel import hypergeometric_0f1_bessel, sum_1f1_bessel_j_series
from .hypergeometric_pade import hypergeometric_1f1_pade
from .hypergeometric_series import (
    Hypergeometric0F1Term,
    Hypergeometric1F1Term,
    hypergeometric_1f1_generic_series,
    hypergeometric_1f2_generic_series,
    hypergeometric_2f0_generic_series,
    hypergeometric_2f1_generic_series,
    hypergeometric_pfq_generic_series,
)
from .numeric import narrow, promote_args, widened
from .policy import (
    Policy,
    check_overflow,
    check_series_iterations,
    raise_domain_error,
    raise_pole_error,
    resolve_policy,
)
from .series import sum_cancelled_series
from .wrappers_common import resolve_prec_bits

logger = logging.getLogger(__name__)


def hypergeometric_0f1_imp(rt, b, z, pol: Policy):
    site = "hypergeometric_0f1"
    if z == 0:
        return rt(1)
    if rt.is_nonpositive_integer(b):
        return raise_pole_error(site, "Evaluation of 0F1 with non-positive integer b = {}.", b, pol, rt)
    result, used, exact_digits = sum_cancelled_series(
        Hypergeometric0F1Term(b, z), rt.epsilon, pol.max_series_iterations, rt
    )
    result = check_series_iterations(site, used, pol, rt, result)
    if exact_digits < rt.digits10 - 2:
        logger.debug("%s(%s, %s): %d exact digits from the series, using the Bessel relation", site, b, z, exact_digits)
        return hypergeometric_0f1_bessel(rt, b, z)
    return result


def hypergeometric_1f0_imp(rt, a, z, pol: Policy):
    site = "hypergeometric_1f0"
    if z == 0 or a == 0:
        return rt(1)
    if z == 1:
        return raise_pole_error(site, "Evaluation of 1F0 at the branch point z = {}.", z, pol, rt)
    if z > 1 and not rt.is_integer(a):
        return raise_domain_error(site, "1F0 is complex for z = {} > 1 and non-integer a.", z, pol, rt)
    return special.pow(rt, 1 - z, -a)


def _a_small_threshold(rt, pol: Policy):
    if pol.a_small_threshold is not None:
        return rt(pol.a_small_threshold)
    return rt(-max(rt.digits10, 2))


_WIDENING_GUARD_BITS = 32
_MAX_WIDENINGS = 4


def _hypergeometric_1f1_checked_series(rt, a, b, z, pol: Policy):
    """Taylor series of 1F1, re-summed in a wider mpf type while cancellation eats the digits of ``rt``."""
    site = "hypergeometric_1f1"
    result, used, exact_digits = sum_cancelled_series(
        Hypergeometric1F1Term(a, b, z), rt.epsilon, pol.max_series_iterations, rt
    )
    result = check_series_iterations(site, used, pol, rt, result)
    if exact_digits >= rt.digits10 - 2 or not rt.isfinite(result):
        return result
    exact_bits = (exact_digits * 100000) // 30103
    extra_bits = (rt.digits - exact_bits) + _WIDENING_GUARD_BITS
    if exact_bits == 0:
        extra_bits += rt.digits
    for _ in range(_MAX_WIDENINGS):
        wide = widened(rt, extra_bits)
        logger.debug("%s(%s, %s, %s): %d exact digits, summing at %d bits", site, a, b, z, exact_digits, wide.digits)
        with wide.context():
            wide_result, used, wide_digits = sum_cancelled_series(
                Hypergeometric1F1Term(wide(a), wide(b), wide(z)), wide.epsilon, pol.max_series_iterations, wide
            )
        result = rt.from_mpf(wide_result, wide.ctx)
        if wide_digits >= rt.digits10 + 2:
            break
        extra_bits *= 2
    return check_series_iterations(site, used, pol, rt, result)


def hypergeometric_1f1_imp(rt, a, b, z, pol: Policy):
    """Kummer's function M(a, b, z).

    A non-positive integer ``b`` is a pole unless ``a`` is a non-positive
    integer with ``a > b``, in which case the series terminates before the
    zero of ``(b)_n`` and is summed directly. A non-integer ``a`` with such a
    ``b`` is reported as a domain error rather than continued.
    """
    site = "hypergeometric_1f1"
    if z == 0 or a == 0:
        return rt(1)

    if rt.is_nonpositive_integer(b):
        # only a terminating series that stops before the zero of (b)_n is defined
        if a >= 0 or not rt.is_integer(a) or a < b:
            return raise_domain_error(
                site, "Evaluation of 1F1 with non-positive integer b = {} is indeterminate.", b, pol, rt
            )
        return hypergeometric_1f1_generic_series(rt, a, b, z, pol)

    if a == -1:
        return 1 - z / b

    b_minus_a = b - a
    if b_minus_a == 0:
        return special.exp(rt, z)

    if b_minus_a == -1:
        if rt.is_nonpositive_integer(a):
            return hypergeometric_1f1_generic_series(rt, a, b, z, pol)
        return (1 + z / b) * special.exp(rt, z)

    if a == 1 and b == 2:
        return special.expm1(rt, z) / z

    if hypergeometric_1f1_asym_region(rt, a, b, z, pol):
        if z > 0:
            logger.debug("%s(%s, %s, %s): asymptotic expansion, z > 0", site, a, b, z)
            return hypergeometric_1f1_asym_large_z_positive(rt, a, b, z, pol)
        logger.debug("%s(%s, %s, %s): asymptotic expansion, z < 0", site, a, b, z)
        return hypergeometric_1f1_asym_large_z_negative(rt, a, b, z, pol)

    if z < -1:
        if a == 1:
            logger.debug("%s(%s, %s, %s): continued fraction", site, a, b, z)
            return hypergeometric_1f1_pade(rt, b, z, pol)
        logger.debug("%s(%s, %s, %s): Kummer transformation", site, a, b, z)
        return special.exp(rt, z) * hypergeometric_1f1_imp(rt, b_minus_a, b, -z, pol)

    if a < _a_small_threshold(rt, pol) and (abs(b) < abs(a) or abs(a) < abs(z)):
        if rt.is_integer(a):
            logger.debug("%s(%s, %s, %s): backward recurrence in a", site, a, b, z)
            return hypergeometric_1f1_backward_recurrence_a(rt, a, b, z, pol)
        if 0 < z <= -a:
            logger.debug("%s(%s, %s, %s): Bessel J series", site, a, b, z)
            value, _, exact_digits = sum_1f1_bessel_j_series(rt, a, b, z, pol)
            if rt.isfinite(value) and exact_digits >= rt.digits10 - 2:
                return value
            logger.debug(
                "%s(%s, %s, %s): Bessel J series kept %d digits, using the Taylor series", site, a, b, z, exact_digits
            )

    return _hypergeometric_1f1_checked_series(rt, a, b, z, pol)


def _terminates_before(rt, a, b) -> bool:
    """True when the upper parameter a zeroes the series before (b)_n vanishes."""
    return rt.is_nonpositive_integer(a) and a > b


def hypergeometric_1f2_imp(rt, a, b1, b2, z, pol: Policy):
    site = "hypergeometric_1f2"
    if z == 0 or a == 0:
        return rt(1)
    for b in (b1, b2):
        if rt.is_nonpositive_integer(b) and not _terminates_before(rt, a, b):
            return raise_pole_error(site, "Evaluation of 1F2 with non-positive integer b = {}.", b, pol, rt)
    if a == b1:
        return hypergeometric_0f1_imp(rt, b2, z, pol)
    if a == b2:
        return hypergeometric_0f1_imp(rt, b1, z, pol)
    return hypergeometric_1f2_generic_series(rt, a, b1, b2, z, pol)


def hypergeometric_2f0_imp(rt, a1, a2, z, pol: Policy):
    site = "hypergeometric_2f0"
    if z == 0 or a1 == 0 or a2 == 0:
        return rt(1)
    # a1 is the parameter that terminates the series first
    if rt.is_nonpositive_integer(a2) and (not rt.is_nonpositive_integer(a1) or a2 > a1):
        a1, a2 = a2, a1
    if not rt.is_nonpositive_integer(a1):
        return raise_domain_error(
            site, "2F0 diverges for z = {} unless an upper parameter is a non-positive integer.", z, pol, rt
        )
    if rt.is_nonpositive_integer(a2):
        n = int(-a1)
        logger.debug("%s(%s, %s, %s): Laguerre polynomial of degree %d", site, a1, a2, z, n)
        return (
            special.factorial(rt, n)
            * z**n
            * special.laguerre(rt, n, -a2 - n, -1 / z)
        )
    return hypergeometric_2f0_generic_series(rt, a1, a2, z, pol)


def hypergeometric_2f1_imp(rt, a1, a2, b, z, pol: Policy):
    site = "hypergeometric_2f1"
    if z == 0 or a1 == 0 or a2 == 0:
        return rt(1)
    if rt.is_nonpositive_integer(b):
        if not (_terminates_before(rt, a1, b) or _terminates_before(rt, a2, b)):
            return raise_pole_error(site, "Evaluation of 2F1 with non-positive integer b = {}.", b, pol, rt)
        return hypergeometric_2f1_generic_series(rt, a1, a2, b, z, pol)
    if a1 == b:
        return hypergeometric_1f0_imp(rt, a2, z, pol)
    if a2 == b:
        return hypergeometric_1f0_imp(rt, a1, z, pol)
    if rt.is_nonpositive_integer(a2) and (not rt.is_nonpositive_integer(a1) or a2 > a1):
        a1, a2 = a2, a1
    if rt.is_nonpositive_integer(a1):
        return hypergeometric_2f1_generic_series(rt, a1, a2, b, z, pol)
    if z == 1:
        c = b - a1 - a2
        if c <= 0:
            return raise_domain_error(site, "2F1 diverges at z = 1 when b - a1 - a2 = {} <= 0.", c, pol, rt)
        logger.debug("%s(%s, %s, %s, %s): Gauss summation", site, a1, a2, b, z)
        return special.gamma_product(rt, [b, c], [b - a1, b - a2])
    if z > 1:
        return raise_domain_error(site, "2F1 is complex for z = {} > 1.", z, pol, rt)
    if z < rt(-0.5):
        logger.debug("%s(%s, %s, %s, %s): Pfaff transformation", site, a1, a2, b, z)
        return special.pow(rt, 1 - z, -a1) * hypergeometric_2f1_imp(rt, a1, b - a2, b, z / (z - 1), pol)
    return hypergeometric_2f1_generic_series(rt, a1, a2, b, z, pol)


def hypergeometric_pfq_imp(rt, a: Sequence, b: Sequence, z, pol: Policy):
    site = "hypergeometric_pfq"
    if z == 0 or any(ai == 0 for ai in a):
        return rt(1)
    terminating = [ai for ai in a if rt.is_nonpositive_integer(ai)]
    stop = max(terminating) if terminating else None
    for bj in b:
        if rt.is_nonpositive_integer(bj) and (stop is None or not stop > bj):
            return raise_pole_error(site, "Evaluation of pFq with non-positive integer b = {}.", bj, pol, rt)
    if stop is None:
        if len(a) > len(b) + 1:
            return raise_domain_error(site, "pFq with p > q + 1 diverges for z = {}.", z, pol, rt)
        if len(a) == len(b) + 1 and abs(z) >= 1:
            return raise_domain_error(site, "pFq with p = q + 1 diverges for |z| = {} >= 1.", abs(z), pol, rt)
    return hypergeometric_pfq_generic_series(rt, a, b, z, pol)


def _evaluate(site: str, imp, args: tuple, pol: Policy | None, prec_bits: int | None = None):
    pol = resolve_policy(pol)
    rt = promote_args(*args, prec_bits=prec_bits)
    with rt.context():
        values = tuple(rt(x) for x in args)
        result = imp(rt, *values, pol)
        result = check_overflow(site, result, values, pol, rt)
    if prec_bits is not None:
        return result
    return narrow(result, args)


def hypergeometric_0f1(b, z, pol: Policy | None = None):
    return _evaluate("hypergeometric_0f1", hypergeometric_0f1_imp, (b, z), pol)


def hypergeometric_1f0(a, z, pol: Policy | None = None):
    return _evaluate("hypergeometric_1f0", hypergeometric_1f0_imp, (a, z), pol)


def hypergeometric_1f1(a, b, z, pol: Policy | None = None):
    return _evaluate("hypergeometric_1f1", hypergeometric_1f1_imp, (a, b, z), pol)


def hypergeometric_1f2(a, b1, b2, z, pol: Policy | None = None):
    return _evaluate("hypergeometric_1f2", hypergeometric_1f2_imp, (a, b1, b2, z), pol)


def hypergeometric_2f0(a1, a2, z, pol: Policy | None = None):
    return _evaluate("hypergeometric_2f0", hypergeometric_2f0_imp, (a1, a2, z), pol)


def hypergeometric_2f1(a1, a2, b, z, pol: Policy | None = None):
    return _evaluate("hypergeometric_2f1", hypergeometric_2f1_imp, (a1, a2, b, z), pol)


def _pfq_imp(p: int):
    def imp(rt, *values):
        *params, z, pol = values
        return hypergeometric_pfq_imp(rt, params[:p], params[p:], z, pol)

    return imp


def hypergeometric_pfq(a: Sequence, b: Sequence, z, pol: Policy | None = None):
    a = tuple(a)
    return _evaluate("hypergeometric_pfq", _pfq_imp(len(a)), (*a, *tuple(b), z), pol)


def _shift_imp(kernel):
    def imp(rt, a, b, z, n, pol):
        return kernel(rt, a, b, z, int(n), pol)

    return imp


def hypergeometric_1f1_shift_b(a, b, z, n: int, pol: Policy | None = None):
    """M(a, b + n, z), by Olver's algorithm from M(a, b, z) when z > 0."""
    return _evaluate("hypergeometric_1f1_shift_b", _shift_imp(hypergeometric_1f1_recurrence_b), (a, b, z, n), pol)


def hypergeometric_1f1_shift_ab(a, b, z, n: int, pol: Policy | None = None):
    """M(a + n, b + n, z), by Olver's algorithm from M(a, b, z) when z < 0."""
    return _evaluate(
        "hypergeometric_1f1_shift_ab", _shift_imp(hypergeometric_1f1_recurrence_a_and_b), (a, b, z, n), pol
    )


def hypergeometric_0f1_prec(b, z, prec_bits: int | None = None, pol: Policy | None = None):
    return _evaluate("hypergeometric_0f1", hypergeometric_0f1_imp, (b, z), pol, resolve_prec_bits(None, prec_bits))


def hypergeometric_1f0_prec(a, z, prec_bits: int | None = None, pol: Policy | None = None):
    return _evaluate("hypergeometric_1f0", hypergeometric_1f0_imp, (a, z), pol, resolve_prec_bits(None, prec_bits))


def hypergeometric_1f1_prec(a, b, z, prec_bits: int | None = None, pol: Policy | None = None):
    return _evaluate("hypergeometric_1f1", hypergeometric_1f1_imp, (a, b, z), pol, resolve_prec_bits(None, prec_bits))


def hypergeometric_1f2_prec(a, b1, b2, z, prec_bits: int | None = None, pol: Policy | None = None):
    return _evaluate(
        "hypergeometric_1f2", hypergeometric_1f2_imp, (a, b1, b2, z), pol, resolve_prec_bits(None, prec_bits)
    )


def hypergeometric_2f0_prec(a1, a2, z, prec_bits: int | None = None, pol: Policy | None = None):
    return _evaluate("hypergeometric_2f0", hypergeometric_2f0_imp, (a1, a2, z), pol, resolve_prec_bits(None, prec_bits))


def hypergeometric_2f1_prec(a1, a2, b, z, prec_bits: int | None = None, pol: Policy | None = None):
    return _evaluate(
        "hypergeometric_2f1", hypergeometric_2f1_imp, (a1, a2, b, z), pol, resolve_prec_bits(None, prec_bits)
    )


def hypergeometric_pfq_prec(a: Sequence, b: Sequence, z, prec_bits: int | None = None, pol: Policy | None = None):
    a = tuple(a)
    return _evaluate(
        "hypergeometric_pfq", _pfq_imp(len(a)), (*a, *tuple(b), z), pol, resolve_prec_bits(None, prec_bits)
    )


__all__ = [
    "hypergeometric_0f1_imp",
    "hypergeometric_1f0_imp",
    "hypergeometric_1f1_imp",
    "hypergeometric_1f2_imp",
    "hypergeometric_2f0_imp",
    "hypergeometric_2f1_imp",
    "hypergeometric_pfq_imp",
    "hypergeometric_0f1",
    "hypergeometric_1f0",
    "hypergeometric_1f1",
    "hypergeometric_1f2",
    "hypergeometric_2f0",
    "hypergeometric_2f1",
    "hypergeometric_pfq",
    "hypergeometric_1f1_shift_b",
    "hypergeometric_1f1_shift_ab",
    "hypergeometric_0f1_prec",
    "hypergeometric_1f0_prec",
    "hypergeometric_1f1_prec",
    "hypergeometric_1f2_prec",
    "hypergeometric_2f0_prec",
    "hypergeometric_2f1_prec",
    "hypergeometric_pfq_prec",
]

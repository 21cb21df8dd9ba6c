"""Large-|z| asymptotic expansion of 1F1.

For z > 0

    M(a, b, z) ~ G(b)/G(a) e^z z^(a-b) S_a + G(b)/G(b-a) cos(pi a) z^(-a) S_b

and for z < 0

    M(a, b, z) ~ G(b)/G(b-a) (-z)^(-a) S_b + G(b)/G(a) cos(pi (b-a)) e^z (-z)^(a-b) S_a

with S_a = sum (b-a)_n (1-a)_n / (n! z^n) and S_b = sum (a)_n (1+a-b)_n / (n! (-z)^n).
Both sums are divergent, so summation stops at the smallest term.
"""

from __future__ import annotations

import logging

from . import special
from .policy import Policy, check_series_iterations
from .series import sum_series

logger = logging.getLogger(__name__)


class Hypergeometric1F1AsymTermA:
    def __init__(self, a, b, z):
        self.n = 0
        self.b_sub_a = b - a
        self.one_sub_a = 1 - a
        self.z = z
        self.term = type(z)(1)

    def __iter__(self):
        return self

    def __next__(self):
        result = self.term
        self.n += 1
        self.term = self.term * (self.b_sub_a * self.one_sub_a) / (self.n * self.z)
        self.b_sub_a = self.b_sub_a + 1
        self.one_sub_a = self.one_sub_a + 1
        return result


class Hypergeometric1F1AsymTermB:
    def __init__(self, a, b, z):
        self.n = 0
        self.a = a
        self.one_plus_a_sub_b = 1 + a - b
        self.z = z
        self.term = type(z)(1)

    def __iter__(self):
        return self

    def __next__(self):
        result = self.term
        self.n += 1
        self.term = self.term * -(self.a * self.one_plus_a_sub_b) / (self.n * self.z)
        self.a = self.a + 1
        self.one_plus_a_sub_b = self.one_plus_a_sub_b + 1
        return result


class _StopAtSmallestTerm:
    """Yield terms until they start to grow, then zeros."""

    def __init__(self, terms):
        self.terms = terms
        self.previous = None
        self.diverged = False

    def __iter__(self):
        return self

    def __next__(self):
        t = next(self.terms)
        if self.diverged:
            return t * 0
        if self.previous is not None and abs(t) > abs(self.previous):
            self.diverged = True
            return t * 0
        self.previous = t
        return t


def _decays_below(terms, target, max_steps: int) -> bool:
    previous = None
    for _ in range(max_steps):
        t = abs(next(terms))
        if t < target:
            return True
        if previous is not None and t > previous:
            return False
        previous = t
    return False


def _has_gamma_pole(rt, a, b) -> bool:
    return rt.is_nonpositive_integer(a) or rt.is_nonpositive_integer(b) or rt.is_nonpositive_integer(b - a)


def hypergeometric_1f1_asym_region(rt, a, b, z, pol: Policy) -> bool:
    """True when both asymptotic series reach epsilon before diverging.

    Cheap first-ratio tests reject most arguments; the remaining ones are
    checked by running the term recurrences, so the region shrinks as the
    precision of ``rt`` grows.
    """
    if abs(z) < pol.asym_min_z:
        return False
    if _has_gamma_pole(rt, a, b):
        return False
    b_minus_a = b - a
    if abs(b_minus_a * (1 - a) / z) >= pol.asym_decay_ratio:
        return False
    if abs(a * (1 + a - b) / z) >= pol.asym_decay_ratio:
        return False
    # early divergence
    if abs((b_minus_a + 1) * (2 - a) / (2 * z)) > 0.5 or abs((a + 1) * (2 + a - b) / (2 * z)) > 0.5:
        return False
    max_steps = min(int(abs(z)) + 16, pol.max_series_iterations)
    eps = rt.epsilon
    return _decays_below(Hypergeometric1F1AsymTermA(a, b, z), eps, max_steps) and _decays_below(
        Hypergeometric1F1AsymTermB(a, b, z), eps, max_steps
    )


def _sum_asym(rt, terms, pol: Policy, site: str):
    result, used = sum_series(_StopAtSmallestTerm(terms), rt.epsilon, pol.max_series_iterations)
    logger.debug("%s: %d terms", site, used)
    return check_series_iterations(site, used, pol, rt, result)


def hypergeometric_1f1_asym_large_z_positive(rt, a, b, z, pol: Policy):
    site = "hypergeometric_1f1_asym_large_z_positive"
    lg_b, sg_b = special.lgamma(rt, b)
    lg_a, sg_a = special.lgamma(rt, a)
    lg_ba, sg_ba = special.lgamma(rt, b - a)
    log_z = special.log(rt, z)

    prefix_a = (sg_b * sg_a) * special.exp(rt, (lg_b - lg_a + z) + (a - b) * log_z)
    s_a = _sum_asym(rt, Hypergeometric1F1AsymTermA(a, b, z), pol, site)

    prefix_b = (sg_b * sg_ba) * special.cos_pi(rt, a) * special.exp(rt, (lg_b - lg_ba) - a * log_z)
    s_b = _sum_asym(rt, Hypergeometric1F1AsymTermB(a, b, z), pol, site)

    return prefix_a * s_a + prefix_b * s_b


def hypergeometric_1f1_asym_large_z_negative(rt, a, b, z, pol: Policy):
    site = "hypergeometric_1f1_asym_large_z_negative"
    lg_b, sg_b = special.lgamma(rt, b)
    lg_a, sg_a = special.lgamma(rt, a)
    lg_ba, sg_ba = special.lgamma(rt, b - a)
    log_mz = special.log(rt, -z)

    prefix_b = (sg_b * sg_ba) * special.exp(rt, (lg_b - lg_ba) - a * log_mz)
    s_b = _sum_asym(rt, Hypergeometric1F1AsymTermB(a, b, z), pol, site)

    prefix_a = (sg_b * sg_a) * special.cos_pi(rt, b - a) * special.exp(rt, (lg_b - lg_a + z) + (a - b) * log_mz)
    s_a = _sum_asym(rt, Hypergeometric1F1AsymTermA(a, b, z), pol, site)

    return prefix_b * s_b + prefix_a * s_a


__all__ = [
    "Hypergeometric1F1AsymTermA",
    "Hypergeometric1F1AsymTermB",
    "hypergeometric_1f1_asym_region",
    "hypergeometric_1f1_asym_large_z_positive",
    "hypergeometric_1f1_asym_large_z_negative",
]

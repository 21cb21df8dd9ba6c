"""Bessel-function relations for 0F1 and 1F1.

``cyl_bessel_j_sequence`` produces J_{v0+i}(x) for consecutive orders by
recursing downwards from a high order seeded with (0, 1) and normalizing with
the Neumann sum

    (x/2)^v = sum_k (v + 2k) G(v + k) / k! J_{v+2k}(x),    0 <= v < 1.

Orders below the fractional part are reached by continuing the same recursion,
which is the growing direction for negative orders.
"""

from __future__ import annotations

import logging
import math

from . import checks
from . import special
from .policy import Policy, check_series_iterations, resolve_policy
from .series import sum_cancelled_series

logger = logging.getLogger(__name__)

_MIN_RECURSION_DEPTH = 14


def _log_leading_term(m: int, log_half_x: float) -> float:
    return m * log_half_x - math.lgamma(m + 1)


def bessel_recursion_depth(rt, x, top_order: int, pol: Policy | None = None) -> int:
    """Starting order for the downward recursion.

    The smallest even M above both ``top_order`` and ``x`` for which the leading
    term (x/2)^M / M! of J_M(x), relative to that of the highest requested
    order, is below the epsilon of ``rt``.
    """
    pol = resolve_policy(pol)
    if pol.bessel_recursion_depth is not None:
        depth = max(pol.bessel_recursion_depth, top_order + 2)
        return depth + (depth % 2)
    log_half_x = math.log(float(x) / 2)
    log_eps = -rt.digits * math.log(2)
    top = max(top_order, 0)
    base = min(_log_leading_term(top, log_half_x), 0.0)
    m = max(top + 2, int(math.ceil(float(x))) + 2, _MIN_RECURSION_DEPTH)
    while _log_leading_term(m, log_half_x) - base >= log_eps:
        m += 1
    return m + (m % 2)


def cyl_bessel_j_sequence(rt, v0, count: int, x, pol: Policy | None = None) -> list:
    """Return ``[J_{v0}(x), J_{v0+1}(x), ..., J_{v0+count-1}(x)]`` for ``x > 0``."""
    checks.check_positive_int(count, "cyl_bessel_j_sequence.count")
    checks.check_positive(x, "cyl_bessel_j_sequence.x")
    base = int(rt.floor(v0))
    v_frac = v0 - base
    lo = base
    hi = base + count - 1
    depth = bessel_recursion_depth(rt, x, hi, pol)
    logger.debug("bessel downward recursion: order %s, depth %d", v0, depth)

    big_exponent = rt.max_exponent // 2
    two_over_x = 2 / x

    # Gamma(v + k) / k! at k = depth / 2, stepped down alongside the recursion.
    k = depth // 2
    g_k = special.tgamma_ratio(rt, v_frac + k, rt(k + 1))
    j_p2 = rt(0)
    j_p1 = rt(1)
    neumann = (v_frac + 2 * k) * g_k * j_p1
    stored = [j_p1] if lo <= depth <= hi else []

    for m in range(depth - 1, min(lo, 0) - 1, -1):
        jv = ((v_frac + (m + 1)) * j_p1) * two_over_x - j_p2
        j_p2 = j_p1
        j_p1 = jv
        if lo <= m <= hi:
            stored.append(jv)
        if m >= 0 and m % 2 == 0:
            if m == 0:
                coef = g_k
            else:
                g_k = g_k * k / (v_frac + (k - 1))
                k -= 1
                coef = (v_frac + m) * g_k
            neumann = neumann + coef * jv
        if jv and rt.exponent(jv) > big_exponent:
            scale = rt(2) ** (-rt.exponent(jv))
            j_p1 = j_p1 * scale
            j_p2 = j_p2 * scale
            neumann = neumann * scale
            stored = [s * scale for s in stored]

    norm = special.pow(rt, x / 2, v_frac) / neumann
    stored.reverse()
    return [s * norm for s in stored]


def cyl_bessel_j_stable_recursion_down(rt, v, x, pol: Policy | None = None):
    return cyl_bessel_j_sequence(rt, v, 1, x, pol)[0]


class BesselJSequence:
    """J_{v0+n}(x) on demand; the table is recomputed with twice the length when exhausted."""

    def __init__(self, rt, v0, x, pol: Policy, chunk: int = 32):
        self.rt = rt
        self.v0 = v0
        self.x = x
        self.pol = pol
        self.chunk = chunk
        self.values: list = []

    def __getitem__(self, n: int):
        if n >= len(self.values):
            size = max(2 * len(self.values), n + 1, self.chunk)
            self.values = cyl_bessel_j_sequence(self.rt, self.v0, size, self.x, self.pol)
        return self.values[n]


def hypergeometric_0f1_bessel(rt, b, z):
    """0F1(; b; z) = G(b) s^(1-b) I_{b-1}(2s) for z > 0, J_{b-1} for z < 0, s = sqrt|z|."""
    is_z_nonpositive = z <= 0
    sqrt_z = special.sqrt(rt, -z if is_z_nonpositive else z)
    if is_z_nonpositive:
        bessel_mult = special.cyl_bessel_j(rt, b - 1, 2 * sqrt_z)
    else:
        bessel_mult = special.cyl_bessel_i(rt, b - 1, 2 * sqrt_z)
    return ((special.tgamma(rt, b) * sqrt_z) / special.pow(rt, sqrt_z, b)) * bessel_mult


class Hypergeometric1F1BesselJTerm:
    """Terms C_n z^n (-a z)^(-n/2) J_{b-1+n}(2 sqrt(-a z)) of the expansion

    M(a, b, z) = G(b) e^(h z) (-a z)^((1-b)/2) sum_n C_n z^n (-a z)^(-n/2) J_{b-1+n}(2 sqrt(-a z))

    with (n+1) C_{n+1} = ((1-2h) n - b h) C_n + ((1-2h) a - h (h-1) (b+n-1)) C_{n-1}
    - h (h-1) a C_{n-2}. Requires a z < 0.
    """

    def __init__(self, rt, a, b, z, h, pol: Policy):
        self.a = a
        self.b = b
        self.h = h
        sqrt_minus_az = special.sqrt(rt, -a * z)
        self.q = z / sqrt_minus_az
        self.q_pow = rt(1)
        self.bessel = BesselJSequence(rt, b - 1, 2 * sqrt_minus_az, pol)
        one_minus_two_h = 1 - 2 * h
        self.c = [rt(1), -b * h, ((one_minus_two_h * a) + ((b * (b + 1)) * (h * h))) / 2]
        self.n = 0

    def __iter__(self):
        return self

    def _next_coefficient(self, m: int):
        a, b, h = self.a, self.b, self.h
        one_minus_two_h = 1 - 2 * h
        h_h_minus_one = h * (h - 1)
        c_nm2, c_nm1, c_n = self.c
        term_n = ((one_minus_two_h * m) - (b * h)) * c_n
        term_nm1 = ((one_minus_two_h * a) - (h_h_minus_one * (b + (m - 1)))) * c_nm1
        term_nm2 = -(h_h_minus_one * a) * c_nm2
        return ((term_n + term_nm1) + term_nm2) / (m + 1)

    def __next__(self):
        n = self.n
        result = (self.c[0] * self.q_pow) * self.bessel[n]
        self.c = [self.c[1], self.c[2], self._next_coefficient(n + 2)]
        self.q_pow = self.q_pow * self.q
        self.n += 1
        return result


def sum_1f1_bessel_j_series(rt, a, b, z, pol: Policy):
    """Abramowitz & Stegun 13.3.8 with h = -pi/10, for a z < 0.

    Returns ``(value, n_used, exact_digits10)``. The prefactor
    G(b) e^(h z) (-a z)^((1-b)/2) is formed in log space so that it stays
    normal when its factors do not.
    """
    site = "hypergeometric_1f1_bessel_j_series"
    h = -special.pi(rt) / 10
    sqrt_minus_az = special.sqrt(rt, -a * z)
    log_gamma_b, sign = special.lgamma(rt, b)
    prefix = sign * special.exp(rt, (log_gamma_b + h * z) + (1 - b) * special.log(rt, sqrt_minus_az))
    terms = Hypergeometric1F1BesselJTerm(rt, a, b, z, h, pol)
    result, used, exact_digits = sum_cancelled_series(terms, rt.epsilon, pol.max_series_iterations, rt)
    logger.debug("%s: %d terms, %d exact digits", site, used, exact_digits)
    return prefix * check_series_iterations(site, used, pol, rt, result), used, exact_digits


def hypergeometric_1f1_bessel_j_series(rt, a, b, z, pol: Policy):
    """Abramowitz & Stegun 13.3.8 with h = -pi/10, for a z < 0."""
    return sum_1f1_bessel_j_series(rt, a, b, z, pol)[0]


__all__ = [
    "bessel_recursion_depth",
    "cyl_bessel_j_sequence",
    "cyl_bessel_j_stable_recursion_down",
    "BesselJSequence",
    "hypergeometric_0f1_bessel",
    "Hypergeometric1F1BesselJTerm",
    "sum_1f1_bessel_j_series",
    "hypergeometric_1f1_bessel_j_series",
]

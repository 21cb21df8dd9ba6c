"""1F1(1; b; z) from its corresponding continued fraction.

    M(1, b, z) = 1 / (1 + d_1 / (1 + d_2 / (1 + ...)))

    d_1 = -z / b
    d_2m = m z / ((b + 2m - 2)(b + 2m - 1))
    d_2m+1 = -(b + m - 1) z / ((b + 2m - 1)(b + 2m))

The convergents are the staircase Pade approximants of the Taylor series and
are evaluated forwards with the Wallis recurrence, rescaled to stay in range.
"""

from __future__ import annotations

import logging

from .policy import Policy, check_series_iterations

logger = logging.getLogger(__name__)


def _partial_numerator(b, z, k: int):
    if k == 1:
        return -z / b
    m = k // 2
    if k % 2 == 0:
        return (m * z) / ((b + (2 * m - 2)) * (b + (2 * m - 1)))
    return -((b + (m - 1)) * z) / ((b + (2 * m - 1)) * (b + 2 * m))


def hypergeometric_1f1_pade(rt, b, z, pol: Policy):
    site = "hypergeometric_1f1_pade"
    big = rt(2) ** rt.digits
    biginv = 1 / big
    eps = rt.epsilon

    # convergent 1 is 1/1, convergent 2 is 1/(1 + d_1)
    pkm2, qkm2 = rt(1), rt(1)
    pkm1, qkm1 = rt(1), 1 + _partial_numerator(b, z, 1)
    ans = pkm1 / qkm1 if qkm1 else pkm1 * 0
    k = 2
    while True:
        d = _partial_numerator(b, z, k)
        pk = pkm1 + d * pkm2
        qk = qkm1 + d * qkm2
        if qk:
            r = pk / qk
            converged = abs(ans - r) <= eps * abs(r)
            ans = r
        else:
            converged = False
        pkm2, pkm1 = pkm1, pk
        qkm2, qkm1 = qkm1, qk
        if abs(pk) > big or abs(qk) > big:
            pkm2 = pkm2 * biginv
            pkm1 = pkm1 * biginv
            qkm2 = qkm2 * biginv
            qkm1 = qkm1 * biginv
        elif abs(pk) < biginv and abs(qk) < biginv:
            pkm2 = pkm2 * big
            pkm1 = pkm1 * big
            qkm2 = qkm2 * big
            qkm1 = qkm1 * big
        if converged or k >= pol.max_series_iterations:
            break
        k += 1
    logger.debug("%s: %d partial numerators", site, k)
    return check_series_iterations(site, k, pol, rt, ans)


__all__ = ["hypergeometric_1f1_pade"]

"""Olver's algorithm for three-term recurrences.

Solves ``a_n w_{n+1} - b_n w_n + c_n w_{n-1} = 0`` for the minimal solution
normalized by ``w_0 = init_value``. Coefficients come either from an iterator
of ``(a_n, b_n, c_n)`` triples starting at ``n = 0`` or, for the windowed
solver, from a callable ``coef_fn(n)`` indexed by absolute position.

Forward phase: ``p`` solves the homogeneous recurrence from ``p_0 = 0``,
``p_1 = 1`` and ``e_n = c_n e_{n-1} / a_n``. The forward phase continues while
``|e_{n-1} / (p_{n-1} p_n)|`` is larger than ``factor`` times its smallest
value seen up to the requested index. Backward phase:
``w_{k-1} = (p_{k-1} w_k + e_{k-1}) / p_k`` from ``w_N = 0``.
"""

from __future__ import annotations

import logging
from itertools import count
from typing import Callable, Iterable

from . import checks

logger = logging.getLogger(__name__)


def _is_triple(coefs) -> bool:
    return isinstance(coefs, tuple) and len(coefs) == 3


def _abs_ratio(num, den):
    if not den:
        return None
    return abs(num / den)


def _forward(coefs, factor, index: int, unit, max_terms: int, overflow_exponent, exponent):
    an, bn, cn = next(coefs)
    p = [unit * 0, unit]
    e = [unit, (cn * unit) / an]
    min_check = None
    track_until = max(index, 2)
    i = 2
    overflowed = False
    while True:
        next_p = ((bn * p[i - 1]) - (cn * p[i - 2])) / an
        an, bn, cn = next(coefs)
        next_e = (cn * e[i - 1]) / an
        p.append(next_p)
        e.append(next_e)

        check = _abs_ratio(e[i - 1], p[i - 1] * p[i])
        if check is not None and i <= track_until and (min_check is None or check < min_check):
            min_check = check
        if overflow_exponent is not None and next_p and exponent(next_p) > overflow_exponent:
            overflowed = True
            break
        if i >= max_terms:
            break
        # an underflowed check is convergence only once index is inside the pass
        if i > index and check is not None and min_check is not None and not check > abs(factor * min_check):
            break
        i += 1
    return p, e, overflowed


def _backward(p: list, e: list, index: int):
    k = len(p) - 1
    w = p[k] * 0
    while k > index:
        w = (p[k - 1] * w + e[k - 1]) / p[k]
        k -= 1
    return w


def solve_recurrence_relation_by_olver(
    coefs: Iterable, factor, index: int, init_value, max_terms: int = 1_000_000
):
    """Return ``(w_index, n_used)``.

    The first coefficient triple (``n = 0``) is consumed without being used since
    ``p_1 = 1`` fixes the start of the forward pass. A coefficient source that
    does not produce 3-tuples is not a homogeneous recurrence and yields
    ``(0, 0)``.
    """
    checks.check_nonnegative_int(index, "solve_recurrence_relation_by_olver.index")
    coefs = iter(coefs)
    first = next(coefs)
    if not _is_triple(first):
        return init_value * 0, 0
    if index == 0:
        return init_value, 0
    p, e, _ = _forward(coefs, factor, index, init_value * 0 + 1, max_terms, None, None)
    top = len(p) - 1
    if top <= index:
        return init_value * 0, top
    return init_value * _backward(p, e, index), top


def solve_recurrence_relation_by_olver_windowed(
    coef_fn: Callable[[int], tuple],
    factor,
    index: int,
    init_value,
    rt,
    max_terms: int = 1_000_000,
):
    """Olver's algorithm with the forward pass cut short before ``p`` overflows.

    When ``p_n`` reaches half the exponent range of ``rt`` the window ends there.
    If the requested index lies in the first half of the window it is solved
    directly; otherwise the solution at the middle of the window becomes the
    seed of a fresh window starting at that position. Windows run one after the
    other until ``index`` is reached. Each window runs from a unit seed and is
    scaled afterwards, so a tiny seed cannot underflow the convergence check.
    Returns ``(w_index, n_used)``; when ``max_terms`` runs out before ``index``
    is inside a window the value is NaN.
    """
    checks.check_nonnegative_int(index, "solve_recurrence_relation_by_olver_windowed.index")
    if not _is_triple(coef_fn(0)):
        return init_value * 0, 0
    overflow_exponent = rt.max_exponent // 2
    unit = rt(1)
    start = 0
    seed = init_value
    used = 0
    while True:
        remaining = index - start
        if remaining == 0:
            return seed, used
        coefs = (coef_fn(start + j) for j in count(1))
        p, e, overflowed = _forward(
            coefs, factor, remaining, unit, max_terms - used, overflow_exponent, rt.exponent
        )
        top = len(p) - 1
        used += top
        if remaining < top and (not overflowed or remaining <= top // 2):
            return seed * _backward(p, e, remaining), used
        if used >= max_terms:
            return rt.nan(), used
        target = max(1, top // 2)
        seed = seed * _backward(p, e, target)
        logger.debug(
            "olver window overflow at n=%d, restarting from n=%d", start + top, start + target
        )
        start += target


__all__ = ["solve_recurrence_relation_by_olver", "solve_recurrence_relation_by_olver_windowed"]

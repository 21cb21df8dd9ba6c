"""Term-by-term summation of lazily generated series.

Term generators are plain iterators. The summation helpers pull terms until
the relative size of the last term falls to ``factor`` or until ``max_terms``
terms have been used, and report how many terms that took. The stopping rule
is evaluated as ``|term| > |factor * result|`` so that a zero partial sum stops
the loop instead of dividing by zero.
"""

from __future__ import annotations

from typing import Iterator


def sum_series(terms: Iterator, factor, max_terms: int, init_value=0):
    """Return ``(result, n_used)``; ``n_used == max_terms`` means the cap was hit."""
    counter = max_terms
    result = init_value
    while True:
        next_term = next(terms)
        result = result + next_term
        if not abs(next_term) > abs(factor * result):
            break
        counter -= 1
        if counter == 0:
            break
    return result, max_terms - counter


def sum_series_bits(terms: Iterator, bits: int, max_terms: int, init_value, rt):
    factor = rt(2) ** (1 - bits)
    return sum_series(terms, factor, max_terms, init_value)


def sum_cancelled_series(terms: Iterator, factor, max_terms: int, rt, init_value=0):
    """Sum like :func:`sum_series` and estimate the decimal digits that survived.

    The number of lost binary digits is approximated by the exponent gap between
    the largest term seen and the final sum. Returns
    ``(result, n_used, exact_digits10)``.
    """
    counter = max_terms
    result = init_value
    max_term = abs(rt(init_value))
    while True:
        next_term = next(terms)
        abs_term = abs(next_term)
        if abs_term > max_term:
            max_term = abs_term
        result = result + next_term
        if not abs(next_term) > abs(factor * result):
            break
        counter -= 1
        if counter == 0:
            break
    if result:
        lost = rt.exponent(max_term) - rt.exponent(result)
        exact_bits = max(rt.digits - lost, 0)
    else:
        exact_bits = 0
    return result, max_terms - counter, (exact_bits * 30103) // 100000


def kahan_sum_series(terms: Iterator, bits: int, max_terms: int, rt):
    """Compensated summation; stops once a term is below ``2**-bits`` of the sum.

    The first term seeds the sum. Returns ``(result, n_used)``.
    """
    counter = max_terms
    factor = rt(2) ** bits
    result = next(terms)
    carry = rt(0)
    while True:
        next_term = next(terms)
        y = next_term - carry
        t = result + y
        carry = (t - result) - y
        result = t
        if not abs(result) < abs(factor * next_term):
            break
        counter -= 1
        if counter == 0:
            break
    return result, max_terms - counter


__all__ = ["sum_series", "sum_series_bits", "sum_cancelled_series", "kahan_sum_series"]

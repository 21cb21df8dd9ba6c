"""Recurrences of 1F1 in its parameters.

``hypergeometric_1f1_backward_recurrence_a`` steps ``a`` downwards with the
contiguous relation

    (b - a) M(a-1) + (2a - b + z) M(a) - a M(a+1) = 0

starting from the fractional part of ``a``. The shifts in ``b`` and in ``a, b``
use Olver's algorithm, for which ``M(a, b+n, z)`` and ``M(a+n, b+n, z)`` are the
minimal solutions. The dominant solution of the ``b`` recurrence behaves like
``prod (b+k)/z`` and that of the ``a, b`` recurrence like ``prod -(b+k)/z``;
where it alternates in sign the forward pass cancels and the shifted value is
evaluated directly.
"""

from __future__ import annotations

import logging
from itertools import count

from .policy import Policy, check_series_iterations
from .recurrence import solve_recurrence_relation_by_olver_windowed

logger = logging.getLogger(__name__)


def hypergeometric_1f1_backward_recurrence_a(rt, a, b, z, pol: Policy):
    from .hypergeometric import hypergeometric_1f1_imp

    ak, integer_part = rt.modf(a)
    first = hypergeometric_1f1_imp(rt, ak, b, z, pol)
    ak = ak - 1
    second = hypergeometric_1f1_imp(rt, ak, b, z, pol)
    last = int(abs(integer_part))
    logger.debug("1f1 backward recurrence in a: %d steps", last)
    for _ in range(last):
        an = (ak - b) / ak
        bn = (((2 * ak) - b) + z) / ak
        third = ((bn * second) - first) / an
        ak = ak - 1
        first, second = second, third
    return first


class Hypergeometric1F1RecurrenceBCoefficients:
    """Coefficients of the recurrence satisfied by ``M(a, b+n, z)``."""

    def __init__(self, a, b, z):
        self.a = a
        self.b = b
        self.z = z

    def __call__(self, n: int) -> tuple:
        bn = self.b + n
        return (self.z * (bn - self.a), bn * ((self.z + bn) - 1), bn * (bn - 1))

    def __iter__(self):
        return map(self, count())


class Hypergeometric1F1RecurrenceABCoefficients:
    """Coefficients of the recurrence satisfied by ``M(a+n, b+n, z)``."""

    def __init__(self, a, b, z):
        self.a = a
        self.b = b
        self.z = z

    def __call__(self, n: int) -> tuple:
        an = self.a + n
        bn = self.b + n
        return (an * self.z, bn * ((1 - bn) + self.z), bn * (1 - bn))

    def __iter__(self):
        return map(self, count())


def _shift(rt, coefs, n: int, init, pol: Policy, site: str):
    value, used = solve_recurrence_relation_by_olver_windowed(
        coefs, rt.epsilon, n, init, rt, pol.max_series_iterations
    )
    logger.debug("%s: %d recurrence steps", site, used)
    return check_series_iterations(site, used, pol, rt, value)


def hypergeometric_1f1_recurrence_b(rt, a, b, z, n: int, pol: Policy, init=None):
    """``M(a, b+n, z)`` from ``init = M(a, b, z)``.

    For ``z < 0`` the dominant solution alternates in sign, the backward sums
    cancel, and ``M(a, b+n, z)`` is evaluated directly instead.
    """
    from .hypergeometric import hypergeometric_1f1_imp

    if n == 0 and init is not None:
        return init
    if z < 0:
        logger.debug("hypergeometric_1f1_recurrence_b: z < 0, direct evaluation at b + %d", n)
        return hypergeometric_1f1_imp(rt, a, b + n, z, pol)
    if init is None:
        init = hypergeometric_1f1_imp(rt, a, b, z, pol)
    coefs = Hypergeometric1F1RecurrenceBCoefficients(a, b, z)
    return _shift(rt, coefs, n, init, pol, "hypergeometric_1f1_recurrence_b")


def hypergeometric_1f1_recurrence_a_and_b(rt, a, b, z, n: int, pol: Policy, init=None):
    """``M(a+n, b+n, z)`` from ``init = M(a, b, z)``.

    For ``z > 0`` the dominant solution alternates in sign, so the shifted
    value is evaluated directly.
    """
    from .hypergeometric import hypergeometric_1f1_imp

    if n == 0 and init is not None:
        return init
    if z > 0:
        logger.debug("hypergeometric_1f1_recurrence_a_and_b: z > 0, direct evaluation at a + %d, b + %d", n, n)
        return hypergeometric_1f1_imp(rt, a + n, b + n, z, pol)
    if init is None:
        init = hypergeometric_1f1_imp(rt, a, b, z, pol)
    coefs = Hypergeometric1F1RecurrenceABCoefficients(a, b, z)
    return _shift(rt, coefs, n, init, pol, "hypergeometric_1f1_recurrence_a_and_b")


__all__ = [
    "hypergeometric_1f1_backward_recurrence_a",
    "Hypergeometric1F1RecurrenceBCoefficients",
    "Hypergeometric1F1RecurrenceABCoefficients",
    "hypergeometric_1f1_recurrence_b",
    "hypergeometric_1f1_recurrence_a_and_b",
]

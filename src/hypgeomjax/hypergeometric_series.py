"""Taylor series term generators for the pFq families.

Each generator starts at the zeroth coefficient (``term = 1``), returns the
current term and then advances it by the ratio ``c_{n+1} / c_n``. Once a term
becomes exactly zero (a non-positive integer upper parameter) the generator
stays at zero so that later denominator zeros are never reached.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from . import series
from .policy import Policy, check_series_iterations

logger = logging.getLogger(__name__)


class _SeriesTerm(ABC):
    def __init__(self, z):
        self.n = 0
        self.term = type(z)(1)
        self.z = z

    def __iter__(self):
        return self

    def __next__(self):
        r = self.term
        if r:
            self.term = r * self._ratio(self.n)
        self.n += 1
        return r

    @abstractmethod
    def _ratio(self, n: int):
        """c_{n+1} / c_n."""


class Hypergeometric0F1Term(_SeriesTerm):
    def __init__(self, b, z):
        super().__init__(z)
        self.b = b

    def _ratio(self, n):
        return self.z / ((self.b + n) * (n + 1))


class Hypergeometric1F0Term(_SeriesTerm):
    def __init__(self, a, z):
        super().__init__(z)
        self.a = a

    def _ratio(self, n):
        return (self.a + n) * self.z / (n + 1)


class Hypergeometric1F1Term(_SeriesTerm):
    def __init__(self, a, b, z):
        super().__init__(z)
        self.a = a
        self.b = b

    def _ratio(self, n):
        return ((self.a + n) / ((self.b + n) * (n + 1))) * self.z


class Hypergeometric1F2Term(_SeriesTerm):
    def __init__(self, a, b1, b2, z):
        super().__init__(z)
        self.a = a
        self.b1 = b1
        self.b2 = b2

    def _ratio(self, n):
        return ((self.a + n) / ((self.b1 + n) * (self.b2 + n) * (n + 1))) * self.z


class Hypergeometric2F0Term(_SeriesTerm):
    def __init__(self, a1, a2, z):
        super().__init__(z)
        self.a1 = a1
        self.a2 = a2

    def _ratio(self, n):
        return ((self.a1 + n) * (self.a2 + n) / (n + 1)) * self.z


class Hypergeometric2F1Term(_SeriesTerm):
    def __init__(self, a1, a2, b, z):
        super().__init__(z)
        self.a1 = a1
        self.a2 = a2
        self.b = b

    def _ratio(self, n):
        return ((self.a1 + n) * (self.a2 + n) / ((self.b + n) * (n + 1))) * self.z


class HypergeometricPFQTerm(_SeriesTerm):
    """Arbitrary (p, q) Taylor term with the parameters held as running Pochhammer factors."""

    def __init__(self, a: Sequence, b: Sequence, z):
        super().__init__(z)
        self.a = list(a)
        self.b = list(b)

    def _ratio(self, n):
        num = self.z
        for ai in self.a:
            num = num * (ai + n)
        den = type(self.z)(n + 1)
        for bi in self.b:
            den = den * (bi + n)
        return num / den


def sum_pfq_series(rt, terms, pol: Policy, site: str):
    result, used = series.sum_series(terms, rt.epsilon, pol.max_series_iterations)
    logger.debug("%s: %d terms", site, used)
    return check_series_iterations(site, used, pol, rt, result)


def hypergeometric_0f1_generic_series(rt, b, z, pol: Policy):
    return sum_pfq_series(rt, Hypergeometric0F1Term(b, z), pol, "hypergeometric_0f1_generic_series")


def hypergeometric_1f0_generic_series(rt, a, z, pol: Policy):
    return sum_pfq_series(rt, Hypergeometric1F0Term(a, z), pol, "hypergeometric_1f0_generic_series")


def hypergeometric_1f1_generic_series(rt, a, b, z, pol: Policy):
    return sum_pfq_series(rt, Hypergeometric1F1Term(a, b, z), pol, "hypergeometric_1f1_generic_series")


def hypergeometric_1f2_generic_series(rt, a, b1, b2, z, pol: Policy):
    return sum_pfq_series(rt, Hypergeometric1F2Term(a, b1, b2, z), pol, "hypergeometric_1f2_generic_series")


def hypergeometric_2f0_generic_series(rt, a1, a2, z, pol: Policy):
    return sum_pfq_series(rt, Hypergeometric2F0Term(a1, a2, z), pol, "hypergeometric_2f0_generic_series")


def hypergeometric_2f1_generic_series(rt, a1, a2, b, z, pol: Policy):
    return sum_pfq_series(rt, Hypergeometric2F1Term(a1, a2, b, z), pol, "hypergeometric_2f1_generic_series")


def hypergeometric_pfq_generic_series(rt, a: Sequence, b: Sequence, z, pol: Policy):
    return sum_pfq_series(rt, HypergeometricPFQTerm(a, b, z), pol, "hypergeometric_pfq_generic_series")


__all__ = [
    "Hypergeometric0F1Term",
    "Hypergeometric1F0Term",
    "Hypergeometric1F1Term",
    "Hypergeometric1F2Term",
    "Hypergeometric2F0Term",
    "Hypergeometric2F1Term",
    "HypergeometricPFQTerm",
    "sum_pfq_series",
    "hypergeometric_0f1_generic_series",
    "hypergeometric_1f0_generic_series",
    "hypergeometric_1f1_generic_series",
    "hypergeometric_1f2_generic_series",
    "hypergeometric_2f0_generic_series",
    "hypergeometric_2f1_generic_series",
    "hypergeometric_pfq_generic_series",
]

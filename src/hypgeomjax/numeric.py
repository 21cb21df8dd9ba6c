from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from functools import lru_cache
from math import floor as _pyfloor

import mpmath
import numpy as np

from . import precision


class RealType(ABC):
    """Introspection and rounding helpers for one evaluation type.

    Every kernel receives a ``RealType`` next to its arguments and performs its
    arithmetic inside ``rt.context()``. Values never leave the type: constants
    are converted with ``rt(x)`` before they meet an argument.
    """

    is_mpf = False
    name = "real"
    digits = 53
    max_exponent = 1024

    @property
    def digits10(self) -> int:
        return max(int(_pyfloor((self.digits - 1) * 0.30102999566398120)), 1)

    @abstractmethod
    def __call__(self, x):
        ...

    @abstractmethod
    def context(self):
        ...

    @abstractmethod
    def to_mpf(self, x, ctx=mpmath.mp):
        """Convert to an mpf of ``ctx`` without rounding."""

    @abstractmethod
    def from_mpf(self, x, ctx=mpmath.mp):
        ...

    @property
    @abstractmethod
    def epsilon(self):
        ...

    @property
    @abstractmethod
    def max_value(self):
        ...

    @abstractmethod
    def nan(self):
        ...

    @abstractmethod
    def inf(self):
        ...

    @abstractmethod
    def floor(self, x):
        ...

    @abstractmethod
    def ceil(self, x):
        ...

    def modf(self, x):
        """Return ``(fractional, integral)`` parts, both carrying the sign of x."""
        ip = self.floor(x) if x >= 0 else self.ceil(x)
        return x - ip, ip

    def fabs(self, x):
        return abs(x)

    @abstractmethod
    def exponent(self, x) -> int:
        ...

    @abstractmethod
    def isfinite(self, x) -> bool:
        ...

    @abstractmethod
    def isnan(self, x) -> bool:
        ...

    def is_integer(self, x) -> bool:
        return bool(self.isfinite(x) and self.floor(x) == x)

    def is_nonpositive_integer(self, x) -> bool:
        return bool(x <= 0 and self.is_integer(x))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class NumpyRealType(RealType):
    def __init__(self, dtype):
        self.dtype = np.dtype(dtype).type
        info = np.finfo(self.dtype)
        self.name = np.dtype(dtype).name
        self.digits = int(info.nmant) + 1
        self.max_exponent = int(info.maxexp)
        self._eps = self.dtype(info.eps)
        self._max = self.dtype(info.max)

    def __call__(self, x):
        if isinstance(x, mpmath.mpf):
            return self.from_mpf(x)
        return self.dtype(x)

    @contextmanager
    def context(self):
        with np.errstate(all="ignore"):
            yield

    def to_mpf(self, x, ctx=mpmath.mp):
        if self.dtype is np.longdouble:
            return ctx.mpf(np.format_float_scientific(x, unique=True))
        return ctx.mpf(float(x))

    def from_mpf(self, x, ctx=mpmath.mp):
        if self.dtype is np.longdouble:
            return self.dtype(ctx.nstr(x, self.digits10 + 4, min_fixed=1, max_fixed=0))
        with np.errstate(all="ignore"):
            return self.dtype(float(x))

    @property
    def epsilon(self):
        return self._eps

    @property
    def max_value(self):
        return self._max

    def nan(self):
        return self.dtype(np.nan)

    def inf(self):
        return self.dtype(np.inf)

    def floor(self, x):
        return np.floor(x)

    def ceil(self, x):
        return np.ceil(x)

    def exponent(self, x) -> int:
        return int(np.frexp(x)[1])

    def isfinite(self, x) -> bool:
        return bool(np.isfinite(x))

    def isnan(self, x) -> bool:
        return bool(np.isnan(x))


class MpfRealType(RealType):
    """mpmath evaluation at ``prec_bits``, in ``ctx`` (the global ``mp`` by default)."""

    is_mpf = True
    # mpf exponents are unbounded; this is the range reported to overflow guards.
    max_exponent = 2**30

    def __init__(self, prec_bits: int, ctx=None):
        self.prec_bits = int(prec_bits)
        self.digits = self.prec_bits
        self.ctx = mpmath.mp if ctx is None else ctx
        self.name = f"mpf[{self.prec_bits}]"

    def __call__(self, x):
        if isinstance(x, np.generic):
            if isinstance(x, np.longdouble):
                x = np.format_float_scientific(x, unique=True)
            else:
                x = x.item()
        with self.ctx.workprec(self.prec_bits):
            return self.ctx.mpf(x)

    def context(self):
        return self.ctx.workprec(self.prec_bits)

    def to_mpf(self, x, ctx=mpmath.mp):
        return x

    def from_mpf(self, x, ctx=mpmath.mp):
        with self.ctx.workprec(self.prec_bits):
            return +self.ctx.mpf(x)

    @property
    def epsilon(self):
        return self.ctx.ldexp(self.ctx.mpf(1), 1 - self.prec_bits)

    @property
    def max_value(self):
        return self.ctx.ldexp(self.ctx.mpf(1), self.max_exponent)

    def nan(self):
        return self.ctx.mpf("nan")

    def inf(self):
        return self.ctx.mpf("inf")

    def floor(self, x):
        return self.ctx.floor(x)

    def ceil(self, x):
        return self.ctx.ceil(x)

    def exponent(self, x) -> int:
        if not x:
            return 0
        return int(self.ctx.frexp(x)[1])

    def isfinite(self, x) -> bool:
        return bool(self.ctx.isfinite(x))

    def isnan(self, x) -> bool:
        return bool(self.ctx.isnan(x))


_thread = threading.local()


def private_context(name: str) -> mpmath.MPContext:
    """This thread's mpmath context called ``name``.

    Fixed-width evaluation borrows mpmath through these so that it never
    changes the precision of the global ``mp`` context.
    """
    contexts = getattr(_thread, "contexts", None)
    if contexts is None:
        contexts = _thread.contexts = {}
    ctx = contexts.get(name)
    if ctx is None:
        ctx = contexts[name] = mpmath.MPContext()
    return ctx


def widened(rt, extra_bits: int) -> MpfRealType:
    """An mpf type ``extra_bits`` wider than ``rt``, private to this thread for fixed-width ``rt``."""
    prec_bits = rt.digits + int(extra_bits)
    if rt.is_mpf:
        return MpfRealType(prec_bits, rt.ctx)
    return MpfRealType(prec_bits, private_context("widened"))


@lru_cache(maxsize=None)
def numpy_type(dtype) -> NumpyRealType:
    return NumpyRealType(np.dtype(dtype))


@lru_cache(maxsize=64)
def mpf_type(prec_bits: int) -> MpfRealType:
    return MpfRealType(prec_bits)


def _is_python_number(x) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, (bool, np.generic))


def promote_args(*args, prec_bits: int | None = None) -> RealType:
    """Pick the evaluation type shared by all arguments.

    Any ``mpf`` argument, or an explicit ``prec_bits``, selects multiprecision
    evaluation. Otherwise numpy promotion rules apply with Python numbers
    counted as ``float64``.
    """
    if prec_bits is not None:
        return mpf_type(int(prec_bits))
    if any(isinstance(x, mpmath.mpf) for x in args):
        return mpf_type(precision.get_prec_bits())
    dtypes = []
    for x in args:
        if isinstance(x, (np.generic, np.ndarray)) and np.issubdtype(x.dtype, np.floating):
            dtypes.append(x.dtype)
        else:
            dtypes.append(np.dtype(np.float64))
    dt = np.result_type(*dtypes) if dtypes else np.dtype(np.float64)
    if dt == np.float16:
        dt = np.dtype(np.float32)
    return numpy_type(dt)


def narrow(value, args: tuple):
    """Return ``value`` as a Python float when every argument was a Python number."""
    if all(_is_python_number(x) for x in args):
        return float(value)
    return value


__all__ = [
    "RealType",
    "NumpyRealType",
    "MpfRealType",
    "numpy_type",
    "mpf_type",
    "private_context",
    "widened",
    "promote_args",
    "narrow",
]

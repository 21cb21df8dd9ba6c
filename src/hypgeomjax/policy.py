from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from . import checks

logger = logging.getLogger(__name__)

ACTIONS = ("raise", "nan", "ignore")


class HypergeometricError(ArithmeticError):
    """Base class for conditions reported by the evaluation policy."""

    def __init__(self, site: str, message: str, value=None):
        super().__init__(f"{site}: {message}")
        self.site = site
        self.value = value


class DomainError(HypergeometricError, ValueError):
    pass


class PoleError(DomainError):
    pass


class EvaluationError(HypergeometricError):
    pass


class HypergeometricOverflowError(HypergeometricError, OverflowError):
    pass


@dataclass(frozen=True)
class Policy:
    """Per-call error and tuning configuration.

    ``on_*`` fields choose between raising, returning NaN and returning the
    sentinel value ("ignore"). The remaining fields tune kernel selection; a
    value of ``None`` means "derive from the precision of the evaluation type".
    """

    on_domain_error: str = "raise"
    on_pole_error: str = "raise"
    on_evaluation_error: str = "raise"
    on_overflow_error: str = "ignore"
    max_series_iterations: int = 1_000_000
    asym_decay_ratio: float = 0.7
    asym_min_z: float = 40.0
    a_small_threshold: float | None = None
    bessel_recursion_depth: int | None = None

    def __post_init__(self):
        for field in ("on_domain_error", "on_pole_error", "on_evaluation_error", "on_overflow_error"):
            checks.check_in_set(getattr(self, field), ACTIONS, f"Policy.{field}")
        checks.check_positive_int(self.max_series_iterations, "Policy.max_series_iterations")
        checks.check_positive(self.asym_decay_ratio, "Policy.asym_decay_ratio")
        if self.bessel_recursion_depth is not None:
            checks.check_positive_int(self.bessel_recursion_depth, "Policy.bessel_recursion_depth")

    def with_(self, **changes) -> "Policy":
        return replace(self, **changes)


DEFAULT_POLICY = Policy()


def resolve_policy(pol: Policy | None) -> Policy:
    return DEFAULT_POLICY if pol is None else pol


def _format(message: str, value) -> str:
    return message.format(value) if "{}" in message else message


def raise_domain_error(site: str, message: str, value, pol: Policy, rt):
    text = _format(message, value)
    logger.warning("domain error in %s: %s", site, text)
    if pol.on_domain_error == "raise":
        raise DomainError(site, text, value)
    if pol.on_domain_error == "nan":
        return rt.nan()
    return rt(0)


def raise_pole_error(site: str, message: str, value, pol: Policy, rt):
    text = _format(message, value)
    logger.warning("pole error in %s: %s", site, text)
    if pol.on_pole_error == "raise":
        raise PoleError(site, text, value)
    if pol.on_pole_error == "nan":
        return rt.nan()
    return rt(0)


def raise_evaluation_error(site: str, message: str, value, pol: Policy, rt):
    """Report non-convergence; "ignore" hands back ``value``, the partial result."""
    text = _format(message, value)
    logger.warning("evaluation error in %s: %s", site, text)
    if pol.on_evaluation_error == "raise":
        raise EvaluationError(site, text, value)
    if pol.on_evaluation_error == "nan":
        return rt.nan()
    return value


def raise_overflow_error(site: str, message: str, value, pol: Policy, rt):
    text = _format(message, value)
    if pol.on_overflow_error == "raise":
        logger.warning("overflow in %s: %s", site, text)
        raise HypergeometricOverflowError(site, text, value)
    if pol.on_overflow_error == "nan":
        return rt.nan()
    return value


def check_series_iterations(site: str, used: int, pol: Policy, rt, value):
    if used >= pol.max_series_iterations:
        return raise_evaluation_error(
            site, f"series did not converge after {used} iterations, best estimate {{}}", value, pol, rt
        )
    return value


def check_overflow(site: str, value, args: tuple, pol: Policy, rt):
    if rt.isfinite(value) or rt.isnan(value):
        return value
    if not all(rt.isfinite(x) for x in args):
        return value
    return raise_overflow_error(site, "result overflows the evaluation type: {}", value, pol, rt)


__all__ = [
    "ACTIONS",
    "HypergeometricError",
    "DomainError",
    "PoleError",
    "EvaluationError",
    "HypergeometricOverflowError",
    "Policy",
    "DEFAULT_POLICY",
    "resolve_policy",
    "raise_domain_error",
    "raise_pole_error",
    "raise_evaluation_error",
    "raise_overflow_error",
    "check_series_iterations",
    "check_overflow",
]

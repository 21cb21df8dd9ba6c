from __future__ import annotations


def _check(cond: bool, msg: str, *args) -> None:
    if not cond:
        raise ValueError(msg.format(*args))


def check_in_set(val: str, allowed: tuple[str, ...], label: str) -> None:
    _check(val in allowed, "{}: expected one of {}, got {!r}", label, allowed, val)


def check_nonnegative_int(val: int, label: str) -> None:
    _check(int(val) == val and val >= 0, "{}: expected a non-negative integer, got {!r}", label, val)


def check_positive_int(val: int, label: str) -> None:
    _check(int(val) == val and val > 0, "{}: expected a positive integer, got {!r}", label, val)


def check_positive(val: float, label: str) -> None:
    _check(val > 0, "{}: expected a positive value, got {!r}", label, val)


__all__ = ["check_in_set", "check_nonnegative_int", "check_positive_int", "check_positive"]

from __future__ import annotations


def _check(cond, msg: str | None = None) -> None:
    label = msg or "test_check"
    assert bool(cond), label


def _rel_close(got, expected, rtol: float) -> bool:
    got = float(got)
    expected = float(expected)
    if expected == 0.0:
        return abs(got) <= rtol
    return abs(got - expected) <= rtol * abs(expected)


__all__ = ["_check", "_rel_close"]

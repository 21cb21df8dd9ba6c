from __future__ import annotations

import argparse

import mpmath as mp
import numpy as np

from hypgeomjax import hypergeometric
from hypgeomjax.policy import Policy

_POLICY = Policy(on_domain_error="nan", on_pole_error="nan", on_evaluation_error="nan")


def _rel_err(got: float, ref) -> float:
    if not np.isfinite(got):
        return float("inf")
    ref = float(ref)
    if ref == 0.0:
        return abs(got)
    return abs(got - ref) / abs(ref)


def _summary(name: str, errs: list[float]) -> None:
    arr = np.asarray(errs)
    finite = arr[np.isfinite(arr)]
    bad = int(arr.size - finite.size)
    if finite.size == 0:
        print(f"{name:6s} no finite results ({bad} failures)")
        return
    print(
        f"{name:6s} n={arr.size:6d} median={np.median(finite):.3e} "
        f"p99={np.quantile(finite, 0.99):.3e} max={finite.max():.3e} failures={bad}"
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Relative error of hypgeomjax against mpmath.")
    parser.add_argument("--samples", type=int, default=500)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--dps", type=int, default=40)
    parser.add_argument("--zmax", type=float, default=50.0)
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    n = args.samples
    mp.mp.dps = args.dps

    cases = {
        "0f1": (
            hypergeometric.hypergeometric_0f1,
            mp.hyp0f1,
            [rng.uniform(0.1, 20.0, n), rng.uniform(-4 * args.zmax, args.zmax, n)],
        ),
        "1f1": (
            hypergeometric.hypergeometric_1f1,
            mp.hyp1f1,
            [rng.uniform(-20.0, 20.0, n), rng.uniform(0.1, 20.0, n), rng.uniform(-args.zmax, args.zmax, n)],
        ),
        "1f2": (
            hypergeometric.hypergeometric_1f2,
            mp.hyp1f2,
            [rng.uniform(-5.0, 5.0, n), rng.uniform(0.1, 5.0, n), rng.uniform(0.1, 5.0, n), rng.uniform(-20.0, 20.0, n)],
        ),
        "2f1": (
            hypergeometric.hypergeometric_2f1,
            mp.hyp2f1,
            [rng.uniform(-5.0, 5.0, n), rng.uniform(-5.0, 5.0, n), rng.uniform(0.1, 8.0, n), rng.uniform(-5.0, 0.95, n)],
        ),
    }

    for name, (fn, ref_fn, columns) in cases.items():
        errs = []
        for row in zip(*columns):
            row = [float(v) for v in row]
            got = fn(*row, pol=_POLICY)
            errs.append(_rel_err(got, ref_fn(*row)))
        _summary(name, errs)


if __name__ == "__main__":
    main()

"""Reference values of 1F1 by plain Taylor summation at high precision.

The working precision is raised until two successive evaluations agree to
the requested number of digits, so cancellation in the series is absorbed by
the extra bits. Output is CSV: a, b, z, 1F1(a; b; z).
"""

from __future__ import annotations

import argparse
import csv
import sys

import mpmath as mp
import numpy as np


def taylor_1f1(a, b, z, max_terms: int):
    term = mp.mpf(1)
    total = mp.mpf(1)
    eps = mp.eps
    for n in range(max_terms):
        term = term * (a + n) / ((b + n) * (n + 1)) * z
        total += term
        if not term or (abs(term) < eps * abs(total) and n > abs(z)):
            return total
    raise ArithmeticError(f"1F1({a}, {b}, {z}) did not converge in {max_terms} terms")


def reference_1f1(a: float, b: float, z: float, digits: int, max_terms: int):
    prec = digits * 4 + 64
    previous = None
    while True:
        with mp.workprec(prec):
            value = taylor_1f1(mp.mpf(a), mp.mpf(b), mp.mpf(z), max_terms)
        if previous is not None and (value == previous or abs(value / previous - 1) < mp.mpf(10) ** (-digits)):
            return value
        previous = value
        prec *= 2


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate 1F1 reference data.")
    parser.add_argument("--samples", type=int, default=100)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--digits", type=int, default=25)
    parser.add_argument("--amax", type=float, default=50.0)
    parser.add_argument("--bmax", type=float, default=50.0)
    parser.add_argument("--zmax", type=float, default=100.0)
    parser.add_argument("--max-terms", type=int, default=100_000)
    parser.add_argument("--output", type=str, default="-")
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    out = sys.stdout if args.output == "-" else open(args.output, "w", newline="", encoding="utf-8")
    try:
        writer = csv.writer(out)
        writer.writerow(["a", "b", "z", "hyp1f1"])
        for _ in range(args.samples):
            a = float(rng.uniform(-args.amax, args.amax))
            b = float(rng.uniform(-args.bmax, args.bmax))
            z = float(rng.uniform(-args.zmax, args.zmax))
            if b <= 0 and b == int(b):
                continue
            value = reference_1f1(a, b, z, args.digits, args.max_terms)
            writer.writerow([repr(a), repr(b), repr(z), mp.nstr(value, args.digits)])
    finally:
        if out is not sys.stdout:
            out.close()


if __name__ == "__main__":
    main()

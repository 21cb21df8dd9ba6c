from __future__ import annotations

import argparse
import time

import jax
import jax.numpy as jnp

from hypgeomjax import hypergeometric_wrappers as hw


def _timer(fn, *args, iters: int = 20) -> float:
    jax.block_until_ready(fn(*args))
    start = time.perf_counter()
    for _ in range(iters):
        jax.block_until_ready(fn(*args))
    end = time.perf_counter()
    return (end - start) / iters


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--iters", type=int, default=20)
    parser.add_argument("--n", type=int, default=256)
    args = parser.parse_args()

    z = jnp.linspace(-60.0, 60.0, args.n, dtype=jnp.float64)
    zs = jnp.linspace(-0.9, 0.9, args.n, dtype=jnp.float64)
    a = jnp.full((args.n,), 0.75, dtype=jnp.float64)
    b = jnp.full((args.n,), 2.25, dtype=jnp.float64)

    bench = [
        ("0f1", lambda: hw.hypergeometric_0f1_batch_jit(b, z)),
        ("1f0", lambda: hw.hypergeometric_1f0_batch_jit(a, zs)),
        ("1f1", lambda: hw.hypergeometric_1f1_batch_jit(a, b, z)),
        ("1f1_neg_a", lambda: hw.hypergeometric_1f1_batch_jit(-40.5 + a, b, z)),
        ("1f2", lambda: hw.hypergeometric_1f2_batch_jit(a, b, b + 1.0, z)),
        ("2f1", lambda: hw.hypergeometric_2f1_batch_jit(a, a + 0.5, b, zs)),
        ("1f1_mp", lambda: hw.hypergeometric_1f1_batch_prec(a, b, z, prec_bits=200)),
    ]

    for name, fn in bench:
        dt = _timer(fn, iters=args.iters)
        print(f"{name:14s} {dt*1e3:10.3f} ms  ({dt*1e6/args.n:8.2f} us/elem)")


if __name__ == "__main__":
    main()

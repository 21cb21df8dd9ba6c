import jax
import jax.numpy as jnp
import numpy as np
import pytest

from hypgeomjax import hypergeometric
from hypgeomjax import hypergeometric_wrappers as hw
from hypgeomjax.policy import DomainError, Policy

from tests._test_checks import _check


def test_batch_broadcasts_arguments():
    a = jnp.array([[0.5], [1.5]], dtype=jnp.float64)
    z = jnp.array([0.1, 1.0, 4.0], dtype=jnp.float64)
    out = hw.hypergeometric_1f1_batch(a, 2.5, z)
    _check(out.shape == (2, 3))
    _check(out.dtype == jnp.float64)
    _check(float(out[1, 2]) == hypergeometric.hypergeometric_1f1(1.5, 2.5, 4.0))


def test_batch_jit_matches_batch():
    a = jnp.array([0.5, 1.25, -2.0], dtype=jnp.float64)
    b = jnp.array([1.5, 2.0, 3.5], dtype=jnp.float64)
    z = jnp.array([0.3, -0.4, 0.25], dtype=jnp.float64)
    got = hw.hypergeometric_2f1_batch_jit(a, a + 1.0, b, z)
    expected = hw.hypergeometric_2f1_batch(a, a + 1.0, b, z)
    _check(got.shape == (3,))
    _check(jnp.allclose(got, expected, rtol=0.0, atol=0.0))


def test_batch_jit_under_vmap():
    z = jnp.array([[0.5, 1.0], [2.0, 3.0]], dtype=jnp.float64)
    f = jax.vmap(lambda row: hw.hypergeometric_0f1_batch_jit(1.5, row))
    got = f(z)
    _check(got.shape == (2, 2))
    _check(np.allclose(np.asarray(got), np.asarray(hw.hypergeometric_0f1_batch(1.5, z))))


def test_batch_reports_errors_as_nan():
    out = hw.hypergeometric_1f0_batch(0.5, jnp.array([0.5, 1.0, 2.0], dtype=jnp.float64))
    _check(bool(jnp.isfinite(out[0])))
    _check(bool(jnp.isnan(out[1])))
    _check(bool(jnp.isnan(out[2])))


def test_batch_explicit_policy_raises():
    with pytest.raises(DomainError):
        hw.hypergeometric_1f0_batch(0.5, jnp.array([2.0]), pol=Policy())


def test_pfq_batch_shares_parameters():
    z = jnp.array([0.1, 0.2, 0.3], dtype=jnp.float64)
    got = hw.hypergeometric_pfq_batch((0.5, 1.5), (2.5,), z)
    jit = hw.hypergeometric_pfq_batch_jit((0.5, 1.5), (2.5,), z)
    expected = hw.hypergeometric_2f1_batch(0.5, 1.5, 2.5, z)
    _check(jnp.allclose(got, expected, rtol=1e-14))
    _check(jnp.allclose(jit, got, rtol=0.0, atol=0.0))


def test_batch_prec_rounds_to_float64():
    z = jnp.array([1.0, 5.0], dtype=jnp.float64)
    out = hw.hypergeometric_1f2_batch_prec(0.5, 1.5, 2.5, z, prec_bits=200)
    _check(out.dtype == jnp.float64)
    _check(jnp.allclose(out, hw.hypergeometric_1f2_batch(0.5, 1.5, 2.5, z), rtol=1e-14))


def test_mode_rejects_unknown_impl():
    with pytest.raises(ValueError):
        hw.hypergeometric_1f1_mode(0.5, 1.5, jnp.array([1.0]), impl="rigorous")

import jax.numpy as jnp
import mpmath

from hypgeomjax import hypergeometric
from hypgeomjax import hypergeometric_wrappers
from hypgeomjax import mp_mode
from hypgeomjax import precision
from hypgeomjax import wrappers_common as wc

from tests._test_checks import _check


def test_mp_mode_uses_dps() -> None:
    expected = hypergeometric.hypergeometric_1f1_prec(0.5, 1.5, 2.0, prec_bits=precision.dps_to_bits(40))
    got = mp_mode.hypergeometric_1f1_mp(0.5, 1.5, 2.0, dps=40)
    _check(got == expected)


def test_mp_mode_prec_bits_wins_over_dps() -> None:
    got = mp_mode.hypergeometric_0f1_mp(1.5, 3.0, dps=10, prec_bits=150)
    with mpmath.workprec(150):
        expected = mpmath.hyp0f1(1.5, 3.0)
    _check(abs(got / expected - 1) < mpmath.mpf("1e-40"))


def test_mp_mode_defaults_to_global_precision() -> None:
    with precision.workdps(45):
        got = mp_mode.hypergeometric_2f1_mp(0.5, 1.5, 2.5, 0.3)
        expected = hypergeometric.hypergeometric_2f1_prec(0.5, 1.5, 2.5, 0.3, prec_bits=precision.dps_to_bits(45))
    _check(got == expected)


def test_batch_mp_matches_batch_prec() -> None:
    z = jnp.array([0.5, 1.0, 2.0], dtype=jnp.float64)
    expected = hypergeometric_wrappers.hypergeometric_1f1_batch_prec(0.5, 1.5, z, prec_bits=precision.dps_to_bits(40))
    got = mp_mode.hypergeometric_1f1_batch_mp(0.5, 1.5, z, dps=40)
    _check(jnp.allclose(expected, got, rtol=0.0, atol=0.0))


def test_mode_wrapper_baseline_and_mp() -> None:
    z = jnp.array([0.5, 1.0, 2.0], dtype=jnp.float64)
    base = hypergeometric_wrappers.hypergeometric_1f1_mode(0.5, 1.5, z, impl="baseline")
    mp = hypergeometric_wrappers.hypergeometric_1f1_mode(0.5, 1.5, z, impl="mp", dps=40)
    _check(jnp.allclose(base, hypergeometric_wrappers.hypergeometric_1f1_batch(0.5, 1.5, z)))
    _check(jnp.allclose(base, mp, rtol=1e-14))


def test_mp_mode_exports_one_wrapper_per_prec_function() -> None:
    families = ("0f1", "1f0", "1f1", "1f2", "2f0", "2f1", "pfq")
    expected = {"mp_name", "make_mp"}
    expected |= {f"hypergeometric_{fam}_mp" for fam in families}
    expected |= {f"hypergeometric_{fam}_batch_mp" for fam in families}
    _check(set(mp_mode.__all__) == expected)
    _check(len(mp_mode.__all__) == len(expected))
    _check(mp_mode.hypergeometric_2f1_batch_mp.__name__ == "hypergeometric_2f1_batch_mp")


def test_mp_name() -> None:
    _check(mp_mode.mp_name("hypergeometric_1f1_prec") == "hypergeometric_1f1_mp")
    _check(mp_mode.mp_name("hypergeometric_pfq_batch_prec") == "hypergeometric_pfq_batch_mp")
    try:
        mp_mode.mp_name("hypergeometric_1f1")
    except ValueError:
        pass
    else:
        _check(False, "expected ValueError")


def test_pfq_mp_forwards_parameter_lists() -> None:
    got = mp_mode.hypergeometric_pfq_mp([0.5, 1.5], [2.5], 0.3, dps=40)
    expected = hypergeometric.hypergeometric_2f1_prec(0.5, 1.5, 2.5, 0.3, prec_bits=precision.dps_to_bits(40))
    _check(abs(got / expected - 1) < mpmath.mpf("1e-35"))


def test_prec_functions_share_precision_resolution() -> None:
    with precision.workprec(90):
        got = hypergeometric.hypergeometric_0f1_prec(1.5, 3.0)
    _check(got == hypergeometric.hypergeometric_0f1_prec(1.5, 3.0, prec_bits=90))
    _check(wc.resolve_prec_bits(40, None) == precision.dps_to_bits(40))
    _check(wc.resolve_prec_bits(40, 77) == 77)

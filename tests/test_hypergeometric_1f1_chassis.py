import math

import mpmath
import numpy as np
import pytest

from hypgeomjax import hypergeometric
from hypgeomjax import hypergeometric_series as hs
from hypgeomjax import numeric
from hypgeomjax.hypergeometric_1f1_recurrence import hypergeometric_1f1_backward_recurrence_a
from hypgeomjax.hypergeometric_pade import hypergeometric_1f1_pade
from hypgeomjax.policy import DEFAULT_POLICY, DomainError, HypergeometricOverflowError, Policy

from tests._test_checks import _check, _rel_close

F64 = numeric.numpy_type(np.float64)
PI = math.pi

# (a, b, z, expected) to 20 significant digits
SPOT_VALUES = [
    (0.1, 0.2, 0.5, 1.31762717827850999771),
    (-0.1, 0.2, 0.5, 0.695536565102261062224),
    (0.1, 0.2, -0.5, 0.799181281696560321540),
    (1.0, 1.0, 10.0, 22026.4657948067165),
    (1.0, 3.0, 10.0, 440.309315896134330339),
    (1.0, 2.0, 600.0, 6.28836716821656637234e257),
    (-60.0, 1.0, 10.0, -10.0489541129649484586),
    (60.0, 1.0, 10.0, 1.81808688761894542864e22),
    (60.0, 1.0, -10.0, -0.000671306684545906746426),
    (-60.0, 1.0, -10.0, 1.23314254099858891105e18),
    (20.0, 10.0, -5.0, -6.25682720117872755720e-6),
    (8.1, 10.1, 100.0, 1.72413107599268832161e41),
    (0.01, 1.0, 700.0, 1.55801242207709612448e299),
    (500.0, 1.0, -5.0, 0.00105389594336545171918),
    (-500.0, 1.0, 5.0, 0.251406264291805126116),
    (-20.0, -3 * PI, 2.5, 269.066377517348825231),
    (20.0, 3 * PI, 2.5, 122.186654218166104123),
    (50.0, 10.0, 200.0, 1.70970417612603891523e125),
    (-5.0, -2 * PI, -1.0, 0.444913437706720747615),
    (4.0, 80.0, 200.0, 3.44855150621665366519e27),
    (-4.0, 500.0, 300.0, 0.0249062013158541889868),
    (5.0, 0.1, -2.0, 2.69810607783535476510),
    (-5.0, 0.1, 2.0, 19.1331126256381960552),
    (5.0, 2.0, 100.0, 1.25851372306500557379e48),
    (-5.0, 2.0, -100.0, 1.84891398888888888889e7),
    (1.0, 1e-11, 1.0, 2.71828182844739141321e11),
    (10.0, 1e-11, 10.0, 1.33253444073869310540e22),
    (1000.0, 1.0, 0.01, 90.7978833631836412935),
    (100.0, 1.5, 2.5, 2.74889297585868314785e12),
    (500.0, 511.0, 10.0, 17796.6855333739325),
]


@pytest.mark.parametrize("a,b,z,expected", SPOT_VALUES)
def test_1f1_spot_values(a, b, z, expected):
    got = hypergeometric.hypergeometric_1f1(a, b, z)
    _check(isinstance(got, float))
    _check(_rel_close(got, expected, 1e-9), f"1F1({a}, {b}, {z}) = {got!r}, expected {expected!r}")


def test_1f1_kummer_then_bessel_series():
    got = hypergeometric.hypergeometric_1f1(20.0, -3 * PI, -2.5)
    _check(_rel_close(got, -459.787566706320312335, 1e-8))


def test_1f1_long_backward_recurrence():
    got = hypergeometric.hypergeometric_1f1(-1000.0, 1.0, 1000.0)
    _check(_rel_close(got, -2.59382078336200571794e215, 1e-7))


def test_1f1_trivial_values():
    _check(hypergeometric.hypergeometric_1f1(0.5, 1.5, 0.0) == 1.0)
    _check(hypergeometric.hypergeometric_1f1(0.0, 1.5, 3.0) == 1.0)
    _check(_rel_close(hypergeometric.hypergeometric_1f1(-1.0, 4.0, 3.0), 0.25, 1e-15))
    _check(_rel_close(hypergeometric.hypergeometric_1f1(2.5, 2.5, 1.5), math.exp(1.5), 1e-15))


def test_1f1_b_minus_a_is_minus_one():
    with mpmath.workdps(30):
        expected = mpmath.hyp1f1(1.5, 0.5, 2.0)
    _check(_rel_close(hypergeometric.hypergeometric_1f1(1.5, 0.5, 2.0), expected, 1e-14))
    # polynomial branch: a non-positive integer
    _check(_rel_close(hypergeometric.hypergeometric_1f1(-2.0, -3.0, 1.5), 1.0 + 1.0 + 0.375, 1e-15))


def test_1f1_expm1_branch_small_z():
    got = hypergeometric.hypergeometric_1f1(1.0, 2.0, 1e-10)
    _check(_rel_close(got, 1.0 + 5e-11, 1e-15))


def test_1f1_kummer_symmetry():
    for a, b, z in [(0.3, 1.7, 4.0), (2.5, 0.75, 6.5), (-3.5, 2.25, 3.0)]:
        lhs = hypergeometric.hypergeometric_1f1(a, b, z)
        rhs = math.exp(z) * hypergeometric.hypergeometric_1f1(b - a, b, -z)
        _check(_rel_close(lhs, rhs, 1e-12))


def test_1f1_nonpositive_integer_b():
    with pytest.raises(DomainError):
        hypergeometric.hypergeometric_1f1(2.0, -3.0, 1.0)
    with pytest.raises(DomainError):
        hypergeometric.hypergeometric_1f1(-4.0, -3.0, 1.0)
    got = hypergeometric.hypergeometric_1f1(2.0, -3.0, 1.0, pol=Policy(on_domain_error="nan"))
    _check(math.isnan(got))
    _check(_rel_close(hypergeometric.hypergeometric_1f1(-2.0, -3.0, 1.5), 2.375, 1e-15))


def test_1f1_pade_branch():
    with mpmath.workdps(30):
        expected = mpmath.hyp1f1(1, 2.5, -30.0)
    _check(_rel_close(hypergeometric.hypergeometric_1f1(1.0, 2.5, -30.0), expected, 1e-11))
    _check(_rel_close(hypergeometric_1f1_pade(F64, 2.5, -30.0, DEFAULT_POLICY), expected, 1e-11))


def test_1f1_pade_small_argument():
    with mpmath.workdps(30):
        expected = mpmath.hyp1f1(1, 0.75, -1.5)
    _check(_rel_close(hypergeometric_1f1_pade(F64, 0.75, -1.5, DEFAULT_POLICY), expected, 1e-13))


def test_1f1_float32_stays_float32():
    got = hypergeometric.hypergeometric_1f1(np.float32(0.5), np.float32(1.5), np.float32(2.0))
    _check(isinstance(got, np.float32))
    with mpmath.workdps(30):
        expected = mpmath.hyp1f1(0.5, 1.5, 2.0)
    _check(_rel_close(got, expected, 1e-6))


def test_1f1_mpf_arguments_use_global_precision():
    with mpmath.workprec(100):
        a = mpmath.mpf(1) / 3
        b = mpmath.mpf(2) / 3
        expected = mpmath.hyp1f1(a, b, 5)
    got = hypergeometric.hypergeometric_1f1(a, b, mpmath.mpf(5))
    _check(isinstance(got, mpmath.mpf))
    _check(abs(got / expected - 1) < mpmath.mpf("1e-27"))


def test_1f1_prec_variant():
    got = hypergeometric.hypergeometric_1f1_prec(0.1, 0.2, 0.5, prec_bits=200)
    with mpmath.workprec(200):
        expected = mpmath.hyp1f1(mpmath.mpf(0.1), mpmath.mpf(0.2), mpmath.mpf(0.5))
    _check(abs(got / expected - 1) < mpmath.mpf("1e-55"))


def test_1f1_overflow_policy():
    got = hypergeometric.hypergeometric_1f1(1.0, 2.0, 800.0)
    _check(math.isinf(got))
    with pytest.raises(HypergeometricOverflowError):
        hypergeometric.hypergeometric_1f1(1.0, 2.0, 800.0, pol=Policy(on_overflow_error="raise"))


def test_1f1_shift_in_b():
    with mpmath.workdps(30):
        expected = mpmath.hyp1f1(0.5, 11.5, 2.0)
    got = hypergeometric.hypergeometric_1f1_shift_b(0.5, 1.5, 2.0, 10)
    _check(_rel_close(got, expected, 1e-12))


def test_1f1_shift_in_a_and_b():
    with mpmath.workdps(30):
        expected = mpmath.hyp1f1(10.5, 11.5, 2.0)
    got = hypergeometric.hypergeometric_1f1_shift_ab(0.5, 1.5, 2.0, 10)
    _check(_rel_close(got, expected, 1e-12))


def test_1f1_shift_zero_steps():
    got = hypergeometric.hypergeometric_1f1_shift_b(0.5, 1.5, 2.0, 0)
    _check(_rel_close(got, hypergeometric.hypergeometric_1f1(0.5, 1.5, 2.0), 1e-15))


@pytest.mark.parametrize(
    "a,b,z,n",
    [
        (0.3, 0.7, 38.0, 3),
        (0.3, 0.7, -38.0, 3),
        (0.3, 0.7, 20.0, 1),
        (0.3, 0.7, -20.0, 1),
        (1.25, 2.5, -5.0, 12),
    ],
)
def test_1f1_shift_in_b_both_signs_of_z(a, b, z, n):
    with mpmath.workdps(40):
        expected = mpmath.hyp1f1(a, b + n, z)
    got = hypergeometric.hypergeometric_1f1_shift_b(a, b, z, n)
    _check(_rel_close(got, expected, 1e-10))


@pytest.mark.parametrize(
    "a,b,z,n",
    [
        (0.3, 0.7, 38.0, 3),
        (0.3, 0.7, -38.0, 3),
        (0.3, 0.7, 20.0, 1),
        (0.3, 0.7, -20.0, 1),
        (1.25, 2.5, -5.0, 12),
    ],
)
def test_1f1_shift_in_a_and_b_both_signs_of_z(a, b, z, n):
    with mpmath.workdps(40):
        expected = mpmath.hyp1f1(a + n, b + n, z)
    got = hypergeometric.hypergeometric_1f1_shift_ab(a, b, z, n)
    _check(_rel_close(got, expected, 1e-10))


@pytest.mark.parametrize("a,b,z", [(-20.3, 1.0, 300.0), (-150.5, 150.0, 120.0)])
def test_1f1_large_negative_a_outside_bessel_series_range(a, b, z):
    with mpmath.workdps(60):
        expected = mpmath.hyp1f1(a, b, z)
    got = hypergeometric.hypergeometric_1f1(a, b, z)
    _check(math.isfinite(got))
    _check(_rel_close(got, expected, 1e-8))


@pytest.mark.parametrize("a", [-20.3, -45.5, -150.5])
@pytest.mark.parametrize("b", [1.0, 2.5, 30.0])
@pytest.mark.parametrize("z", [5.0, 40.0, 120.0, 300.0])
def test_1f1_large_negative_a_grid(a, b, z):
    with mpmath.workdps(60):
        expected = mpmath.hyp1f1(a, b, z)
    got = hypergeometric.hypergeometric_1f1(a, b, z)
    _check(_rel_close(got, expected, 1e-8))


@pytest.mark.parametrize("a", [-20.0, -40.0])
@pytest.mark.parametrize("b", [1.5, 3.0, 10.0])
@pytest.mark.parametrize("z", [-10.0, -2.5, 0.75, 2.5])
def test_1f1_polynomial_series_matches_backward_recurrence(a, b, z):
    with mpmath.workdps(40):
        expected = float(mpmath.hyp1f1(a, b, z))
    scale = max(1.0, abs(expected))
    series = hs.hypergeometric_1f1_generic_series(F64, F64(a), F64(b), F64(z), DEFAULT_POLICY)
    recurrence = hypergeometric_1f1_backward_recurrence_a(F64, F64(a), F64(b), F64(z), DEFAULT_POLICY)
    _check(abs(series - recurrence) <= 1e-7 * scale)
    _check(abs(recurrence - expected) <= 1e-7 * scale)

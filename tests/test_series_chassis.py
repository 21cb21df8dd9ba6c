import itertools

import numpy as np

from hypgeomjax import numeric
from hypgeomjax import series

from tests._test_checks import _check, _rel_close

F64 = numeric.numpy_type(np.float64)


def _exp_terms(x):
    term = 1.0
    n = 0
    while True:
        yield term
        n += 1
        term = term * x / n


def _geometric(r):
    term = 1.0
    while True:
        yield term
        term = term * r


def test_sum_series_geometric():
    result, used = series.sum_series(_geometric(0.5), F64.epsilon, 1000)
    _check(_rel_close(result, 2.0, 1e-15))
    _check(0 < used < 1000)


def test_sum_series_reports_exhausted_cap():
    result, used = series.sum_series(itertools.repeat(1.0), F64.epsilon, 10)
    _check(result == 10.0)
    _check(used == 10)


def test_sum_series_zero_first_term_stops():
    result, used = series.sum_series(itertools.repeat(0.0), F64.epsilon, 10)
    _check(result == 0.0)
    _check(used == 0)


def test_sum_series_init_value():
    terms = _geometric(0.5)
    next(terms)
    result, _ = series.sum_series(terms, F64.epsilon, 1000, init_value=1.0)
    _check(_rel_close(result, 2.0, 1e-15))


def test_sum_series_bits_loose_tolerance_uses_fewer_terms():
    loose, used_loose = series.sum_series_bits(_exp_terms(1.0), 20, 1000, 0.0, F64)
    tight, used_tight = series.sum_series_bits(_exp_terms(1.0), 53, 1000, 0.0, F64)
    _check(used_loose < used_tight)
    _check(_rel_close(loose, np.e, 1e-5))
    _check(_rel_close(tight, np.e, 1e-15))


def test_sum_cancelled_series_digit_estimate():
    good, _, good_digits = series.sum_cancelled_series(_exp_terms(-1.0), F64.epsilon, 1000, F64)
    _check(_rel_close(good, np.exp(-1.0), 1e-14))
    _check(good_digits >= 14)
    _, _, bad_digits = series.sum_cancelled_series(_exp_terms(-30.0), F64.epsilon, 1000, F64)
    _check(bad_digits < 5)


def test_kahan_sum_series():
    result, used = series.kahan_sum_series(_exp_terms(1.0), 53, 1000, F64)
    _check(_rel_close(result, np.e, 1e-15))
    _check(used < 1000)

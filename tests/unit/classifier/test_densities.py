import math

import pytest
from scipy import stats

from stat_inference_engine.classifier.densities import (
    binomial_cdf,
    cdf,
    density,
    laplace_function,
    normal_cdf,
    round_half_up,
    support_bounds,
)
from stat_inference_engine.classifier.integration import integrate_closed_form, integrate_numeric, simpson
from stat_inference_engine.exceptions import NumericDegenerateError, UnsupportedVariantError
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    NormalParameters,
    UniformParameters,
)


@pytest.mark.parametrize("x", [-3.0, -0.5, 0.0, 1.2, 4.0])
def test_normal_density_matches_scipy(x):
    assert density(NormalParameters(m=1.0, sigma=2.0), x) == pytest.approx(stats.norm.pdf(x, 1.0, 2.0))


def test_uniform_density_closed_on_both_edges():
    params = UniformParameters(a=3.0, b=5.0)
    assert density(params, 3.0) == 0.5
    assert density(params, 5.0) == 0.5
    assert density(params, 5.0001) == 0.0
    assert density(params, 2.9999) == 0.0


def test_binomial_density_rounds_half_up():
    params = BinomialParameters(n=10, p=0.5)
    assert round_half_up(2.5) == 3
    assert round_half_up(-0.5) == 0
    assert density(params, 2.5) == pytest.approx(stats.binom.pmf(3, 10, 0.5))
    assert density(params, 2.49) == pytest.approx(stats.binom.pmf(2, 10, 0.5))
    assert density(params, -2.0) == 0.0


@pytest.mark.parametrize("x", [-5.0, -1.0, 0.0, 0.3, 2.7, 8.0])
def test_normal_cdf_analytic_matches_scipy(x):
    assert normal_cdf(x) == pytest.approx(stats.norm.cdf(x), abs=1e-12)


@pytest.mark.parametrize("x", [-3.3, -1.0, -0.12, 0.0, 0.07, 1.96, 2.5, 3.99, 4.5])
def test_normal_cdf_table_close_to_exact(x):
    assert normal_cdf(x, mode="table") == pytest.approx(stats.norm.cdf(x), abs=5e-4)


def test_laplace_function_lookup_and_interpolation():
    assert laplace_function(0.0) == 0.0
    assert laplace_function(0.05) == 0.0199
    assert laplace_function(-1.0) == 0.3413
    assert laplace_function(0.025) == pytest.approx(0.00995)
    assert laplace_function(10.0) == 0.5


def test_uniform_and_binomial_cdf():
    params = UniformParameters(a=3.0, b=5.0)
    assert cdf(params, 2.0) == 0.0
    assert cdf(params, 4.0) == 0.5
    assert cdf(params, 6.0) == 1.0
    for x in (-1.0, 0.0, 3.5, 7.0, 10.0, 12.0):
        assert binomial_cdf(x, 10, 0.3) == pytest.approx(stats.binom.cdf(math.floor(x), 10, 0.3))


def test_support_bounds_per_variant():
    assert support_bounds(NormalParameters(m=5.0, sigma=1.0)) == (2.0, 8.0)
    assert support_bounds(UniformParameters(a=3.0, b=5.0)) == (3.0, 5.0)
    assert support_bounds(BinomialParameters(n=10, p=0.5)) == (0.0, 10.0)
    with pytest.raises(UnsupportedVariantError):
        support_bounds(object())  # type: ignore[arg-type]


def test_simpson_is_exact_for_cubics():
    assert simpson(lambda x: x**3 - 2 * x, 0.0, 2.0, steps=4) == pytest.approx(0.0)
    assert simpson(lambda x: x**3, 0.0, 2.0, steps=3) == pytest.approx(4.0)


def test_simpson_degenerate_bounds():
    assert simpson(lambda x: 1.0, 1.0, 1.0) == 0.0
    with pytest.raises(NumericDegenerateError):
        simpson(lambda x: 1.0, 2.0, 1.0)
    with pytest.raises(NumericDegenerateError):
        simpson(lambda x: 1.0, 0.0, math.inf)
    with pytest.raises(NumericDegenerateError):
        simpson(lambda x: math.nan, 0.0, 1.0)


def test_integrate_numeric_clips_to_uniform_support():
    params = UniformParameters(a=3.0, b=5.0)
    assert integrate_numeric(params, 0.0, 10.0, prior=0.5) == pytest.approx(0.5)
    assert integrate_numeric(params, 4.0, 10.0, prior=1.0) == pytest.approx(0.5)
    assert integrate_numeric(params, 6.0, 10.0, prior=1.0) == 0.0


def test_integrate_numeric_agrees_with_closed_form_for_normal():
    params = NormalParameters(m=0.0, sigma=1.0)
    numeric = integrate_numeric(params, -1.0, 2.0, prior=0.4)
    exact = integrate_closed_form(params, -1.0, 2.0, prior=0.4)
    assert numeric == pytest.approx(exact, abs=1e-7)
    assert exact == pytest.approx(0.4 * (stats.norm.cdf(2.0) - stats.norm.cdf(-1.0)))

import math

import pytest
from scipy import stats

from stat_inference_engine.distributions.factory import generate_result
from stat_inference_engine.estimation.point import (
    ParameterSet,
    coefficient_of_variation,
    corrected_standard_deviation,
    corrected_variance,
    estimate_all,
    estimate_distribution,
    median,
    mode,
    sample_mean,
    sample_variance,
    standard_deviation,
    theoretical_mean,
    theoretical_sigma,
    theoretical_skewness,
    theoretical_variance,
)
from stat_inference_engine.exceptions import InvalidParameterError, NumericDegenerateError
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    NormalParameters,
    UniformParameters,
)

VALUES = [1.0, 2.0, 2.0, 3.0, 10.0]


def test_sample_statistics():
    assert sample_mean(VALUES) == pytest.approx(3.6)
    assert sample_variance(VALUES) == pytest.approx(10.64)
    assert corrected_variance(VALUES) == pytest.approx(13.3)
    assert standard_deviation(VALUES) == pytest.approx(math.sqrt(10.64))
    assert corrected_standard_deviation(VALUES) == pytest.approx(math.sqrt(13.3))
    assert median(VALUES) == 2.0
    assert median([1.0, 2.0, 3.0, 4.0]) == 2.5
    assert mode(VALUES) == 2.0
    assert mode([3.0, 1.0, 1.0, 3.0]) == 3.0
    assert coefficient_of_variation(VALUES) == pytest.approx(math.sqrt(10.64) / 3.6 * 100)
    assert coefficient_of_variation([-1.0, 1.0]) == 0.0


def test_sample_statistics_reject_empty_and_short_input():
    with pytest.raises(InvalidParameterError):
        sample_mean([])
    with pytest.raises(InvalidParameterError):
        corrected_variance([1.0])


def test_theoretical_moments():
    binomial = BinomialParameters(n=10, p=0.2)
    assert theoretical_mean(binomial) == pytest.approx(2.0)
    assert theoretical_variance(binomial) == pytest.approx(1.6)
    assert theoretical_skewness(binomial) == pytest.approx(float(stats.binom.stats(10, 0.2, moments="s")))
    uniform = UniformParameters(a=0.0, b=1.0)
    assert theoretical_mean(uniform) == 0.5
    assert theoretical_variance(uniform) == pytest.approx(1 / 12)
    assert theoretical_sigma(uniform) == pytest.approx(1 / math.sqrt(12))
    assert theoretical_skewness(uniform) == 0.0
    normal = NormalParameters(m=2.0, sigma=3.0)
    assert (theoretical_mean(normal), theoretical_variance(normal), theoretical_sigma(normal)) == (2.0, 9.0, 3.0)
    with pytest.raises(NumericDegenerateError):
        theoretical_skewness(BinomialParameters(n=10, p=0.0))


def test_estimate_distribution_from_generation_result():
    result = generate_result(NormalParameters(m=5.0, sigma=2.0), 2000, seed=8)
    estimate = estimate_distribution(result)
    assert estimate.distribution_name == "Normal"
    assert estimate.sample_size == 2000
    assert estimate.theoretical_variance == 4.0
    assert estimate.mean_error < 0.2
    assert estimate.corrected_sample_variance == pytest.approx(estimate.sample_variance * 2000 / 1999)
    assert estimate.to_dict()["theoretical_sigma"] == 2.0


def test_parameter_set_defaults():
    params = ParameterSet()
    assert params.binomial == BinomialParameters(n=10, p=0.5)
    assert params.uniform == UniformParameters(a=0.0, b=1.0)
    assert params.normal == NormalParameters(m=0.0, sigma=1.0)
    assert params.total_sample_size == 600
    assert params.copy_with(normal_sample_size=50).total_sample_size == 450


def test_estimate_all_default_parameters():
    estimates = estimate_all(seed=42)
    assert estimates.total_sample_size == 600
    assert abs(estimates.binomial.sample_mean - 5.0) < 0.5
    assert abs(estimates.uniform.sample_mean - 0.5) < 0.1
    assert abs(estimates.normal.sample_mean) < 0.3
    assert list(estimates.to_frame()["distribution_name"]) == ["Binomial", "Uniform", "Normal"]


def test_estimate_all_reproducible_and_validated():
    assert estimate_all(seed=3) == estimate_all(seed=3)
    with pytest.raises(InvalidParameterError):
        estimate_all(ParameterSet(uniform_sample_size=0), seed=1)
    with pytest.raises(InvalidParameterError):
        estimate_all(ParameterSet(uniform=UniformParameters(a=1.0, b=0.0)), seed=1)

import math

import pytest
from scipy import stats

from stat_inference_engine import (
    BayesianClassifier,
    IntervalEstimationCalculator,
    estimate_all,
    evaluate_classifiers,
    generate_result,
)
from stat_inference_engine.estimation.point import corrected_standard_deviation, sample_mean
from stat_inference_engine.interfaces.distribution import NormalParameters, UniformParameters


def test_generated_sample_feeds_interval_estimates():
    result = generate_result(NormalParameters(m=10.0, sigma=2.0), 500, seed=11)
    values = result.samples
    estimates = IntervalEstimationCalculator().calculate_normal_intervals(
        sample_mean(values), corrected_standard_deviation(values), len(values), theoretical_sigma=2.0
    )
    assert estimates.sigma_known.contains(10.0)
    assert estimates.variance_interval.contains(4.0)
    assert sum(iv.frequency for iv in result.interval_data.intervals) == 500


def test_default_classifier_theoretical_matches_empirical():
    clf = BayesianClassifier.default()
    theoretical = clf.theoretical_error("numeric")
    analytic = clf.theoretical_error("analytic")
    expected = 0.5 * (stats.norm.cdf(0.0) - stats.norm.cdf(-2.0))
    assert theoretical.total_error == pytest.approx(expected, abs=1e-4)
    assert analytic.total_error == pytest.approx(theoretical.total_error, abs=1e-6)

    empirical = clf.empirical_error(5000, seed=17)
    assert empirical.total_samples == 10000
    assert abs(empirical.error_rate - theoretical.total_error) < 0.02


def test_batch_matches_single_runs():
    classifiers = [
        BayesianClassifier.default(),
        BayesianClassifier(class1=UniformParameters(a=0.0, b=2.0), class2=NormalParameters(m=2.0, sigma=0.5)),
    ]
    evaluations = evaluate_classifiers(classifiers, samples_per_class=300, seed=5, max_workers=2)
    assert [e.status for e in evaluations] == ["success", "success"]
    for clf, evaluation in zip(classifiers, evaluations):
        assert evaluation.theoretical.total_error == pytest.approx(clf.theoretical_error().total_error)
        assert 0.0 <= evaluation.empirical.error_rate <= 1.0


def test_estimate_all_tracks_theory_for_large_samples():
    from stat_inference_engine.estimation.point import ParameterSet

    params = ParameterSet(binomial_sample_size=5000, uniform_sample_size=5000, normal_sample_size=5000)
    estimates = estimate_all(params, seed=23)
    for item in (estimates.binomial, estimates.uniform, estimates.normal):
        assert item.mean_error < 4 * math.sqrt(item.theoretical_variance / 5000)
        assert item.variance_error < 0.1 * item.theoretical_variance + 0.01

import pytest

from stat_inference_engine.classifier.batch import evaluate_classifiers
from stat_inference_engine.classifier.bayes import BayesianClassifier
from stat_inference_engine.classifier.charts import density_curve
from stat_inference_engine.classifier.samples import generate_test_data
from stat_inference_engine.exceptions import InvalidParameterError
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    NormalParameters,
    UniformParameters,
)


def _classifiers():
    return [
        BayesianClassifier.default(),
        BayesianClassifier(class1=NormalParameters(m=0.0, sigma=1.0), class2=NormalParameters(m=2.0, sigma=1.0)),
        BayesianClassifier(class1=BinomialParameters(n=10, p=0.3), class2=BinomialParameters(n=10, p=0.6)),
        BayesianClassifier.default().copy_with(p1=0.9),
    ]


def test_evaluate_classifiers_keeps_order_and_records_failures():
    results = evaluate_classifiers(_classifiers(), samples_per_class=200, seed=11, max_workers=3)
    assert [r.index for r in results] == [0, 1, 2, 3]
    assert [r.status for r in results] == ["success", "success", "success", "failed"]
    assert results[0].theoretical is not None
    assert results[2].theoretical is None
    assert results[2].empirical is not None
    assert "Priors" in results[3].error
    assert results[3].to_dict()["status"] == "failed"


def test_evaluate_classifiers_is_deterministic_across_worker_counts():
    serial = evaluate_classifiers(_classifiers()[:3], samples_per_class=150, seed=5, max_workers=1)
    parallel = evaluate_classifiers(_classifiers()[:3], samples_per_class=150, seed=5, max_workers=3)
    assert [r.empirical.error_rate for r in serial] == [r.empirical.error_rate for r in parallel]


def test_evaluate_classifiers_requires_input():
    with pytest.raises(InvalidParameterError):
        evaluate_classifiers([])


def test_generate_test_data_equal_split_and_seeded():
    data = generate_test_data(UniformParameters(a=0.0, b=1.0), NormalParameters(m=5.0, sigma=1.0), 100, seed=3)
    assert len(data) == 200
    assert sum(1 for s in data if s.true_class) == 100
    again = generate_test_data(UniformParameters(a=0.0, b=1.0), NormalParameters(m=5.0, sigma=1.0), 100, seed=3)
    assert data == again
    labels = [s.true_class for s in data]
    assert labels != sorted(labels, reverse=True)


def test_generate_test_data_rejects_bad_count():
    with pytest.raises(InvalidParameterError):
        generate_test_data(UniformParameters(a=0.0, b=1.0), UniformParameters(a=0.0, b=1.0), 0)


def test_density_curve_points():
    points = density_curve(UniformParameters(a=3.0, b=5.0), 0.5, 0.0, 6.0, steps=150)
    assert len(points) == 151
    assert points[0].x == 0.0 and points[0].y == 0.0
    assert points[-1].x == pytest.approx(6.0)
    assert max(p.y for p in points) == 0.25
    with pytest.raises(InvalidParameterError):
        density_curve(UniformParameters(a=3.0, b=5.0), 0.5, 2.0, 1.0)

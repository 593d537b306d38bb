import logging
import math

import numpy as np
import pytest

from stat_inference_engine.distributions.factory import (
    generate,
    generate_result,
    get_generator,
    get_generator_for_kind,
    make_rng,
)
from stat_inference_engine.distributions.normal import NormalGenerator, box_muller
from stat_inference_engine.distributions.uniform import UniformGenerator
from stat_inference_engine.exceptions import InvalidParameterError, UnsupportedVariantError
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    NormalParameters,
    UniformParameters,
)


def test_uniform_generator_inverse_transform():
    values = UniformGenerator().generate(UniformParameters(a=3.0, b=5.0), 500, rng=make_rng(7))
    for v in values:
        assert 3.0 <= v.value < 5.0
        assert v.value == pytest.approx(3.0 + v.random_u * 2.0)
        assert v.auxiliary_info["a"] == 3.0


def test_box_muller_transform_values():
    assert box_muller(0.0, 0.0) == 0.0
    assert box_muller(1 - math.exp(-0.5), 0.0) == pytest.approx(1.0)
    assert box_muller(1 - math.exp(-0.5), 0.5) == pytest.approx(-1.0)


def test_normal_box_muller_moments():
    values = NormalGenerator().generate(NormalParameters(m=2.0, sigma=3.0), 20_000, rng=make_rng(11))
    samples = np.array([v.value for v in values])
    assert abs(samples.mean() - 2.0) < 0.1
    assert abs(samples.std(ddof=1) - 3.0) < 0.1


def test_normal_box_muller_records_both_draws():
    value = NormalGenerator().generate(NormalParameters(m=0.0, sigma=1.0), 1, rng=make_rng(5))[0]
    assert value.auxiliary_info["method"] == "box_muller"
    assert value.value == pytest.approx(box_muller(value.random_u, value.auxiliary_info["u2"]))


def test_normal_clt12_is_bounded_and_centered():
    values = NormalGenerator(method="clt12").generate(NormalParameters(m=1.0, sigma=0.5), 5_000, rng=make_rng(2))
    samples = np.array([v.value for v in values])
    assert samples.min() >= 1.0 - 3.0
    assert samples.max() <= 1.0 + 3.0
    assert abs(samples.mean() - 1.0) < 0.05


def test_normal_generator_rejects_unknown_method_and_sigma():
    with pytest.raises(InvalidParameterError):
        NormalGenerator(method="polar")  # type: ignore[arg-type]
    with pytest.raises(InvalidParameterError):
        NormalGenerator().generate(NormalParameters(m=0.0, sigma=0.0), 10)


@pytest.mark.parametrize(
    "params",
    [BinomialParameters(n=10, p=0.4), UniformParameters(a=-1.0, b=1.0), NormalParameters(m=0.0, sigma=1.0)],
)
def test_generate_same_seed_is_reproducible(params):
    first = generate(params, 100, seed=123)
    second = generate(params, 100, seed=123)
    assert [v.value for v in first] == [v.value for v in second]
    assert [v.random_u for v in first] == [v.random_u for v in second]


def test_generate_shared_rng_advances():
    rng = make_rng(9)
    first = generate(UniformParameters(a=0.0, b=1.0), 10, rng=rng)
    second = generate(UniformParameters(a=0.0, b=1.0), 10, rng=rng)
    assert [v.value for v in first] != [v.value for v in second]


def test_get_generator_dispatch():
    assert isinstance(get_generator(UniformParameters(a=0.0, b=1.0)), UniformGenerator)
    assert get_generator(NormalParameters(m=0.0, sigma=1.0), normal_method="clt12").method == "clt12"
    assert get_generator_for_kind("Gaussian").kind == "normal"
    with pytest.raises(UnsupportedVariantError):
        get_generator_for_kind("poisson")
    with pytest.raises(UnsupportedVariantError):
        get_generator(object())  # type: ignore[arg-type]


def test_generate_under_debug_logging(caplog):
    caplog.set_level(logging.DEBUG)
    values = generate(NormalParameters(m=0.0, sigma=1.0), 5, seed=1)
    result = generate_result(BinomialParameters(n=4, p=0.5), 20, seed=2)
    assert len(values) == 5
    assert result.sample_size == 20
    messages = [record.getMessage() for record in caplog.records]
    assert "Generated sample" in messages


@pytest.mark.parametrize("sample_size", [1, 2, 7, 200, 1000])
@pytest.mark.parametrize(
    "params",
    [BinomialParameters(n=10, p=0.5), UniformParameters(a=3.0, b=5.0), NormalParameters(m=5.0, sigma=1.0)],
)
def test_generate_result_frequencies_sum_to_sample_size(params, sample_size):
    result = generate_result(params, sample_size, seed=42)
    assert sum(result.frequency_dict.values()) == sample_size
    assert result.sample_size == sample_size == len(result.values)


def test_generate_result_binomial_carries_cumulative_array():
    result = generate_result(BinomialParameters(n=10, p=0.5), 200, seed=1)
    assert len(result.cumulative_probabilities) == 11
    assert result.cumulative_probabilities[-1] == 1.0
    assert set(result.frequency_dict) == set(range(11))


def test_generate_result_uses_sturges_rule_by_default():
    result = generate_result(UniformParameters(a=0.0, b=1.0), 200, seed=1)
    assert result.interval_data.number_of_intervals == 7
    assert result.interval_data.intervals[0].start == 0.0
    assert result.interval_data.intervals[-1].end == 1.0


def test_generate_result_explicit_interval_count_and_normal_info():
    result = generate_result(NormalParameters(m=0.0, sigma=1.0), 300, number_of_intervals=12, seed=4, normal_method="clt12")
    assert result.interval_data.number_of_intervals == 12
    assert result.additional_info == {"normal_method": "clt12"}


def test_generate_result_rejects_invalid_parameters():
    with pytest.raises(InvalidParameterError):
        generate_result(UniformParameters(a=5.0, b=3.0), 10, seed=1)
    with pytest.raises(InvalidParameterError):
        generate_result(NormalParameters(m=0.0, sigma=1.0), 0, seed=1)

"""Factory for sampling generators and the top-level ``generate`` entry points."""

from __future__ import annotations

import time
from typing import Optional

import numpy as np
from numpy.random import PCG64, Generator

from stat_inference_engine.distributions.binomial import BinomialGenerator, cumulative_probabilities
from stat_inference_engine.distributions.models import GeneratedValue
from stat_inference_engine.distributions.normal import NormalGenerator, NormalMethod
from stat_inference_engine.distributions.uniform import UniformGenerator
from stat_inference_engine.distributions.validation_core import require_positive_count, validate_parameters
from stat_inference_engine.exceptions import UnsupportedVariantError
from stat_inference_engine.histogram.intervals import (
    build_discrete_frequencies,
    build_intervals,
    sturges_interval_count,
)
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    DistributionGenerator,
    DistributionParameters,
    NormalParameters,
    UniformParameters,
)
from stat_inference_engine.schema.generation_result import GenerationResult
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="generators")


def make_rng(seed: int | None = None) -> np.random.Generator:
    return Generator(PCG64(seed)) if seed is not None else np.random.default_rng()


def get_generator_for_kind(name: str, normal_method: NormalMethod = "box_muller") -> DistributionGenerator:
    name = name.lower()
    if name == "binomial":
        return BinomialGenerator()
    if name == "uniform":
        return UniformGenerator()
    if name in {"normal", "gaussian"}:
        return NormalGenerator(method=normal_method)
    raise UnsupportedVariantError(f"Unknown distribution: {name}")


def get_generator(parameters: DistributionParameters, normal_method: NormalMethod = "box_muller") -> DistributionGenerator:
    if isinstance(parameters, BinomialParameters):
        return BinomialGenerator()
    if isinstance(parameters, UniformParameters):
        return UniformGenerator()
    if isinstance(parameters, NormalParameters):
        return NormalGenerator(method=normal_method)
    raise UnsupportedVariantError(f"Unsupported distribution parameters: {type(parameters).__name__}")


def generate(
    parameters: DistributionParameters,
    sample_size: int,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: int | None = None,
    normal_method: NormalMethod = "box_muller",
) -> list[GeneratedValue]:
    """Draw ``sample_size`` values for ``parameters``.

    An explicit ``rng`` wins over ``seed``; with neither, fresh OS entropy is used.
    A shared ``rng`` must not be used by two concurrent calls.
    """

    generator = get_generator(parameters, normal_method=normal_method)
    rng = rng if rng is not None else make_rng(seed)
    started = time.perf_counter()
    values = generator.generate(parameters, sample_size, rng=rng)
    log.debug(
        "Generated sample",
        extra={
            "distribution": parameters.kind,
            "sample_size": sample_size,
            "duration_ms": round((time.perf_counter() - started) * 1000, 3),
        },
    )
    return values


def generate_result(
    parameters: DistributionParameters,
    sample_size: int,
    *,
    number_of_intervals: int | None = None,
    rng: Optional[np.random.Generator] = None,
    seed: int | None = None,
    normal_method: NormalMethod = "box_muller",
) -> GenerationResult:
    """Generate a sample and bundle it with its frequency table."""

    validate_parameters(parameters)
    require_positive_count("sample_size", sample_size)
    values = generate(parameters, sample_size, rng=rng, seed=seed, normal_method=normal_method)
    samples = [v.value for v in values]

    cumulative = None
    if isinstance(parameters, BinomialParameters):
        interval_data = build_discrete_frequencies(samples, parameters.n)
        cumulative = cumulative_probabilities(parameters.n, parameters.p).tolist()
    else:
        count = number_of_intervals if number_of_intervals is not None else sturges_interval_count(sample_size)
        value_range = (parameters.a, parameters.b) if isinstance(parameters, UniformParameters) else None
        if value_range is None and min(samples) == max(samples):
            # a single distinct value has no span; centre a unit-width range on it
            value_range = (samples[0] - 0.5, samples[0] + 0.5)
        interval_data = build_intervals(samples, count, value_range=value_range)

    return GenerationResult(
        parameters=parameters,
        values=values,
        sample_size=sample_size,
        interval_data=interval_data,
        cumulative_probabilities=cumulative,
        additional_info={"normal_method": normal_method} if isinstance(parameters, NormalParameters) else {},
    )

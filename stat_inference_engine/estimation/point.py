"""Point estimates from samples and theoretical moments per distribution."""

from __future__ import annotations

import math
import time
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from stat_inference_engine.distributions.factory import generate_result, make_rng
from stat_inference_engine.distributions.normal import NormalMethod
from stat_inference_engine.distributions.validation_core import (
    require_positive_count,
    validate_parameters,
    validate_samples,
)
from stat_inference_engine.exceptions import InvalidParameterError, NumericDegenerateError, UnsupportedVariantError
from stat_inference_engine.interfaces.distribution import (
    DISTRIBUTION_INFO,
    BinomialParameters,
    DistributionParameters,
    NormalParameters,
    UniformParameters,
)
from stat_inference_engine.schema.generation_result import GenerationResult
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="estimation")


# sample statistics


def sample_mean(values: Sequence[float]) -> float:
    return float(validate_samples(values).mean())


def sample_variance(values: Sequence[float]) -> float:
    """Uncorrected (biased) variance, divisor n."""
    return float(validate_samples(values).var(ddof=0))


def corrected_variance(values: Sequence[float]) -> float:
    """Unbiased variance, divisor n - 1."""

    data = validate_samples(values)
    if data.size < 2:
        raise InvalidParameterError("Corrected variance needs at least two values")
    return float(data.var(ddof=1))


def standard_deviation(values: Sequence[float]) -> float:
    return math.sqrt(sample_variance(values))


def corrected_standard_deviation(values: Sequence[float]) -> float:
    return math.sqrt(corrected_variance(values))


def median(values: Sequence[float]) -> float:
    return float(np.median(validate_samples(values)))


def mode(values: Sequence[float]) -> float:
    """Most frequent value; ties resolve to the value seen first."""

    data = validate_samples(values)
    return float(Counter(data.tolist()).most_common(1)[0][0])


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Uncorrected standard deviation over the mean, in percent (0 when the mean is 0)."""

    mean = sample_mean(values)
    if mean == 0:
        return 0.0
    return standard_deviation(values) / mean * 100


# theoretical moments


def theoretical_mean(params: DistributionParameters) -> float:
    if isinstance(params, BinomialParameters):
        return params.n * params.p
    if isinstance(params, UniformParameters):
        return (params.a + params.b) / 2
    if isinstance(params, NormalParameters):
        return float(params.m)
    raise UnsupportedVariantError(f"Unsupported distribution parameters: {type(params).__name__}")


def theoretical_variance(params: DistributionParameters) -> float:
    if isinstance(params, BinomialParameters):
        return params.n * params.p * (1 - params.p)
    if isinstance(params, UniformParameters):
        return (params.b - params.a) ** 2 / 12
    if isinstance(params, NormalParameters):
        return params.sigma * params.sigma
    raise UnsupportedVariantError(f"Unsupported distribution parameters: {type(params).__name__}")


def theoretical_sigma(params: DistributionParameters) -> float:
    return math.sqrt(theoretical_variance(params))


def theoretical_skewness(params: DistributionParameters) -> float:
    if isinstance(params, BinomialParameters):
        variance = theoretical_variance(params)
        if variance == 0:
            raise NumericDegenerateError(f"Skewness undefined for degenerate binomial p={params.p}")
        return (1 - 2 * params.p) / math.sqrt(variance)
    if isinstance(params, (UniformParameters, NormalParameters)):
        return 0.0
    raise UnsupportedVariantError(f"Unsupported distribution parameters: {type(params).__name__}")


@dataclass(frozen=True)
class DistributionEstimate:
    distribution_name: str
    sample_mean: float
    theoretical_mean: float
    sample_variance: float
    corrected_sample_variance: float
    theoretical_variance: float
    sample_sigma: float
    theoretical_sigma: float
    sample_size: int

    @property
    def corrected_sample_sigma(self) -> float:
        return math.sqrt(self.corrected_sample_variance)

    @property
    def mean_error(self) -> float:
        return abs(self.sample_mean - self.theoretical_mean)

    @property
    def variance_error(self) -> float:
        return abs(self.corrected_sample_variance - self.theoretical_variance)

    def to_dict(self) -> dict[str, Any]:
        return {
            "distribution_name": self.distribution_name,
            "sample_size": self.sample_size,
            "sample_mean": self.sample_mean,
            "theoretical_mean": self.theoretical_mean,
            "sample_variance": self.sample_variance,
            "corrected_sample_variance": self.corrected_sample_variance,
            "theoretical_variance": self.theoretical_variance,
            "sample_sigma": self.sample_sigma,
            "theoretical_sigma": self.theoretical_sigma,
        }


@dataclass(frozen=True)
class ParameterSet:
    """One parameter set and sample size per distribution kind."""

    binomial: BinomialParameters = field(default_factory=lambda: BinomialParameters(n=10, p=0.5))
    uniform: UniformParameters = field(default_factory=lambda: UniformParameters(a=0.0, b=1.0))
    normal: NormalParameters = field(default_factory=lambda: NormalParameters(m=0.0, sigma=1.0))
    binomial_sample_size: int = 200
    uniform_sample_size: int = 200
    normal_sample_size: int = 200

    def copy_with(self, **overrides: Any) -> "ParameterSet":
        return replace(self, **overrides)

    @property
    def total_sample_size(self) -> int:
        return self.binomial_sample_size + self.uniform_sample_size + self.normal_sample_size


@dataclass(frozen=True)
class AllParameterEstimates:
    binomial: DistributionEstimate
    uniform: DistributionEstimate
    normal: DistributionEstimate
    total_sample_size: int

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([self.binomial.to_dict(), self.uniform.to_dict(), self.normal.to_dict()])

    def to_dict(self) -> dict[str, Any]:
        return {
            "binomial": self.binomial.to_dict(),
            "uniform": self.uniform.to_dict(),
            "normal": self.normal.to_dict(),
            "total_sample_size": self.total_sample_size,
        }


def estimate_distribution(result: GenerationResult, distribution_name: Optional[str] = None) -> DistributionEstimate:
    """Compare sample moments of a generation result with the theoretical ones."""

    values = [float(v) for v in result.samples]
    if len(values) < 2:
        raise InvalidParameterError("At least two values are required for point estimates")
    params = result.parameters
    variance = sample_variance(values)
    name = distribution_name or DISTRIBUTION_INFO[params.kind].name
    return DistributionEstimate(
        distribution_name=name,
        sample_mean=sample_mean(values),
        theoretical_mean=theoretical_mean(params),
        sample_variance=variance,
        corrected_sample_variance=corrected_variance(values),
        theoretical_variance=theoretical_variance(params),
        sample_sigma=math.sqrt(variance),
        theoretical_sigma=theoretical_sigma(params),
        sample_size=result.sample_size,
    )


def estimate_all(
    parameter_set: Optional[ParameterSet] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: int | None = None,
    normal_method: NormalMethod = "box_muller",
) -> AllParameterEstimates:
    """Generate binomial, uniform and normal samples from one generator and estimate each."""

    parameter_set = parameter_set or ParameterSet()
    for params in (parameter_set.binomial, parameter_set.uniform, parameter_set.normal):
        validate_parameters(params)
    require_positive_count("binomial_sample_size", parameter_set.binomial_sample_size)
    require_positive_count("uniform_sample_size", parameter_set.uniform_sample_size)
    require_positive_count("normal_sample_size", parameter_set.normal_sample_size)

    rng = rng if rng is not None else make_rng(seed)
    started = time.perf_counter()
    estimates = {}
    for params, size in (
        (parameter_set.binomial, parameter_set.binomial_sample_size),
        (parameter_set.uniform, parameter_set.uniform_sample_size),
        (parameter_set.normal, parameter_set.normal_sample_size),
    ):
        result = generate_result(params, size, rng=rng, normal_method=normal_method)
        estimates[params.kind] = estimate_distribution(result)

    log.info(
        "Point estimates computed",
        extra={
            "sample_size": parameter_set.total_sample_size,
            "duration_ms": round((time.perf_counter() - started) * 1000, 3),
        },
    )
    return AllParameterEstimates(
        binomial=estimates["binomial"],
        uniform=estimates["uniform"],
        normal=estimates["normal"],
        total_sample_size=parameter_set.total_sample_size,
    )

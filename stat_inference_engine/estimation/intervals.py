"""Confidence intervals for the mean and variance of a normal population."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from stat_inference_engine.distributions.validation_core import validate_samples
from stat_inference_engine.estimation.quantiles import chi_squared_quantile, student_t_quantile, two_sided_z
from stat_inference_engine.exceptions import InvalidParameterError
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="estimation")


@dataclass(frozen=True)
class ConfidenceInterval:
    lower_bound: float
    upper_bound: float
    confidence_level: float
    parameter_name: str

    @property
    def width(self) -> float:
        return self.upper_bound - self.lower_bound

    @property
    def center(self) -> float:
        return (self.lower_bound + self.upper_bound) / 2

    def contains(self, value: float) -> bool:
        return self.lower_bound <= value <= self.upper_bound

    def to_dict(self) -> dict[str, Any]:
        return {
            "parameter_name": self.parameter_name,
            "lower_bound": self.lower_bound,
            "upper_bound": self.upper_bound,
            "confidence_level": self.confidence_level,
            "width": self.width,
            "center": self.center,
        }

    def __str__(self) -> str:
        return (
            f"{self.parameter_name}: [{self.lower_bound}, {self.upper_bound}] "
            f"(confidence {self.confidence_level * 100:g}%)"
        )


@dataclass(frozen=True)
class NormalIntervalEstimates:
    sigma_known: ConfidenceInterval
    sigma_unknown: ConfidenceInterval
    variance_interval: ConfidenceInterval
    sample_size: int
    sample_mean: float
    sample_sigma: float
    confidence_level: float

    @property
    def intervals(self) -> list[ConfidenceInterval]:
        return [self.sigma_known, self.sigma_unknown, self.variance_interval]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([interval.to_dict() for interval in self.intervals])

    def to_dict(self) -> dict[str, Any]:
        return {
            "sample_size": self.sample_size,
            "sample_mean": self.sample_mean,
            "sample_sigma": self.sample_sigma,
            "confidence_level": self.confidence_level,
            "sigma_known": self.sigma_known.to_dict(),
            "sigma_unknown": self.sigma_unknown.to_dict(),
            "variance_interval": self.variance_interval.to_dict(),
        }


def _require_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be a finite number, got {value!r}")


class IntervalEstimationCalculator:
    """Interval estimates for a normal population from summary statistics.

    ``sample_sigma`` is the corrected (n - 1) standard deviation ``s``.
    Critical points come from ``estimation.quantiles``: ``z`` for the known
    sigma case, ``t(n - 1)`` for the unknown sigma case, and lower-tail
    ``chi2(n - 1)`` quantiles for the variance.
    """

    def calculate_normal_intervals(
        self,
        sample_mean: float,
        sample_sigma: float,
        sample_size: int,
        theoretical_sigma: Optional[float] = None,
        confidence_level: float = 0.95,
    ) -> NormalIntervalEstimates:
        _require_finite("sample_mean", sample_mean)
        _require_finite("sample_sigma", sample_sigma)
        if sample_sigma < 0:
            raise InvalidParameterError(f"sample_sigma must be >= 0, got {sample_sigma}")
        if isinstance(sample_size, bool) or not isinstance(sample_size, (int, np.integer)) or sample_size < 2:
            raise InvalidParameterError(f"sample_size must be an integer >= 2, got {sample_size!r}")
        _require_finite("confidence_level", confidence_level)
        if not 0.0 < confidence_level < 1.0:
            raise InvalidParameterError(f"confidence_level must be in (0, 1), got {confidence_level}")
        if theoretical_sigma is not None:
            _require_finite("theoretical_sigma", theoretical_sigma)
            if theoretical_sigma <= 0:
                raise InvalidParameterError(f"theoretical_sigma must be > 0, got {theoretical_sigma}")

        n = int(sample_size)
        df = n - 1
        alpha = 1 - confidence_level
        root_n = math.sqrt(n)

        z = two_sided_z(confidence_level)
        sigma = theoretical_sigma if theoretical_sigma is not None else sample_sigma
        known_margin = z * sigma / root_n
        sigma_known = ConfidenceInterval(
            lower_bound=sample_mean - known_margin,
            upper_bound=sample_mean + known_margin,
            confidence_level=confidence_level,
            parameter_name="mean (sigma known)",
        )

        t = student_t_quantile(1 - alpha / 2, df)
        unknown_margin = t * sample_sigma / root_n
        sigma_unknown = ConfidenceInterval(
            lower_bound=sample_mean - unknown_margin,
            upper_bound=sample_mean + unknown_margin,
            confidence_level=confidence_level,
            parameter_name="mean (sigma unknown)",
        )

        scaled = df * sample_sigma * sample_sigma
        variance_interval = ConfidenceInterval(
            lower_bound=scaled / chi_squared_quantile(1 - alpha / 2, df),
            upper_bound=scaled / chi_squared_quantile(alpha / 2, df),
            confidence_level=confidence_level,
            parameter_name="variance",
        )

        log.debug(
            "Normal intervals computed",
            extra={"sample_size": n, "confidence_level": confidence_level, "z": z, "t": t},
        )
        return NormalIntervalEstimates(
            sigma_known=sigma_known,
            sigma_unknown=sigma_unknown,
            variance_interval=variance_interval,
            sample_size=n,
            sample_mean=sample_mean,
            sample_sigma=sample_sigma,
            confidence_level=confidence_level,
        )


def calculate_normal_intervals(
    sample_mean: float,
    sample_sigma: float,
    sample_size: int,
    theoretical_sigma: Optional[float] = None,
    confidence_level: float = 0.95,
) -> NormalIntervalEstimates:
    return IntervalEstimationCalculator().calculate_normal_intervals(
        sample_mean,
        sample_sigma,
        sample_size,
        theoretical_sigma=theoretical_sigma,
        confidence_level=confidence_level,
    )


def estimate_intervals_from_samples(
    values: Sequence[float],
    theoretical_sigma: Optional[float] = None,
    confidence_level: float = 0.95,
) -> NormalIntervalEstimates:
    """Summarize raw values and build their normal intervals."""

    data = validate_samples(values)
    if data.size < 2:
        raise InvalidParameterError("At least two values are required for interval estimates")
    return calculate_normal_intervals(
        float(data.mean()),
        float(data.std(ddof=1)),
        int(data.size),
        theoretical_sigma=theoretical_sigma,
        confidence_level=confidence_level,
    )

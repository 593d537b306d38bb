"""Point and interval estimation."""

from stat_inference_engine.estimation.intervals import (
    ConfidenceInterval,
    IntervalEstimationCalculator,
    NormalIntervalEstimates,
    calculate_normal_intervals,
    estimate_intervals_from_samples,
)
from stat_inference_engine.estimation.point import (
    AllParameterEstimates,
    DistributionEstimate,
    ParameterSet,
    estimate_all,
    estimate_distribution,
)
from stat_inference_engine.estimation.quantiles import (
    chi_squared_quantile,
    standard_normal_quantile,
    student_t_quantile,
    two_sided_z,
)

__all__ = [
    "AllParameterEstimates",
    "ConfidenceInterval",
    "DistributionEstimate",
    "IntervalEstimationCalculator",
    "NormalIntervalEstimates",
    "ParameterSet",
    "calculate_normal_intervals",
    "chi_squared_quantile",
    "estimate_all",
    "estimate_distribution",
    "estimate_intervals_from_samples",
    "standard_normal_quantile",
    "student_t_quantile",
    "two_sided_z",
]

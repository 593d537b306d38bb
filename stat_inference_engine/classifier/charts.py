"""Plot-ready weighted density curves."""

from __future__ import annotations

import math

from stat_inference_engine.classifier.densities import density
from stat_inference_engine.classifier.models import DensityPoint
from stat_inference_engine.distributions.validation_core import require_positive_count, validate_parameters
from stat_inference_engine.exceptions import InvalidParameterError
from stat_inference_engine.interfaces.distribution import DistributionParameters


def density_curve(
    params: DistributionParameters,
    prior: float,
    min_x: float,
    max_x: float,
    steps: int = 150,
) -> list[DensityPoint]:
    """``steps + 1`` evenly spaced points of ``prior * f(x)`` on [min_x, max_x]."""

    validate_parameters(params)
    require_positive_count("steps", steps)
    if not (math.isfinite(min_x) and math.isfinite(max_x)) or min_x >= max_x:
        raise InvalidParameterError(f"Invalid curve range [{min_x}, {max_x}]")
    step = (max_x - min_x) / steps
    return [DensityPoint(x=min_x + i * step, y=prior * density(params, min_x + i * step)) for i in range(steps + 1)]

"""Numerical and closed-form integration of weighted densities over an interval."""

from __future__ import annotations

import math
from typing import Callable

from stat_inference_engine.classifier.densities import CdfMode, cdf, density, density_support
from stat_inference_engine.exceptions import NumericDegenerateError
from stat_inference_engine.interfaces.distribution import DistributionParameters

SIMPSON_STEPS = 100


def simpson(f: Callable[[float], float], a: float, b: float, steps: int = SIMPSON_STEPS) -> float:
    """Composite Simpson's rule with ``steps`` sub-intervals (rounded up to even)."""

    if not (math.isfinite(a) and math.isfinite(b)):
        raise NumericDegenerateError(f"Non-finite integration bounds [{a}, {b}]")
    if b < a:
        raise NumericDegenerateError(f"Reversed integration bounds [{a}, {b}]")
    if a == b:
        return 0.0
    if steps <= 0:
        raise NumericDegenerateError("Simpson's rule needs a positive step count")
    if steps % 2:
        steps += 1

    h = (b - a) / steps
    total = f(a) + f(b)
    for i in range(1, steps):
        total += (4.0 if i % 2 else 2.0) * f(a + i * h)
    result = total * h / 3
    if not math.isfinite(result):
        raise NumericDegenerateError(f"Simpson integration over [{a}, {b}] is not finite")
    return result


def _clip_to_support(params: DistributionParameters, a: float, b: float) -> tuple[float, float]:
    lower, upper = density_support(params)
    return max(a, lower), min(b, upper)


def integrate_numeric(params: DistributionParameters, a: float, b: float, prior: float, steps: int = SIMPSON_STEPS) -> float:
    """prior * integral of the density over [a, b] by Simpson's rule.

    The range is first clipped to the density's own support so jump
    discontinuities (uniform edges) never fall inside a Simpson panel.
    """

    start, end = _clip_to_support(params, a, b)
    if start >= end:
        return 0.0
    return simpson(lambda x: prior * density(params, x), start, end, steps)


def integrate_closed_form(params: DistributionParameters, a: float, b: float, prior: float, mode: CdfMode = "analytic") -> float:
    """prior * (F(b) - F(a)) using the erf-based (analytic) or Laplace-table CDF."""

    if b < a:
        raise NumericDegenerateError(f"Reversed integration bounds [{a}, {b}]")
    result = prior * (cdf(params, b, mode=mode) - cdf(params, a, mode=mode))
    if not math.isfinite(result):
        raise NumericDegenerateError(f"Closed-form integration over [{a}, {b}] is not finite")
    return result

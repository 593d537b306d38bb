"""Density, CDF and support helpers dispatched over the parameter variants."""

from __future__ import annotations

import bisect
import math
from typing import Literal, Tuple

from scipy.special import erf

from stat_inference_engine.distributions.binomial import binomial_probability
from stat_inference_engine.exceptions import UnsupportedVariantError
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    DistributionParameters,
    NormalParameters,
    UniformParameters,
)

CdfMode = Literal["analytic", "table"]

_SQRT_2 = math.sqrt(2.0)
_SQRT_2PI = math.sqrt(2.0 * math.pi)

# Laplace function Phi0(x) = Phi(x) - 0.5 tabulated at step 0.05 on [0, 4].
LAPLACE_TABLE_STEP = 0.05
LAPLACE_TABLE: Tuple[float, ...] = (
    0.0000, 0.0199, 0.0398, 0.0596, 0.0793, 0.0987, 0.1179, 0.1368, 0.1554, 0.1736,
    0.1915, 0.2088, 0.2257, 0.2422, 0.2580, 0.2734, 0.2881, 0.3023, 0.3159, 0.3289,
    0.3413, 0.3531, 0.3643, 0.3749, 0.3849, 0.3944, 0.4032, 0.4115, 0.4192, 0.4265,
    0.4332, 0.4394, 0.4452, 0.4505, 0.4554, 0.4599, 0.4641, 0.4678, 0.4713, 0.4744,
    0.4772, 0.4798, 0.4821, 0.4842, 0.4861, 0.4878, 0.4893, 0.4906, 0.4918, 0.4929,
    0.4938, 0.4946, 0.4953, 0.4960, 0.4965, 0.4970, 0.4974, 0.4978, 0.4981, 0.4984,
    0.4987, 0.4989, 0.4990, 0.4992, 0.4993, 0.4994, 0.4995, 0.4996, 0.4997, 0.4997,
    0.4998, 0.4998, 0.4998, 0.4999, 0.4999, 0.4999, 0.4999, 0.4999, 0.5000, 0.5000,
    0.5000,
)
_LAPLACE_KEYS = tuple(round(i * LAPLACE_TABLE_STEP, 2) for i in range(len(LAPLACE_TABLE)))


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def normal_pdf(x: float, m: float, sigma: float) -> float:
    z = (x - m) / sigma
    return math.exp(-0.5 * z * z) / (sigma * _SQRT_2PI)


def uniform_pdf(x: float, a: float, b: float) -> float:
    return 1.0 / (b - a) if a <= x <= b else 0.0


def density(params: DistributionParameters, x: float) -> float:
    """Density (continuous) or mass at round(x) (binomial)."""

    if isinstance(params, NormalParameters):
        return normal_pdf(x, params.m, params.sigma)
    if isinstance(params, UniformParameters):
        return uniform_pdf(x, params.a, params.b)
    if isinstance(params, BinomialParameters):
        return binomial_probability(params.n, params.p, round_half_up(x))
    raise UnsupportedVariantError(f"No density for {type(params).__name__}")


def laplace_function(x: float) -> float:
    """Phi0(|x|) from the table with linear interpolation; 0.5 beyond 4."""

    x = abs(x)
    if x >= _LAPLACE_KEYS[-1]:
        return 0.5
    upper = bisect.bisect_left(_LAPLACE_KEYS, x)
    if _LAPLACE_KEYS[upper] == x:
        return LAPLACE_TABLE[upper]
    lower = upper - 1
    t = (x - _LAPLACE_KEYS[lower]) / (_LAPLACE_KEYS[upper] - _LAPLACE_KEYS[lower])
    return LAPLACE_TABLE[lower] + t * (LAPLACE_TABLE[upper] - LAPLACE_TABLE[lower])


def normal_cdf(x: float, m: float = 0.0, sigma: float = 1.0, mode: CdfMode = "analytic") -> float:
    z = (x - m) / sigma
    if mode == "table":
        return 0.5 + laplace_function(z) if z >= 0 else 0.5 - laplace_function(z)
    return 0.5 * (1.0 + float(erf(z / _SQRT_2)))


def uniform_cdf(x: float, a: float, b: float) -> float:
    if x <= a:
        return 0.0
    if x >= b:
        return 1.0
    return (x - a) / (b - a)


def binomial_cdf(x: float, n: int, p: float) -> float:
    k = math.floor(x)
    if k < 0:
        return 0.0
    if k >= n:
        return 1.0
    return min(1.0, sum(binomial_probability(n, p, i) for i in range(k + 1)))


def cdf(params: DistributionParameters, x: float, mode: CdfMode = "analytic") -> float:
    if isinstance(params, NormalParameters):
        return normal_cdf(x, params.m, params.sigma, mode=mode)
    if isinstance(params, UniformParameters):
        return uniform_cdf(x, params.a, params.b)
    if isinstance(params, BinomialParameters):
        return binomial_cdf(x, params.n, params.p)
    raise UnsupportedVariantError(f"No CDF for {type(params).__name__}")


def support_bounds(params: DistributionParameters) -> Tuple[float, float]:
    """Effective support used to size the analysis domain."""

    if isinstance(params, NormalParameters):
        return params.m - 3 * params.sigma, params.m + 3 * params.sigma
    if isinstance(params, UniformParameters):
        return float(params.a), float(params.b)
    if isinstance(params, BinomialParameters):
        return 0.0, float(params.n)
    raise UnsupportedVariantError(f"No support bounds for {type(params).__name__}")


def density_support(params: DistributionParameters) -> Tuple[float, float]:
    """Interval outside of which the density is exactly zero."""

    if isinstance(params, UniformParameters):
        return float(params.a), float(params.b)
    if isinstance(params, NormalParameters):
        return -math.inf, math.inf
    if isinstance(params, BinomialParameters):
        return -0.5, params.n + 0.5
    raise UnsupportedVariantError(f"No support for {type(params).__name__}")

"""Binomial generator via inverse transform over the cumulative mass."""

from __future__ import annotations

from typing import Optional

import numpy as np
from scipy.special import gammaln

from stat_inference_engine.distributions.models import GeneratedValue
from stat_inference_engine.distributions.validation_core import require_positive_count, validate_parameters
from stat_inference_engine.exceptions import InvalidParameterError, NumericDegenerateError
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    DistributionGenerator,
    DistributionParameters,
)
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="generators")


def binomial_coefficient(n: int, k: int) -> int:
    """Exact C(n, k), multiplying then integer-dividing at every step."""

    if k < 0 or k > n:
        return 0
    if k == 0 or k == n:
        return 1
    k = min(k, n - k)
    result = 1
    for i in range(1, k + 1):
        result = result * (n - i + 1) // i
    return result


def binomial_probability(n: int, p: float, k: int) -> float:
    """P(X = k) for X ~ Binomial(n, p)."""

    if k < 0 or k > n:
        return 0.0
    if p == 0.0:
        return 1.0 if k == 0 else 0.0
    if p == 1.0:
        return 1.0 if k == n else 0.0
    coefficient = binomial_coefficient(n, k)
    # float(C(n, k)) overflows past n ~ 1029; fall back to log space there.
    try:
        return float(coefficient) * p**k * (1.0 - p) ** (n - k)
    except OverflowError:
        log_mass = _log_coefficient(n, k) + k * np.log(p) + (n - k) * np.log1p(-p)
        return float(np.exp(log_mass))


def _log_coefficient(n: int, k: int) -> float:
    return float(gammaln(n + 1) - gammaln(k + 1) - gammaln(n - k + 1))


def probability_mass(n: int, p: float) -> np.ndarray:
    """Mass array for k = 0..n, normalized to sum to one."""

    mass = np.array([binomial_probability(n, p, k) for k in range(n + 1)], dtype=float)
    total = mass.sum()
    if not np.isfinite(total) or total <= 0:
        raise NumericDegenerateError(f"Binomial mass for n={n}, p={p} does not normalize (sum={total})")
    return mass / total


def cumulative_probabilities(n: int, p: float) -> np.ndarray:
    """Cumulative array a[0..n] with a[n] forced to exactly 1.0."""

    cumulative = np.cumsum(probability_mass(n, p))
    # rounding can push the running sum past 1 before index n
    np.minimum(cumulative, 1.0, out=cumulative)
    cumulative[n] = 1.0
    log.debug("Built binomial cumulative array", extra={"distribution": "binomial", "support_size": n + 1})
    return cumulative


def find_value_in_cumulative(u: float, cumulative: np.ndarray) -> int:
    """Smallest index i with u <= cumulative[i] (binary search)."""

    left, right = 0, len(cumulative) - 1
    while left <= right:
        mid = (left + right) // 2
        if u <= cumulative[mid]:
            right = mid - 1
        else:
            left = mid + 1
    return left


class BinomialGenerator(DistributionGenerator):
    kind = "binomial"

    def generate(
        self,
        parameters: DistributionParameters,
        sample_size: int,
        rng: Optional[np.random.Generator] = None,
    ) -> list[GeneratedValue]:
        if not isinstance(parameters, BinomialParameters):
            raise InvalidParameterError("BinomialGenerator expects BinomialParameters")
        validate_parameters(parameters)
        require_positive_count("sample_size", sample_size)
        rng = rng if rng is not None else np.random.default_rng()

        cumulative = cumulative_probabilities(parameters.n, parameters.p)
        results = []
        for u in rng.random(sample_size):
            index = find_value_in_cumulative(float(u), cumulative)
            results.append(GeneratedValue(value=index, random_u=float(u), auxiliary_info={"cumulative_index": index}))
        return results

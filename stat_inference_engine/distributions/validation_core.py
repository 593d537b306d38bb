"""Validation helpers for distribution parameters and sample counts."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from stat_inference_engine.exceptions import InvalidParameterError, UnsupportedVariantError
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    DistributionParameters,
    NormalParameters,
    UniformParameters,
)


def _require_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise InvalidParameterError(f"Parameter {name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidParameterError(f"Non-finite parameter {name}: {value}")


def validate_parameters(params: DistributionParameters) -> None:
    """Fail fast on a broken parameter invariant; never clamps."""

    if isinstance(params, BinomialParameters):
        if isinstance(params.n, bool) or not isinstance(params.n, (int, np.integer)):
            raise InvalidParameterError(f"Binomial n must be an integer, got {params.n!r}")
        if params.n <= 0:
            raise InvalidParameterError(f"Binomial n must be > 0, got {params.n}")
        _require_finite("p", params.p)
        if params.p < 0.0 or params.p > 1.0:
            raise InvalidParameterError(f"Binomial p must be in [0, 1], got {params.p}")
        return
    if isinstance(params, UniformParameters):
        _require_finite("a", params.a)
        _require_finite("b", params.b)
        if params.a >= params.b:
            raise InvalidParameterError(f"Uniform requires a < b, got a={params.a}, b={params.b}")
        return
    if isinstance(params, NormalParameters):
        _require_finite("m", params.m)
        _require_finite("sigma", params.sigma)
        if params.sigma <= 0:
            raise InvalidParameterError(f"Normal sigma must be > 0, got {params.sigma}")
        return
    raise UnsupportedVariantError(f"Unsupported distribution parameters: {type(params).__name__}")


def require_positive_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidParameterError(f"{name} must be > 0, got {value}")


def validate_samples(samples: Sequence[float]) -> np.ndarray:
    values = np.asarray(samples, dtype=float)
    if values.ndim != 1 or values.size == 0:
        raise InvalidParameterError("samples must be a non-empty 1D sequence")
    if not np.isfinite(values).all():
        raise InvalidParameterError("samples contain non-finite values")
    return values

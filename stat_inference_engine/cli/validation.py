"""CLI input parsing and validation helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from stat_inference_engine.distributions.validation_core import validate_parameters
from stat_inference_engine.exceptions import ConfigValidationError, StorageUnavailableError
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    DistributionParameters,
    NormalParameters,
    UniformParameters,
)

_SPEC_ARITY = {"binomial": ("n", "p"), "uniform": ("a", "b"), "normal": ("m", "sigma")}


def parse_distribution_spec(spec: str) -> DistributionParameters:
    """Parse ``kind:x,y`` (e.g. ``normal:5,1``, ``uniform:3,5``, ``binomial:10,0.5``)."""

    kind, sep, args = spec.partition(":")
    kind = kind.strip().lower()
    if not sep or kind not in _SPEC_ARITY:
        raise ConfigValidationError(
            f"Distribution spec {spec!r} must look like kind:x,y with kind in {sorted(_SPEC_ARITY)}"
        )
    parts = [part.strip() for part in args.split(",")]
    if len(parts) != 2:
        raise ConfigValidationError(f"Distribution spec {spec!r} needs exactly {_SPEC_ARITY[kind]}")
    try:
        if kind == "binomial":
            params: DistributionParameters = BinomialParameters(n=int(parts[0]), p=float(parts[1]))
        elif kind == "uniform":
            params = UniformParameters(a=float(parts[0]), b=float(parts[1]))
        else:
            params = NormalParameters(m=float(parts[0]), sigma=float(parts[1]))
    except ValueError as exc:
        raise ConfigValidationError(f"Distribution spec {spec!r} has non-numeric values") from exc
    validate_parameters(params)
    return params


def resolve_priors(p1: float, p2: float | None) -> tuple[float, float]:
    if p2 is None:
        p2 = 1.0 - p1
    if not (0.0 <= p1 <= 1.0 and 0.0 <= p2 <= 1.0):
        raise ConfigValidationError("priors must be within [0, 1]")
    if abs(p1 + p2 - 1.0) > 1e-9:
        raise ConfigValidationError(f"priors must sum to 1, got {p1} + {p2}")
    return p1, p2


def write_json(payload: dict[str, Any], path: Path) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, default=str))
    except OSError as exc:
        raise StorageUnavailableError(f"Cannot write {path}: {exc}") from exc
    return path

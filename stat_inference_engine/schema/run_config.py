"""Run configuration schema and validation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal, Optional

from stat_inference_engine.exceptions import ConfigValidationError

ErrorMode = Literal["numeric", "analytic", "table"]
ERROR_MODES = ("numeric", "analytic", "table")
NormalMethodName = Literal["box_muller", "clt12"]


@dataclass(slots=True)
class RunConfig:
    seed: Optional[int] = 42
    sample_size: int = 200
    number_of_intervals: Optional[int] = None
    samples_per_class: int = 1000
    confidence_level: float = 0.95
    error_mode: ErrorMode = "numeric"
    normal_method: NormalMethodName = "box_muller"
    domain_lower_limit: float = -10.0
    domain_upper_limit: float = 20.0
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        if self.sample_size <= 0:
            raise ConfigValidationError("sample_size must be > 0")
        if self.number_of_intervals is not None and self.number_of_intervals <= 0:
            raise ConfigValidationError("number_of_intervals must be > 0 when set")
        if self.samples_per_class <= 0:
            raise ConfigValidationError("samples_per_class must be > 0")
        if not 0.0 < self.confidence_level < 1.0:
            raise ConfigValidationError("confidence_level must be in (0, 1)")
        if self.error_mode not in ERROR_MODES:
            raise ConfigValidationError(f"error_mode must be one of {list(ERROR_MODES)}")
        if self.normal_method not in {"box_muller", "clt12"}:
            raise ConfigValidationError("normal_method must be box_muller or clt12")
        if self.domain_lower_limit >= self.domain_upper_limit:
            raise ConfigValidationError("domain_lower_limit must be below domain_upper_limit")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigValidationError("max_workers must be positive when set")

    @classmethod
    def from_dict(cls, data: dict) -> "RunConfig":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    def to_dict(self) -> dict:
        return asdict(self)

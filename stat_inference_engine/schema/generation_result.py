"""Serializable projection of a generation run (parameters + values + frequencies)."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from stat_inference_engine.distributions.models import GeneratedValue, clean_auxiliary_info
from stat_inference_engine.exceptions import SchemaError
from stat_inference_engine.histogram.intervals import IntervalData
from stat_inference_engine.interfaces.distribution import (
    DistributionParameters,
    describe_parameters,
    parameters_from_dict,
)


@dataclass(frozen=True)
class GenerationResult:
    parameters: DistributionParameters
    values: List[GeneratedValue]
    sample_size: int
    interval_data: Optional[IntervalData] = None
    cumulative_probabilities: Optional[List[float]] = None
    additional_info: Dict[str, Any] = field(default_factory=dict)

    @property
    def samples(self) -> List[float]:
        return [v.value for v in self.values]

    @property
    def frequency_dict(self) -> Dict[int, int]:
        if self.interval_data is not None:
            return dict(self.interval_data.frequency_dict)
        return dict(Counter(int(v.value) for v in self.values))

    def to_dict(self) -> dict:
        return {
            "parameters": self.parameters.to_dict(),
            "values": [v.to_dict() for v in self.values],
            "sample_size": self.sample_size,
            "interval_data": self.interval_data.to_dict() if self.interval_data is not None else None,
            "cumulative_probabilities": self.cumulative_probabilities,
            "additional_info": clean_auxiliary_info(self.additional_info),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GenerationResult":
        if not isinstance(data, dict):
            raise SchemaError("Generation result must be a mapping")
        try:
            values = [GeneratedValue.from_dict(v) for v in data["values"]]
            sample_size = int(data["sample_size"])
            parameters = parameters_from_dict(data["parameters"])
        except (KeyError, TypeError, ValueError) as exc:
            raise SchemaError(f"Malformed generation result: {exc}") from exc
        if sample_size != len(values):
            raise SchemaError(f"sample_size {sample_size} does not match {len(values)} values")
        interval_raw = data.get("interval_data")
        cumulative = data.get("cumulative_probabilities")
        return cls(
            parameters=parameters,
            values=values,
            sample_size=sample_size,
            interval_data=IntervalData.from_dict(interval_raw) if interval_raw is not None else None,
            cumulative_probabilities=[float(x) for x in cumulative] if cumulative is not None else None,
            additional_info=dict(data.get("additional_info") or {}),
        )


@dataclass(frozen=True)
class SavedResult:
    """A named generation result, as stored by persistence collaborators."""

    id: str
    name: str
    generation_result: GenerationResult
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def distribution_kind(self) -> str:
        return self.generation_result.parameters.kind

    @property
    def description(self) -> str:
        return describe_parameters(self.generation_result.parameters)

    def copy_with(self, **overrides: Any) -> "SavedResult":
        return replace(self, **overrides)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "generation_result": self.generation_result.to_dict(),
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SavedResult":
        try:
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                generation_result=GenerationResult.from_dict(data["generation_result"]),
                created_at=datetime.fromisoformat(data["created_at"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SchemaError(f"Malformed saved result: {exc}") from exc


__all__ = ["GenerationResult", "SavedResult"]

"""Shared models for sampling generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from stat_inference_engine.exceptions import SchemaError

_JSON_SCALARS = (type(None), bool, int, float, str)


def clean_auxiliary_info(info: Dict[str, Any]) -> Dict[str, Any]:
    """Keep JSON-compatible entries, stringify the rest."""

    cleaned: Dict[str, Any] = {}
    for key, value in info.items():
        if isinstance(value, _JSON_SCALARS + (list, dict)):
            cleaned[key] = value
        else:
            cleaned[key] = str(value)
    return cleaned


@dataclass(frozen=True)
class GeneratedValue:
    value: float
    random_u: float
    auxiliary_info: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "random_u": self.random_u,
            "auxiliary_info": clean_auxiliary_info(self.auxiliary_info),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GeneratedValue":
        try:
            return cls(
                value=float(data["value"]),
                random_u=float(data["random_u"]),
                auxiliary_info=dict(data.get("auxiliary_info") or {}),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SchemaError(f"Malformed generated value: {data!r}") from exc


__all__ = ["GeneratedValue", "clean_auxiliary_info"]

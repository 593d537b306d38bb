"""Distribution parameter model and the generator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal, Optional, Union

import numpy as np

from stat_inference_engine.exceptions import SchemaError

if TYPE_CHECKING:
    from stat_inference_engine.distributions.models import GeneratedValue

DistributionKind = Literal["binomial", "uniform", "normal"]


class DistributionCategory(str, Enum):
    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


@dataclass(frozen=True)
class BinomialParameters:
    n: int
    p: float

    kind: DistributionKind = field(default="binomial", init=False, repr=False)

    @property
    def is_discrete(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "n": self.n, "p": self.p}


@dataclass(frozen=True)
class UniformParameters:
    a: float
    b: float

    kind: DistributionKind = field(default="uniform", init=False, repr=False)

    @property
    def is_discrete(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "a": self.a, "b": self.b}


@dataclass(frozen=True)
class NormalParameters:
    m: float
    sigma: float

    kind: DistributionKind = field(default="normal", init=False, repr=False)

    @property
    def is_discrete(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "m": self.m, "sigma": self.sigma}


DistributionParameters = Union[BinomialParameters, UniformParameters, NormalParameters]


@dataclass(frozen=True)
class DistributionInfo:
    kind: DistributionKind
    name: str
    category: DistributionCategory
    description: str


DISTRIBUTION_INFO: dict[str, DistributionInfo] = {
    "binomial": DistributionInfo(
        kind="binomial",
        name="Binomial",
        category=DistributionCategory.DISCRETE,
        description="Number of successes in n independent trials with success probability p.",
    ),
    "uniform": DistributionInfo(
        kind="uniform",
        name="Uniform",
        category=DistributionCategory.CONTINUOUS,
        description="Constant density 1/(b-a) on the interval [a, b].",
    ),
    "normal": DistributionInfo(
        kind="normal",
        name="Normal",
        category=DistributionCategory.CONTINUOUS,
        description="Gaussian density with mean m and standard deviation sigma.",
    ),
}


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"Field '{key}' must be a number, got {value!r}")
    return float(value)


def parameters_from_dict(data: dict[str, Any]) -> DistributionParameters:
    """Rebuild a parameter variant from its tagged dict projection."""

    if not isinstance(data, dict):
        raise SchemaError("Distribution parameters must be a mapping")
    kind = data.get("type")
    if kind == "binomial":
        n = data.get("n")
        if isinstance(n, bool) or not isinstance(n, int):
            raise SchemaError(f"Field 'n' must be an integer, got {n!r}")
        return BinomialParameters(n=n, p=_number(data, "p"))
    if kind == "uniform":
        return UniformParameters(a=_number(data, "a"), b=_number(data, "b"))
    if kind == "normal":
        return NormalParameters(m=_number(data, "m"), sigma=_number(data, "sigma"))
    raise SchemaError(f"Unknown distribution type: {kind!r}")


def describe_parameters(params: DistributionParameters) -> str:
    if isinstance(params, BinomialParameters):
        return f"Binomial: n={params.n}, p={params.p:.2f}"
    if isinstance(params, UniformParameters):
        return f"Uniform: [{params.a:.2f}, {params.b:.2f}]"
    if isinstance(params, NormalParameters):
        return f"Normal: m={params.m:.2f}, sigma={params.sigma:.2f}"
    return "Unknown distribution"


class DistributionGenerator(ABC):
    """Base class for generators turning uniform(0,1) draws into typed samples."""

    kind: DistributionKind

    @abstractmethod
    def generate(
        self,
        parameters: DistributionParameters,
        sample_size: int,
        rng: Optional[np.random.Generator] = None,
    ) -> list["GeneratedValue"]:
        """Produce ``sample_size`` values; the generator is stateless between calls."""

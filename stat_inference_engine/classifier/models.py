"""Result types produced by the two-class Bayesian classifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import pandas as pd

from stat_inference_engine.interfaces.distribution import DistributionParameters, describe_parameters
from stat_inference_engine.schema.run_config import ErrorMode


@dataclass(frozen=True)
class TestSample:
    """Labelled value; ``true_class`` is True for class1."""

    __test__ = False

    value: float
    true_class: bool


@dataclass(frozen=True)
class ClassifiedSample:
    value: float
    true_class: bool
    predicted_class: bool

    @property
    def is_correct(self) -> bool:
        return self.true_class == self.predicted_class


@dataclass(frozen=True)
class DetailedClassifiedSample(ClassifiedSample):
    """Classified sample with the weighted densities behind the decision."""

    density1: float = 0.0
    density2: float = 0.0
    decision_boundary: float = 0.0
    confidence: float = 0.0

    @property
    def favors_class1(self) -> bool:
        return self.predicted_class


@dataclass(frozen=True)
class ConfusionMatrix:
    """Counts with class1 treated as the positive class."""

    true_positive: int = 0
    false_negative: int = 0
    false_positive: int = 0
    true_negative: int = 0

    @classmethod
    def from_samples(cls, samples: list[ClassifiedSample]) -> "ConfusionMatrix":
        tp = fn = fp = tn = 0
        for sample in samples:
            if sample.true_class and sample.predicted_class:
                tp += 1
            elif sample.true_class:
                fn += 1
            elif sample.predicted_class:
                fp += 1
            else:
                tn += 1
        return cls(true_positive=tp, false_negative=fn, false_positive=fp, true_negative=tn)

    @property
    def total(self) -> int:
        return self.true_positive + self.false_negative + self.false_positive + self.true_negative

    @property
    def accuracy(self) -> float:
        return (self.true_positive + self.true_negative) / self.total if self.total else 0.0

    @property
    def precision(self) -> float:
        predicted = self.true_positive + self.false_positive
        return self.true_positive / predicted if predicted else 0.0

    @property
    def recall(self) -> float:
        actual = self.true_positive + self.false_negative
        return self.true_positive / actual if actual else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "true_positive": self.true_positive,
            "false_negative": self.false_negative,
            "false_positive": self.false_positive,
            "true_negative": self.true_negative,
            "accuracy": self.accuracy,
            "precision": self.precision,
            "recall": self.recall,
        }


@dataclass(frozen=True)
class ClassificationResult:
    error_rate: float
    correct_classifications: int
    total_samples: int
    classified_samples: list[ClassifiedSample]
    intersection_points: list[float] = field(default_factory=list)
    confusion_matrix: Optional[ConfusionMatrix] = None

    @property
    def accuracy(self) -> float:
        return 1.0 - self.error_rate

    def to_frame(self) -> pd.DataFrame:
        rows = []
        for sample in self.classified_samples:
            row = {
                "value": sample.value,
                "true_class": sample.true_class,
                "predicted_class": sample.predicted_class,
                "is_correct": sample.is_correct,
            }
            if isinstance(sample, DetailedClassifiedSample):
                row.update(
                    density1=sample.density1,
                    density2=sample.density2,
                    decision_boundary=sample.decision_boundary,
                    confidence=sample.confidence,
                )
            rows.append(row)
        return pd.DataFrame(rows)

    def to_dict(self, include_samples: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error_rate": self.error_rate,
            "correct_classifications": self.correct_classifications,
            "total_samples": self.total_samples,
            "intersection_points": list(self.intersection_points),
            "confusion_matrix": self.confusion_matrix.to_dict() if self.confusion_matrix else None,
        }
        if include_samples:
            payload["classified_samples"] = self.to_frame().to_dict(orient="records")
        return payload


@dataclass(frozen=True)
class ErrorCalculationDetails:
    losing_distribution: DistributionParameters
    prior: float
    formula: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "losing_distribution": self.losing_distribution.to_dict(),
            "description": describe_parameters(self.losing_distribution),
            "prior": self.prior,
            "formula": self.formula,
        }


@dataclass(frozen=True)
class ErrorInterval:
    start: float
    end: float
    error: float
    losing_class_name: str
    details: Optional[ErrorCalculationDetails] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "error": self.error,
            "losing_class_name": self.losing_class_name,
            "details": self.details.to_dict() if self.details else None,
        }


@dataclass(frozen=True)
class TheoreticalErrorInfo:
    total_error: float
    error_intervals: list[ErrorInterval]
    intersection_points: list[float]
    mode: ErrorMode = "numeric"

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_error": self.total_error,
            "mode": self.mode,
            "intersection_points": list(self.intersection_points),
            "error_intervals": [interval.to_dict() for interval in self.error_intervals],
        }


@dataclass(frozen=True)
class DensityPoint:
    x: float
    y: float


@dataclass(frozen=True)
class AnalysisDomain:
    """Clamp limits and scan/refinement settings for intersection search."""

    lower_limit: float = -10.0
    upper_limit: float = 20.0
    padding: float = 1.0
    steps: int = 1000
    bisection_iterations: int = 10
    tolerance: float = 1e-10

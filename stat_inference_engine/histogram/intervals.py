"""Equal-width interval (histogram) builder for frequency-table display."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from stat_inference_engine.distributions.validation_core import require_positive_count, validate_samples
from stat_inference_engine.exceptions import InvalidParameterError, NumericDegenerateError, SchemaError


@dataclass(frozen=True)
class Interval:
    index: int
    start: float
    end: float
    frequency: int

    @property
    def midpoint(self) -> float:
        return (self.start + self.end) / 2

    def relative_frequency(self, total: int) -> float:
        return self.frequency / total


@dataclass(frozen=True)
class IntervalData:
    """Contiguous intervals whose frequencies sum to ``sample_size``."""

    intervals: List[Interval]
    interval_width: float
    sample_size: int
    frequency_dict: Dict[int, int] = field(default_factory=dict)

    @property
    def number_of_intervals(self) -> int:
        return len(self.intervals)

    @property
    def relative_frequencies(self) -> List[float]:
        return [iv.relative_frequency(self.sample_size) for iv in self.intervals]

    @property
    def cumulative_probabilities(self) -> List[float]:
        cumulative = np.cumsum(self.relative_frequencies).tolist()
        if cumulative:
            cumulative[-1] = 1.0
        return cumulative

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "index": [iv.index for iv in self.intervals],
                "start": [iv.start for iv in self.intervals],
                "end": [iv.end for iv in self.intervals],
                "midpoint": [iv.midpoint for iv in self.intervals],
                "frequency": [iv.frequency for iv in self.intervals],
                "relative_frequency": self.relative_frequencies,
                "cumulative_probability": self.cumulative_probabilities,
            }
        )

    def to_dict(self) -> dict:
        return {
            "intervals": [
                {"index": iv.index, "start": iv.start, "end": iv.end, "frequency": iv.frequency}
                for iv in self.intervals
            ],
            "interval_width": self.interval_width,
            "sample_size": self.sample_size,
            "frequency_dict": {str(k): v for k, v in self.frequency_dict.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "IntervalData":
        try:
            intervals = [
                Interval(
                    index=int(item["index"]),
                    start=float(item["start"]),
                    end=float(item["end"]),
                    frequency=int(item["frequency"]),
                )
                for item in data["intervals"]
            ]
            frequency_dict = {int(k): int(v) for k, v in (data.get("frequency_dict") or {}).items()}
            return cls(
                intervals=intervals,
                interval_width=float(data["interval_width"]),
                sample_size=int(data["sample_size"]),
                frequency_dict=frequency_dict,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SchemaError(f"Malformed interval data: {exc}") from exc


def sturges_interval_count(sample_size: int) -> int:
    """N = floor(log2 n), at least one interval."""

    require_positive_count("sample_size", sample_size)
    return max(1, int(math.floor(math.log2(sample_size))))


def build_intervals(
    samples: Sequence[float],
    number_of_intervals: int,
    *,
    value_range: Optional[Tuple[float, float]] = None,
) -> IntervalData:
    """Bucket continuous samples into ``number_of_intervals`` equal-width intervals.

    Intervals are right-open ``[start, end)`` except the last, which also
    includes its right edge. ``value_range`` overrides ``[min, max]`` for
    distributions with known support; samples outside it are rejected.
    """

    require_positive_count("number_of_intervals", number_of_intervals)
    values = validate_samples(samples)

    if value_range is None:
        lower, upper = float(values.min()), float(values.max())
    else:
        lower, upper = float(value_range[0]), float(value_range[1])
        if not (math.isfinite(lower) and math.isfinite(upper)) or lower > upper:
            raise InvalidParameterError(f"Invalid value range: {value_range}")
        if values.min() < lower or values.max() > upper:
            raise InvalidParameterError(
                f"Samples span [{values.min()}, {values.max()}] outside range [{lower}, {upper}]"
            )

    width = (upper - lower) / number_of_intervals
    if not width > 0:
        raise NumericDegenerateError(f"Zero-width intervals: samples span [{lower}, {upper}]")

    indices = np.floor((values - lower) / width).astype(int)
    np.clip(indices, 0, number_of_intervals - 1, out=indices)
    counts = np.bincount(indices, minlength=number_of_intervals)

    intervals = []
    for i in range(number_of_intervals):
        start = lower + i * width
        end = upper if i == number_of_intervals - 1 else lower + (i + 1) * width
        intervals.append(Interval(index=i, start=start, end=end, frequency=int(counts[i])))

    return IntervalData(
        intervals=intervals,
        interval_width=width,
        sample_size=int(values.size),
        frequency_dict={i: int(c) for i, c in enumerate(counts) if c},
    )


def build_discrete_frequencies(samples: Sequence[float], n: int) -> IntervalData:
    """Per-value frequency table over the integer support ``0..n``."""

    require_positive_count("n", n)
    values = validate_samples(samples)
    rounded = np.rint(values).astype(int)
    if (rounded < 0).any() or (rounded > n).any() or not np.allclose(values, rounded):
        raise InvalidParameterError(f"Samples must be integers in [0, {n}]")

    counts = np.bincount(rounded, minlength=n + 1)
    intervals = [Interval(index=k, start=k - 0.5, end=k + 0.5, frequency=int(counts[k])) for k in range(n + 1)]
    return IntervalData(
        intervals=intervals,
        interval_width=1.0,
        sample_size=int(values.size),
        frequency_dict={k: int(counts[k]) for k in range(n + 1)},
    )

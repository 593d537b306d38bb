from stat_inference_engine.histogram.intervals import (
    Interval,
    IntervalData,
    build_discrete_frequencies,
    build_intervals,
    sturges_interval_count,
)

__all__ = [
    "Interval",
    "IntervalData",
    "build_discrete_frequencies",
    "build_intervals",
    "sturges_interval_count",
]

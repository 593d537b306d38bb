import pytest

from stat_inference_engine.exceptions import InvalidParameterError, NumericDegenerateError, SchemaError
from stat_inference_engine.histogram.intervals import (
    IntervalData,
    build_discrete_frequencies,
    build_intervals,
    sturges_interval_count,
)


@pytest.mark.parametrize("n,expected", [(1, 1), (2, 1), (7, 2), (8, 3), (200, 7), (1000, 9)])
def test_sturges_interval_count(n, expected):
    assert sturges_interval_count(n) == expected


def test_build_intervals_equal_width_with_closed_last_interval():
    data = build_intervals([0.0, 0.5, 1.0, 1.5, 2.0], 2)
    assert data.interval_width == 1.0
    assert [iv.frequency for iv in data.intervals] == [2, 3]
    assert data.intervals[0].start == 0.0
    assert data.intervals[-1].end == 2.0
    assert data.frequency_dict == {0: 2, 1: 3}


def test_build_intervals_frequency_dict_omits_empty_intervals():
    data = build_intervals([0.0, 0.1, 9.9, 10.0], 5)
    assert data.frequency_dict == {0: 2, 4: 2}
    assert sum(data.frequency_dict.values()) == 4


def test_build_intervals_respects_value_range():
    data = build_intervals([3.5, 4.5], 4, value_range=(3.0, 5.0))
    assert data.interval_width == 0.5
    assert [iv.frequency for iv in data.intervals] == [0, 1, 0, 1]
    with pytest.raises(InvalidParameterError):
        build_intervals([2.0, 4.0], 4, value_range=(3.0, 5.0))


def test_build_intervals_rejects_bad_input():
    with pytest.raises(InvalidParameterError):
        build_intervals([1.0, 2.0], 0)
    with pytest.raises(InvalidParameterError):
        build_intervals([], 3)
    with pytest.raises(InvalidParameterError):
        build_intervals([1.0, float("nan")], 3)
    with pytest.raises(NumericDegenerateError):
        build_intervals([2.0, 2.0, 2.0], 3)


def test_relative_and_cumulative_frequencies():
    data = build_intervals([0.0, 1.0, 2.0, 3.0], 2)
    assert data.relative_frequencies == [0.5, 0.5]
    assert data.cumulative_probabilities == [0.5, 1.0]
    assert data.intervals[0].midpoint == 0.75


def test_build_discrete_frequencies_covers_support():
    data = build_discrete_frequencies([0, 2, 2, 5], 5)
    assert data.number_of_intervals == 6
    assert data.frequency_dict == {0: 1, 1: 0, 2: 2, 3: 0, 4: 0, 5: 1}
    assert data.intervals[2].start == 1.5
    with pytest.raises(InvalidParameterError):
        build_discrete_frequencies([6], 5)
    with pytest.raises(InvalidParameterError):
        build_discrete_frequencies([1.5], 5)


def test_to_frame_columns():
    frame = build_intervals([0.0, 1.0, 2.0], 3).to_frame()
    assert list(frame.columns) == [
        "index",
        "start",
        "end",
        "midpoint",
        "frequency",
        "relative_frequency",
        "cumulative_probability",
    ]
    assert frame["frequency"].sum() == 3


def test_interval_data_dict_round_trip_and_bad_data():
    data = build_intervals([0.0, 0.4, 1.0], 2)
    restored = IntervalData.from_dict(data.to_dict())
    assert restored == data
    with pytest.raises(SchemaError):
        IntervalData.from_dict({"intervals": [{"index": 0}]})

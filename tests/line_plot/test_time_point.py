"""Unit tests for TimePoint and its frame conversion."""

import numpy as np
import pandas as pd
import pytest

from epicurves.line_plot.time_point import TimePoint, points_from_frames, points_to_frames


def test_points_to_frames_uses_nan_for_missing_keys():
    points = [
        TimePoint(0, {"susceptible": 100}, {"susceptible": (95, 104)}),
        TimePoint(0, {"cases": 7}),
    ]
    values, lows, highs = points_to_frames(points)
    assert list(values.index) == [0, 0]
    assert values.loc[:, "susceptible"].isna().tolist() == [False, True]
    assert values["cases"].iloc[1] == 7
    assert lows["susceptible"].iloc[0] == 95
    assert np.isnan(highs["susceptible"].iloc[1])


def test_points_from_frames_drops_nan_cells():
    index = pd.Index([5, 9], name="time")
    values = pd.DataFrame({"cases": [3.0, np.nan], "ICU": [np.nan, 2.0]}, index=index)
    points = points_from_frames(values)
    assert points == (TimePoint(5, {"cases": 3}), TimePoint(9, {"ICU": 2}))
    assert all(isinstance(p.time, int) for p in points)


def test_band_needs_both_bounds():
    index = pd.Index([0], name="time")
    values = pd.DataFrame({"a": [10.0], "b": [20.0]}, index=index)
    lows = pd.DataFrame({"a": [8.0], "b": [18.0]}, index=index)
    highs = pd.DataFrame({"a": [12.0], "b": [np.nan]}, index=index)
    (point,) = points_from_frames(values, lows, highs)
    assert point.bands == {"a": (8, 12)}
    assert all(isinstance(v, int) for v in point.band("a"))


def test_rows_without_columns_become_empty_points():
    values = pd.DataFrame(index=pd.Index([1, 2], name="time"))
    assert points_from_frames(values) == (TimePoint(1), TimePoint(2))


def test_to_record_flattens_bands():
    p = TimePoint(0, {"susceptible": 100}, {"susceptible": (95, 104)})
    assert p.to_record() == {"time": 0, "susceptible": 100, "susceptible_area": [95, 104]}


def test_time_point_is_read_only():
    p = TimePoint(0, {"cases": 1})
    with pytest.raises(TypeError):
        p.values["cases"] = 2

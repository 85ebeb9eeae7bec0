"""pandas conversions at the edges of the line plot pipeline.

Observation tables usually arrive as DataFrames (CSV exports, case-count
feeds); the merged series is handy as a DataFrame for inspection and tables.
The core pipeline itself works on plain dataclasses.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np
import pandas as pd

from epicurves.line_plot.observation_windower import (
    COUNT_FIELDS,
    ObservationRecord,
    to_epoch_ms,
)
from epicurves.line_plot.series_normalizer import Trajectory, TrajectorySample
from epicurves.line_plot.time_point import TimePoint
from epicurves.utils.logging import get_logger

logger = get_logger(__name__)

TIME_COL = "time"
BAND_LOW_SUFFIX = "_low"
BAND_HIGH_SUFFIX = "_high"


def _cell(value: Any) -> float | None:
    if value is None or pd.isna(value):
        return None
    return float(value)


def observations_from_frame(df: pd.DataFrame, *, time_col: str = TIME_COL) -> list[ObservationRecord]:
    """Convert a case-count DataFrame into ObservationRecords.

    Args:
        df: DataFrame with a time column (dates, date strings or epoch ms) and
            any of the columns cases, deaths, hospitalized, icu. NaN is absent.
        time_col: Name of the time column.

    Returns:
        ObservationRecords in row order.

    Raises:
        ValueError: If the time column is missing.
    """
    if time_col not in df.columns:
        raise ValueError(f"df must contain required column {time_col!r}")

    present = [c for c in COUNT_FIELDS if c in df.columns]
    missing = [c for c in COUNT_FIELDS if c not in df.columns]
    if missing:
        logger.debug(f"observation frame has no column(s) {missing}, treating as absent")

    records = []
    for row in df[[time_col, *present]].itertuples(index=False, name=None):
        time_value, *counts = row
        fields = {name: _cell(v) for name, v in zip(present, counts)}
        records.append(ObservationRecord(time=to_epoch_ms(time_value), **fields))
    return records


def trajectory_from_dicts(
    mean: Sequence[Mapping[str, Any]],
    lower: Sequence[Mapping[str, Any]] | None = None,
    upper: Sequence[Mapping[str, Any]] | None = None,
) -> Trajectory:
    """Build a Trajectory from exported sample dicts.

    Missing lower/upper sequences default to the mean (zero-width bands).
    """
    mean_s = tuple(TrajectorySample.from_dict(d) for d in mean)
    lower_s = tuple(TrajectorySample.from_dict(d) for d in lower) if lower is not None else mean_s
    upper_s = tuple(TrajectorySample.from_dict(d) for d in upper) if upper is not None else mean_s
    return Trajectory(mean=mean_s, lower=lower_s, upper=upper_s)


def series_to_frame(series: Sequence[TimePoint]) -> pd.DataFrame:
    """Convert a merged series into a DataFrame indexed by time.

    Each value key becomes a column; each band becomes two columns
    "<key>_low" and "<key>_high". Absent entries are NaN.
    """
    rows = []
    for p in series:
        row: dict[str, Any] = {TIME_COL: p.time}
        row.update(p.values)
        for key, (low, high) in p.bands.items():
            row[f"{key}{BAND_LOW_SUFFIX}"] = low
            row[f"{key}{BAND_HIGH_SUFFIX}"] = high
        rows.append(row)
    if not rows:
        return pd.DataFrame(columns=[TIME_COL]).set_index(TIME_COL)
    df = pd.DataFrame(rows).set_index(TIME_COL)
    return df.astype(np.float64)

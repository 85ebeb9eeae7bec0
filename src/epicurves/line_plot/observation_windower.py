"""Empirical observation processing for the line plot.

Observation records arrive at an irregular cadence and may be entirely empty.
They are loaded into a float frame (records_to_frame) and processed in two
separate stages:

1. A boolean mask drops rows with no cases, deaths, hospitalized or icu.
2. Everything else (counts, the windowed new-case delta, projection to
   TimePoints) runs on the *filtered* frame with a positional index. The
   window width is a number of filtered records, not a number of days.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from epicurves.line_plot.metric_catalog import (
    OBSERVED_NEW_CASES,
    observed_metrics,
)
from epicurves.line_plot.rounding import is_missing, nonzero_or_nan
from epicurves.line_plot.time_point import TimePoint, points_from_frames
from epicurves.utils.logging import get_logger

logger = get_logger(__name__)

CASE_STEP = 3  # window width, in filtered records

COUNT_FIELDS = ("cases", "deaths", "hospitalized", "icu")


def to_epoch_ms(value: Any) -> int:
    """Convert an int, datetime, date or date string to epoch milliseconds (UTC).

    Numbers are taken to already be epoch milliseconds. Naive datetimes and
    date strings are read as UTC.

    Raises:
        ValueError: If the value cannot be parsed as a timestamp.
    """
    if isinstance(value, bool) or is_missing(value):
        raise ValueError(f"not a timestamp: {value!r}")
    if isinstance(value, (int, float, np.integer, np.floating)):
        return int(value)
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"not a timestamp: {value!r}") from e
    if pd.isna(ts):
        raise ValueError(f"not a timestamp: {value!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return int(ts.value // 1_000_000)


@dataclass(frozen=True)
class ObservationRecord:
    """One empirical data point.

    Attributes:
        time: Epoch milliseconds.
        cases: Cumulative confirmed cases.
        deaths: Cumulative deaths.
        hospitalized: Patients currently in hospital.
        icu: Patients currently in ICU.
    """
    time: int
    cases: Optional[float] = None
    deaths: Optional[float] = None
    hospitalized: Optional[float] = None
    icu: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ObservationRecord":
        """Build a record from a mapping with "time" and optional count fields.

        Raises:
            ValueError: If "time" is missing or not a timestamp.
        """
        if "time" not in data:
            raise ValueError("observation record must contain 'time'")
        return cls(
            time=to_epoch_ms(data["time"]),
            **{f: data.get(f) for f in COUNT_FIELDS},
        )


@dataclass(frozen=True)
class WindowedObservations:
    """Result of window_observations().

    Attributes:
        points: One TimePoint per filtered record.
        counts: Observed metric key -> number of filtered records carrying it.
        n_records: Number of records that survived filtering.
    """
    points: tuple[TimePoint, ...] = ()
    counts: Mapping[str, int] = field(default_factory=dict)
    n_records: int = 0

    @property
    def has_observations(self) -> bool:
        return self.n_records > 0


def records_to_frame(records: Sequence[ObservationRecord]) -> pd.DataFrame:
    """Count fields as a float frame indexed by time; None, NaN and 0 become NaN."""
    data = {
        f: pd.to_numeric(pd.Series([getattr(r, f) for r in records], dtype=object), errors="coerce")
        for f in COUNT_FIELDS
    }
    frame = pd.DataFrame(data).astype(float)
    frame.index = pd.Index([r.time for r in records], name="time")
    return nonzero_or_nan(frame)


def nonempty_mask(frame: pd.DataFrame) -> pd.Series:
    """True for rows carrying at least one count field."""
    return frame[list(COUNT_FIELDS)].notna().any(axis=1)


def windowed_delta(cases: pd.Series, step: int = CASE_STEP) -> pd.Series:
    """`cases` minus the value `step` rows earlier; NaN unless strictly positive.

    The first `step` rows, and rows where either count is missing, are NaN.
    """
    delta = cases - cases.shift(step)
    return delta.where(delta > 0)


def _observed_frame(filtered: pd.DataFrame, step: int) -> pd.DataFrame:
    """One column per observed metric over positionally indexed filtered rows."""
    columns = {}
    for metric in observed_metrics():
        if metric.source_field is None:
            columns[metric.key] = windowed_delta(filtered["cases"], step)
        else:
            columns[metric.key] = filtered[metric.source_field]
    return pd.DataFrame(columns, index=filtered.index)


def _filtered(records: Sequence[ObservationRecord]) -> pd.DataFrame:
    frame = records_to_frame(records)
    return frame.loc[nonempty_mask(frame).to_numpy(dtype=bool)]


def filter_nonempty(records: Sequence[ObservationRecord]) -> tuple[ObservationRecord, ...]:
    """Drop records where cases, deaths, hospitalized and icu are all absent or zero."""
    mask = nonempty_mask(records_to_frame(records)).to_numpy(dtype=bool)
    return tuple(r for r, keep in zip(records, mask) if keep)


def new_cases(filtered: Sequence[ObservationRecord], i: int, step: int = CASE_STEP) -> Optional[float]:
    """Cases added over the last `step` filtered records, ending at index `i`.

    Defined only when i >= step, both case counts are present, and the
    difference is strictly positive.
    """
    frame = records_to_frame(filtered).reset_index(drop=True)
    value = windowed_delta(frame["cases"], step).iloc[i]
    return None if pd.isna(value) else float(value)


def count_observations(filtered: Sequence[ObservationRecord], step: int = CASE_STEP) -> dict[str, int]:
    """Per observed metric, how many filtered records carry a value.

    The counts ignore the enabled set; a metric with a zero count is not
    offered to the renderer at all.
    """
    frame = records_to_frame(filtered).reset_index(drop=True)
    counts = _observed_frame(frame, step).notna().sum()
    return {key: int(n) for key, n in counts.items()}


def window_observations(
    records: Sequence[ObservationRecord],
    enabled: frozenset[str],
    *,
    step: int = CASE_STEP,
) -> WindowedObservations:
    """Filter, count and project observation records into TimePoints.

    Args:
        records: Observation records in chronological order.
        enabled: Snapshot of visible metric keys.
        step: Window width for the new-case delta, in filtered records.

    Returns:
        WindowedObservations aligned to the filtered record timestamps.
    """
    filtered = _filtered(records)
    dropped = len(records) - len(filtered)
    if dropped:
        logger.debug(f"dropped {dropped} empty observation record(s)")

    times = filtered.index
    observed = _observed_frame(filtered.reset_index(drop=True), step)
    counts = {key: int(n) for key, n in observed.notna().sum().items()}

    active = [m.key for m in observed_metrics() if m.key in enabled]
    projected = observed[active].set_axis(times, axis=0)
    points = points_from_frames(projected)

    logger.debug(f"windowed {len(filtered)} observation(s), {counts[OBSERVED_NEW_CASES]} with new cases")
    return WindowedObservations(points=points, counts=counts, n_records=len(filtered))

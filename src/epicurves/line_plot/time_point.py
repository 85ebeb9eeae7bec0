"""TimePoint: one sparse chart record at a single timestamp.

Processing stages work on pandas frames indexed by time, one column per
metric key and NaN for "no value". points_to_frames() and points_from_frames()
convert between those frames and TimePoints at the module boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

import pandas as pd

BAND_SUFFIX = "_area"

Band = tuple[int, int]


@dataclass(frozen=True)
class TimePoint:
    """A sparse record of metric values at one timestamp.

    A metric that has no data is simply not a key of `values` (or `bands`);
    there is no zero default.

    Attributes:
        time: Epoch milliseconds.
        values: Metric key -> numeric value.
        bands: Metric key -> (low, high) uncertainty band.
    """
    time: int
    values: Mapping[str, float] = field(default_factory=dict)
    bands: Mapping[str, Band] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only views so a shared point cannot be edited in place
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "bands", MappingProxyType(dict(self.bands)))

    def get(self, key: str) -> Optional[float]:
        return self.values.get(key)

    def band(self, key: str) -> Optional[Band]:
        return self.bands.get(key)

    def keys(self) -> set[str]:
        """Metric keys carrying a value or a band."""
        return set(self.values) | set(self.bands)

    def to_record(self) -> dict[str, Any]:
        """Flatten into the row shape consumed by the chart.

        Example:
            {"time": 0, "susceptible": 100, "susceptible_area": [95, 104]}
        """
        record: dict[str, Any] = {"time": self.time}
        record.update(self.values)
        for key, (low, high) in self.bands.items():
            record[f"{key}{BAND_SUFFIX}"] = [low, high]
        return record

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimePoint):
            return NotImplemented
        return (
            self.time == other.time
            and dict(self.values) == dict(other.values)
            and dict(self.bands) == dict(other.bands)
        )

    def __hash__(self) -> int:
        return hash((self.time, frozenset(self.values.items()), frozenset(self.bands.items())))


def points_to_frames(points: Sequence[TimePoint]) -> tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """Split points into value, band-low and band-high frames.

    All three frames share one "time" index in point order, so equal
    timestamps stay as separate rows. A key a point lacks is NaN in its row.

    Returns:
        (values, lows, highs) float frames.
    """
    index = pd.Index([p.time for p in points], name="time")
    values = pd.DataFrame([dict(p.values) for p in points], index=index, dtype=float)
    lows = pd.DataFrame([{k: b[0] for k, b in p.bands.items()} for p in points], index=index, dtype=float)
    highs = pd.DataFrame([{k: b[1] for k, b in p.bands.items()} for p in points], index=index, dtype=float)
    return values, lows, highs


def _row_dicts(frame: pd.DataFrame) -> list[dict[str, Any]]:
    if frame.shape[1] == 0:
        return [{} for _ in range(len(frame))]
    return frame.to_dict(orient="records")


def points_from_frames(
    values: pd.DataFrame,
    lows: Optional[pd.DataFrame] = None,
    highs: Optional[pd.DataFrame] = None,
) -> tuple[TimePoint, ...]:
    """Build one TimePoint per row of `values`, dropping NaN cells.

    `lows` and `highs` must be row-aligned with `values`. A band is kept only
    where both its low and high cells are defined.
    """
    n = len(values)
    value_rows = _row_dicts(values)
    low_rows = _row_dicts(lows) if lows is not None else [{}] * n
    high_rows = _row_dicts(highs) if highs is not None else [{}] * n

    points = []
    for time, row, low, high in zip(values.index, value_rows, low_rows, high_rows):
        bands = {
            k: (int(lo), int(high[k]))
            for k, lo in low.items()
            if pd.notna(lo) and pd.notna(high.get(k))
        }
        points.append(TimePoint(
            time=int(time),
            values={k: v for k, v in row.items() if pd.notna(v)},
            bands=bands,
        ))
    return tuple(points)

"""Merging of computed and observed TimePoints into one chart series.

Each input sequence is turned into value/low/high frames (NaN = absent) and
stacked in argument order. Grouping by time and taking the last non-NaN cell
per column gives the field-wise union: a later defined value wins and an
absent field never erases an earlier one.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from epicurves.line_plot.time_point import TimePoint, points_from_frames, points_to_frames
from epicurves.utils.logging import get_logger

logger = get_logger(__name__)

MergedSeries = tuple[TimePoint, ...]


def _last_by_time(frames: list[pd.DataFrame], times: list[int]) -> pd.DataFrame:
    stacked = pd.concat(frames)
    if stacked.shape[1] == 0:
        return pd.DataFrame(index=pd.Index(times, name="time"))
    # groupby keeps row order inside a group, so last() honours argument order
    merged = stacked.groupby(level="time", sort=True).last()
    return merged.reindex(times)


def merge_series(*sequences: Iterable[TimePoint]) -> MergedSeries:
    """Merge TimePoint sequences into an ascending, timestamp-unique series.

    At equal timestamps, points from earlier arguments (and earlier positions
    within one argument) are consolidated first and later ones win on
    overlapping fields.

    Returns:
        Tuple of TimePoints, strictly ascending by time. Empty if all inputs are empty.
    """
    parts = [list(seq) for seq in sequences]
    parts = [p for p in parts if p]
    if not parts:
        return ()

    split = [points_to_frames(p) for p in parts]
    times = sorted({p.time for part in parts for p in part})

    values = _last_by_time([s[0] for s in split], times)
    lows = _last_by_time([s[1] for s in split], times)
    highs = _last_by_time([s[2] for s in split], times)
    merged = points_from_frames(values, lows, highs)

    n_points = sum(len(p) for p in parts)
    logger.debug(f"merged {n_points} point(s) into {len(merged)} timestamp(s)")
    return merged


def consolidate(acc: TimePoint, incoming: TimePoint) -> TimePoint:
    """Field-wise union of two points sharing a timestamp.

    Defined values on `incoming` overwrite or extend `acc`; a field absent on
    `incoming` leaves the value on `acc` in place.
    """
    if acc.time != incoming.time:
        raise ValueError(f"cannot consolidate points at different times: {acc.time} != {incoming.time}")
    (merged,) = merge_series([acc, incoming])
    return merged

"""Numeric helpers shared by the normalizer and windower.

Absent data is NaN inside frames and a missing key on a TimePoint, never 0.
Two policies map raw numbers to absent:

- nonzero_or_nan: a value of exactly zero counts as "no data". Genuinely
  zero counts are therefore not plotted.
- positive_or_none: anything that is not strictly positive is absent
  (capacities).
"""

from __future__ import annotations

import math
from typing import Optional, TypeVar

import numpy as np
import pandas as pd

Number = float | int

FrameOrSeries = TypeVar("FrameOrSeries", pd.DataFrame, pd.Series)


def is_missing(value: Optional[Number]) -> bool:
    """True for None and NaN."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def round_half_up(values: FrameOrSeries) -> FrameOrSeries:
    """Round to the nearest integer with ties going up (2.5 -> 3, -2.5 -> -2).

    Unlike round() and DataFrame.round(), ties never go to the even
    neighbour. NaN stays NaN.
    """
    return np.floor(values + 0.5)


def nonzero_or_nan(values: FrameOrSeries) -> FrameOrSeries:
    return values.where(values != 0)


def positive_or_none(value: Optional[Number]) -> Optional[Number]:
    if is_missing(value) or value <= 0:
        return None
    return value

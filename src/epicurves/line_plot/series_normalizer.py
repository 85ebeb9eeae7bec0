"""Normalization of a simulated trajectory into chart TimePoints.

The trajectory comes as three index-aligned sample sequences (mean, lower,
upper). Each mean sample becomes one TimePoint holding the rounded totals of
the enabled computed metrics, with a (low, high) band taken from the lower
and upper samples at the same index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

import pandas as pd

from epicurves.line_plot.metric_catalog import (
    HOSPITAL_BEDS,
    ICU_BEDS,
    Metric,
    computed_metrics,
)
from epicurves.line_plot.rounding import nonzero_or_nan, positive_or_none, round_half_up
from epicurves.line_plot.time_point import TimePoint, points_from_frames
from epicurves.utils.logging import get_logger

logger = get_logger(__name__)

TRAJECTORY_STATES = ("current", "cumulative")


@dataclass(frozen=True)
class TrajectorySample:
    """One simulated sample.

    Attributes:
        time: Epoch milliseconds.
        current: Compartment name -> {"total": n, ...} for occupancy compartments.
        cumulative: Compartment name -> {"total": n, ...} for cumulative compartments.
    """
    time: int
    current: Mapping[str, Mapping[str, float]] = field(default_factory=dict)
    cumulative: Mapping[str, Mapping[str, float]] = field(default_factory=dict)

    def total(self, state: str, compartment: str) -> Optional[float]:
        """Compartment total, or None when the compartment is not present."""
        states = {"current": self.current, "cumulative": self.cumulative}
        entry = states[state].get(compartment)
        if entry is None:
            return None
        return entry.get("total")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrajectorySample":
        """Build a sample from the exported JSON shape.

        Raises:
            ValueError: If "time" is missing.
        """
        if "time" not in data:
            raise ValueError("trajectory sample must contain 'time'")
        return cls(
            time=int(data["time"]),
            current=dict(data.get("current") or {}),
            cumulative=dict(data.get("cumulative") or {}),
        )


@dataclass(frozen=True)
class Trajectory:
    """Mean trajectory with lower/upper uncertainty samples, index-aligned."""
    mean: tuple[TrajectorySample, ...] = ()
    lower: tuple[TrajectorySample, ...] = ()
    upper: tuple[TrajectorySample, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "mean", tuple(self.mean))
        object.__setattr__(self, "lower", tuple(self.lower))
        object.__setattr__(self, "upper", tuple(self.upper))
        if not (len(self.mean) == len(self.lower) == len(self.upper)):
            raise ValueError(
                f"trajectory arrays must be index-aligned: mean={len(self.mean)}, "
                f"lower={len(self.lower)}, upper={len(self.upper)}"
            )

    def __len__(self) -> int:
        return len(self.mean)

    @classmethod
    def from_mean(cls, mean: Sequence[TrajectorySample]) -> "Trajectory":
        """Trajectory without uncertainty: lower and upper equal the mean."""
        return cls(mean=tuple(mean), lower=tuple(mean), upper=tuple(mean))


def _totals_frame(samples: Sequence[TrajectorySample], metrics: Sequence[Metric], index: pd.Index) -> pd.DataFrame:
    """Rounded compartment totals, one column per metric; NaN where absent."""
    rows = [{m.key: s.total(m.state, m.compartment) for m in metrics} for s in samples]
    return round_half_up(pd.DataFrame(rows, index=index, columns=[m.key for m in metrics], dtype=float))


def normalize_trajectory(
    trajectory: Trajectory,
    enabled: frozenset[str],
    *,
    hospital_beds: Optional[float] = None,
    icu_beds: Optional[float] = None,
) -> tuple[TimePoint, ...]:
    """Convert a trajectory into one TimePoint per sample.

    Args:
        trajectory: Mean/lower/upper samples.
        enabled: Snapshot of visible metric keys.
        hospital_beds: Hospital bed capacity; attached to every point when > 0.
        icu_beds: ICU bed capacity; attached to every point when > 0.

    Returns:
        TimePoints in trajectory index order. A computed metric's value and band
        are present only if the metric is enabled and its rounded mean is non-zero.
    """
    if not len(trajectory):
        return ()

    active = [m for m in computed_metrics() if m.key in enabled]
    index = pd.Index([s.time for s in trajectory.mean], name="time")

    values = nonzero_or_nan(_totals_frame(trajectory.mean, active, index))
    has_value = values.notna().to_numpy()
    lows = _totals_frame(trajectory.lower, active, index).where(has_value)
    highs = _totals_frame(trajectory.upper, active, index).where(has_value)

    capacity = {
        HOSPITAL_BEDS: positive_or_none(hospital_beds),
        ICU_BEDS: positive_or_none(icu_beds),
    }
    for key, beds in capacity.items():
        if beds is not None:
            values[key] = float(beds)

    points = points_from_frames(values, lows, highs)
    logger.debug(f"normalized {len(points)} trajectory samples, {len(active)} computed metric(s) enabled")
    return points

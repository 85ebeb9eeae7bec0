"""Axis domains for the line plot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from epicurves.line_plot.metric_catalog import METRICS, MetricCategory
from epicurves.line_plot.plot_state import ScaleMode
from epicurves.line_plot.time_point import TimePoint

Y_PADDING = 1.1
LOG_FLOOR = 1


def _y_floor(scale: ScaleMode) -> int:
    return LOG_FLOOR if scale is ScaleMode.LOG else 0


@dataclass(frozen=True)
class DomainSummary:
    """Time and value axis bounds for one recomputation.

    Attributes:
        t_min: Earliest timestamp, or None for an empty series.
        t_max: Latest timestamp, or None for an empty series.
        y_max: Padded maximum plotted value, or None when nothing qualifies.
        scale: Value-axis scale.
    """
    t_min: Optional[int] = None
    t_max: Optional[int] = None
    y_max: Optional[float] = None
    scale: ScaleMode = ScaleMode.LINEAR

    @property
    def y_min(self) -> int:
        """Lower value bound: 1 on a log axis, 0 on a linear one."""
        return _y_floor(self.scale)

    @property
    def y_domain(self) -> Optional[tuple[float, float]]:
        if self.y_max is None:
            return None
        return (self.y_min, self.y_max)

    @property
    def has_time_domain(self) -> bool:
        return self.t_min is not None and self.t_max is not None

    @property
    def is_renderable(self) -> bool:
        return self.has_time_domain and self.y_max is not None


def _scaling_keys(enabled: frozenset[str]) -> list[str]:
    return [
        k for k in enabled
        if k in METRICS and METRICS[k].category is not MetricCategory.REFERENCE
    ]


def compute_domain(
    series: Sequence[TimePoint],
    enabled: frozenset[str],
    scale: ScaleMode = ScaleMode.LINEAR,
    *,
    padding: float = Y_PADDING,
) -> DomainSummary:
    """Compute the DomainSummary of a merged series.

    y_max only considers values of enabled, non-reference metrics. A maximum
    at or below the axis floor (1 on a log axis, 0 on a linear one) is
    reported as None, so y_domain is never inverted.
    """
    if not series:
        return DomainSummary(scale=scale)

    times = [p.time for p in series]
    keys = _scaling_keys(enabled)
    candidates = [
        p.values[k] for p in series for k in keys
        if p.values.get(k) is not None
    ]

    y_max = max(candidates) * padding if candidates else None
    if y_max is not None and y_max <= _y_floor(scale):
        y_max = None

    return DomainSummary(t_min=min(times), t_max=max(times), y_max=y_max, scale=scale)

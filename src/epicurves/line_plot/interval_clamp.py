"""Mitigation overlay intervals and their clamping to the visible domain."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Sequence

from epicurves.line_plot.domain import DomainSummary
from epicurves.line_plot.observation_windower import to_epoch_ms

STRENGTH_MIN = 0
STRENGTH_MAX = 100


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


@dataclass(frozen=True)
class MitigationInterval:
    """A time-bounded mitigation annotation.

    Attributes:
        id: Stable identifier.
        t_min: Interval start, epoch milliseconds.
        t_max: Interval end, epoch milliseconds.
        strength: Mitigation strength, nominally 0-100.
        name: Label drawn inside the band.
        color: Fill color.
    """
    id: str
    t_min: int
    t_max: int
    strength: float
    name: str = ""
    color: str = "#cccccc"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MitigationInterval":
        """Build an interval from {"id", "timeRange": {"tMin", "tMax"}, "mitigationValue", ...}.

        Flat "t_min"/"t_max"/"strength" keys are accepted as well.

        Raises:
            ValueError: If the time range or strength is missing.
        """
        time_range = data.get("timeRange") or {}
        t_min = time_range.get("tMin", data.get("t_min"))
        t_max = time_range.get("tMax", data.get("t_max"))
        strength = data.get("mitigationValue", data.get("strength"))
        if t_min is None or t_max is None:
            raise ValueError(f"mitigation interval {data.get('id')!r} has no time range")
        if strength is None:
            raise ValueError(f"mitigation interval {data.get('id')!r} has no strength")
        return cls(
            id=str(data.get("id", "")),
            t_min=to_epoch_ms(t_min),
            t_max=to_epoch_ms(t_max),
            strength=float(strength),
            name=str(data.get("name", "")),
            color=str(data.get("color", "#cccccc")),
        )


def clamp_interval(interval: MitigationInterval, domain: DomainSummary) -> MitigationInterval:
    """Return a copy of `interval` clipped to the domain's time range.

    Strength is clamped to [0, 100]. If the domain has no time range (empty
    series) the interval is returned unchanged.
    """
    if not domain.has_time_domain:
        return interval
    return replace(
        interval,
        t_min=clamp(interval.t_min, domain.t_min, domain.t_max),
        t_max=clamp(interval.t_max, domain.t_min, domain.t_max),
        strength=clamp(interval.strength, STRENGTH_MIN, STRENGTH_MAX),
    )


def clamp_intervals(
    intervals: Sequence[MitigationInterval], domain: DomainSummary
) -> tuple[MitigationInterval, ...]:
    return tuple(clamp_interval(i, domain) for i in intervals)

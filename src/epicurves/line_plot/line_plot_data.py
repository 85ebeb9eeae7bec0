"""Recomputation pipeline for the deterministic line plot.

recompute() is the single pure entry point: raw inputs plus a LinePlotState
snapshot in, merged series, domains, clamped intervals and series plan out.
LinePlotController wraps it for UI code that toggles metrics and swaps data,
caching the last result until something it depends on changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from epicurves.line_plot.domain import DomainSummary, compute_domain
from epicurves.line_plot.interval_clamp import MitigationInterval, clamp_intervals
from epicurves.line_plot.observation_windower import ObservationRecord, window_observations
from epicurves.line_plot.plot_state import LinePlotState, ScaleMode
from epicurves.line_plot.series_merger import MergedSeries, merge_series
from epicurves.line_plot.series_normalizer import Trajectory, normalize_trajectory
from epicurves.line_plot.series_plan import SeriesPlan, build_series_plan
from epicurves.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LinePlotInputs:
    """Raw inputs of one line plot.

    Attributes:
        trajectory: Simulated mean/lower/upper samples.
        observations: Empirical records, any cadence.
        hospital_beds: Hospital bed capacity (reference line).
        icu_beds: ICU bed capacity (reference line).
        intervals: Mitigation intervals to overlay.
    """
    trajectory: Trajectory = field(default_factory=Trajectory)
    observations: Sequence[ObservationRecord] = ()
    hospital_beds: Optional[float] = None
    icu_beds: Optional[float] = None
    intervals: Sequence[MitigationInterval] = ()


@dataclass(frozen=True)
class LinePlotResult:
    """Everything the renderer needs for one frame.

    Attributes:
        series: Merged, ascending, timestamp-unique TimePoints.
        domain: Axis bounds and scale.
        intervals: Mitigation intervals clamped to the time domain.
        counts: Observed metric key -> observation count.
        plan: Lines, scatters and bands to draw.
        humanized: Display flag for the number formatter, passed through.
    """
    series: MergedSeries
    domain: DomainSummary
    intervals: tuple[MitigationInterval, ...]
    counts: Mapping[str, int]
    plan: SeriesPlan
    humanized: bool = False

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to render."""
        return not self.series

    def records(self) -> list[dict[str, Any]]:
        """The series as flat chart rows."""
        return [p.to_record() for p in self.series]


def recompute(inputs: LinePlotInputs, state: LinePlotState) -> LinePlotResult:
    """Rebuild the full line plot result from scratch.

    Args:
        inputs: Raw trajectory, observations, capacities and intervals.
        state: Snapshot of enabled metrics, scale and display flag.

    Returns:
        LinePlotResult. An empty series is a valid result; callers render nothing.
    """
    enabled = frozenset(state.enabled)

    computed = normalize_trajectory(
        inputs.trajectory,
        enabled,
        hospital_beds=inputs.hospital_beds,
        icu_beds=inputs.icu_beds,
    )
    windowed = window_observations(inputs.observations, enabled)

    series = merge_series(computed, windowed.points)
    domain = compute_domain(series, enabled, state.scale)
    intervals = clamp_intervals(inputs.intervals, domain)
    plan = build_series_plan(windowed.counts, windowed.has_observations)

    logger.debug(
        f"recomputed line plot: {len(series)} point(s), t=[{domain.t_min}, {domain.t_max}], "
        f"y_max={domain.y_max}, scale={state.scale.value}"
    )
    return LinePlotResult(
        series=series,
        domain=domain,
        intervals=intervals,
        counts=dict(windowed.counts),
        plan=plan,
        humanized=state.humanized,
    )


class LinePlotController:
    """Holds the mutable UI-side state of a line plot and caches its result.

    The controller is the only owner of mutable state: each call to result()
    snapshots the current LinePlotState and inputs, and reuses the previous
    LinePlotResult when neither the input objects, the enabled set nor the
    scale changed. Not thread-safe.
    """

    def __init__(
        self,
        inputs: Optional[LinePlotInputs] = None,
        *,
        state: Optional[LinePlotState] = None,
    ) -> None:
        self.inputs = inputs if inputs is not None else LinePlotInputs()
        self.state = state if state is not None else LinePlotState()
        self._cached_inputs: Optional[LinePlotInputs] = None
        self._cached_state: Optional[LinePlotState] = None
        self._cached: Optional[LinePlotResult] = None

    def _is_cached(self) -> bool:
        # inputs are compared by identity, state by value
        prev = self._cached_inputs
        if self._cached is None or prev is None:
            return False
        return (
            prev.trajectory is self.inputs.trajectory
            and prev.observations is self.inputs.observations
            and prev.intervals is self.inputs.intervals
            and prev.hospital_beds == self.inputs.hospital_beds
            and prev.icu_beds == self.inputs.icu_beds
            and self._cached_state == self.state
        )

    def set_inputs(self, inputs: LinePlotInputs) -> None:
        self.inputs = inputs

    def toggle_metric(self, key: str) -> None:
        """Show or hide one metric (legend click)."""
        self.state = self.state.with_toggled(key)
        logger.info(f"Toggled metric {key!r}; {len(self.state.enabled)} metric(s) enabled")

    def set_scale(self, scale: ScaleMode) -> None:
        self.state = self.state.with_scale(scale)

    def set_humanized(self, humanized: bool) -> None:
        self.state = self.state.with_humanized(humanized)

    def result(self) -> LinePlotResult:
        """Current LinePlotResult, recomputed only when an input changed."""
        if self._is_cached():
            return self._cached
        inputs, state = self.inputs, self.state
        self._cached = recompute(inputs, state)
        self._cached_inputs = inputs
        self._cached_state = state
        return self._cached

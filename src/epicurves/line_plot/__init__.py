"""Merge-and-derive engine for the deterministic epidemic line plot."""

from epicurves.line_plot.domain import DomainSummary, compute_domain
from epicurves.line_plot.interval_clamp import MitigationInterval, clamp_interval, clamp_intervals
from epicurves.line_plot.line_plot_config import LinePlotConfig
from epicurves.line_plot.line_plot_data import (
    LinePlotController,
    LinePlotInputs,
    LinePlotResult,
    recompute,
)
from epicurves.line_plot.metric_catalog import Metric, MetricCategory
from epicurves.line_plot.observation_windower import ObservationRecord, window_observations
from epicurves.line_plot.plot_state import LinePlotState, ScaleMode
from epicurves.line_plot.series_merger import merge_series
from epicurves.line_plot.series_normalizer import Trajectory, TrajectorySample, normalize_trajectory
from epicurves.line_plot.time_point import TimePoint

__all__ = [
    "DomainSummary",
    "LinePlotConfig",
    "LinePlotController",
    "LinePlotInputs",
    "LinePlotResult",
    "LinePlotState",
    "Metric",
    "MetricCategory",
    "MitigationInterval",
    "ObservationRecord",
    "ScaleMode",
    "TimePoint",
    "Trajectory",
    "TrajectorySample",
    "clamp_interval",
    "clamp_intervals",
    "compute_domain",
    "merge_series",
    "normalize_trajectory",
    "recompute",
    "window_observations",
]

"""Which series the renderer should draw, and how to label them.

Lines are drawn for every computed and reference metric, scatters only for
observed metrics that actually have data, and one uncertainty band per
computed metric. Names are untranslated; localization happens downstream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from epicurves.line_plot.metric_catalog import (
    OBSERVED_CASES,
    OBSERVED_DEATHS,
    OBSERVED_HOSPITALIZED,
    OBSERVED_ICU,
    OBSERVED_NEW_CASES,
    Metric,
    computed_metrics,
    get_metric,
    reference_metrics,
)
from epicurves.line_plot.time_point import BAND_SUFFIX

LEGEND_LINE = "line"
LEGEND_NONE = "none"

# scatter order on the chart
SCATTER_ORDER = (
    OBSERVED_CASES,
    OBSERVED_NEW_CASES,
    OBSERVED_HOSPITALIZED,
    OBSERVED_ICU,
    OBSERVED_DEATHS,
)


@dataclass(frozen=True)
class SeriesSpec:
    """One drawable series.

    Attributes:
        key: Data key in the flattened chart record (bands end in "_area").
        name: Display name.
        color: Stroke/fill color.
        legend_type: "line" for a legend entry, "none" to hide it. None for scatters.
        metric_key: Catalog key the series belongs to (used for legend toggling).
    """
    key: str
    name: str
    color: str
    metric_key: str
    legend_type: str | None = None


@dataclass(frozen=True)
class SeriesPlan:
    lines: tuple[SeriesSpec, ...] = ()
    scatters: tuple[SeriesSpec, ...] = ()
    bands: tuple[SeriesSpec, ...] = ()

    def all_series(self) -> tuple[SeriesSpec, ...]:
        return self.scatters + self.lines + self.bands


def _line(metric: Metric, legend_type: str) -> SeriesSpec:
    return SeriesSpec(metric.key, metric.display_name, metric.color, metric.key, legend_type)


def build_series_plan(counts: Mapping[str, int], has_observations: bool) -> SeriesPlan:
    """Build the SeriesPlan for one recomputation.

    Args:
        counts: Observed metric key -> number of observations (from the windower).
        has_observations: False when no observation record survived filtering.

    Returns:
        SeriesPlan with lines, gated scatters and bands in drawing order.
    """
    lines = tuple(_line(m, LEGEND_LINE) for m in computed_metrics())
    lines += tuple(_line(m, LEGEND_NONE) for m in reference_metrics())

    scatters: tuple[SeriesSpec, ...] = ()
    if has_observations:
        scatters = tuple(
            SeriesSpec(key, get_metric(key).display_name, get_metric(key).color, key)
            for key in SCATTER_ORDER
            if counts.get(key, 0)
        )

    bands = tuple(
        SeriesSpec(
            f"{m.key}{BAND_SUFFIX}",
            f"{m.display_name} uncertainty",
            m.color,
            m.key,
            LEGEND_NONE,
        )
        for m in computed_metrics()
    )
    return SeriesPlan(lines=lines, scatters=scatters, bands=bands)


def legend_entries(plan: SeriesPlan, enabled: frozenset[str]) -> list[tuple[SeriesSpec, bool]]:
    """Legend-visible series with an "active" flag for greying out hidden metrics."""
    return [
        (spec, spec.metric_key in enabled)
        for spec in plan.scatters + plan.lines
        if spec.legend_type != LEGEND_NONE
    ]

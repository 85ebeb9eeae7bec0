"""Static registry of the metrics shown on the deterministic line plot.

Single source of truth for metric keys, display names, colors and categories
so that the normalizer, windower, domain calculator and series plan agree on
which keys exist and how they are treated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class MetricCategory(Enum):
    """How a metric is produced and whether it participates in axis scaling."""
    COMPUTED = "computed"    # read from the simulated trajectory
    OBSERVED = "observed"    # read from empirical case counts
    REFERENCE = "reference"  # capacity lines, excluded from value-axis scaling


@dataclass(frozen=True)
class Metric:
    """Definition of one plottable metric.

    Attributes:
        key: Stable key used in TimePoint values and the enabled set.
        display_name: Human-friendly label (untranslated).
        color: Hex color used for the line, scatter or band.
        category: MetricCategory of the metric.
        state: For computed metrics, "current" or "cumulative" trajectory state.
        compartment: For computed metrics, the compartment name inside `state`.
        source_field: For observed metrics, the ObservationRecord field read.
            None for the derived windowed delta.
    """
    key: str
    display_name: str
    color: str
    category: MetricCategory
    state: Optional[str] = None
    compartment: Optional[str] = None
    source_field: Optional[str] = None


# Metric keys
SUSCEPTIBLE = "susceptible"
RECOVERED = "recovered"
INFECTIOUS = "infectious"
SEVERE = "severe"
CRITICAL = "critical"
OVERFLOW = "overflow"
FATALITY = "fatality"
HOSPITAL_BEDS = "hospitalBeds"
ICU_BEDS = "ICUbeds"
OBSERVED_CASES = "cases"
OBSERVED_NEW_CASES = "newCases"
OBSERVED_HOSPITALIZED = "currentHospitalized"
OBSERVED_ICU = "ICU"
OBSERVED_DEATHS = "observedDeaths"

# Palette
COLORS = {
    SUSCEPTIBLE: "#a6cee3",
    INFECTIOUS: "#fdbf6f",
    SEVERE: "#fb9a99",
    CRITICAL: "#e31a1c",
    OVERFLOW: "#900d2c",
    RECOVERED: "#33a02c",
    FATALITY: "#5e506a",
    OBSERVED_CASES: "#aaaaaa",
    OBSERVED_NEW_CASES: "#fdbf6f",
    HOSPITAL_BEDS: "#bbbbbb",
    ICU_BEDS: "#cccccc",
}

_C = MetricCategory

# Order matters: it is the legend order used by series_plan.
_METRICS: tuple[Metric, ...] = (
    Metric(SUSCEPTIBLE, "Susceptible", COLORS[SUSCEPTIBLE], _C.COMPUTED, "current", "susceptible"),
    Metric(RECOVERED, "Recovered", COLORS[RECOVERED], _C.COMPUTED, "cumulative", "recovered"),
    Metric(INFECTIOUS, "Infectious", COLORS[INFECTIOUS], _C.COMPUTED, "current", "infectious"),
    Metric(SEVERE, "Severely ill", COLORS[SEVERE], _C.COMPUTED, "current", "severe"),
    Metric(CRITICAL, "Patients in ICU (model)", COLORS[CRITICAL], _C.COMPUTED, "current", "critical"),
    Metric(OVERFLOW, "ICU overflow", COLORS[OVERFLOW], _C.COMPUTED, "current", "overflow"),
    Metric(FATALITY, "Cumulative deaths (model)", COLORS[FATALITY], _C.COMPUTED, "cumulative", "fatality"),
    Metric(HOSPITAL_BEDS, "Total hospital beds", COLORS[HOSPITAL_BEDS], _C.REFERENCE),
    Metric(ICU_BEDS, "Total ICU/ICM beds", COLORS[ICU_BEDS], _C.REFERENCE),
    Metric(OBSERVED_CASES, "Cumulative cases (data)", COLORS[OBSERVED_CASES], _C.OBSERVED, source_field="cases"),
    Metric(OBSERVED_NEW_CASES, "Cases past 3 days (data)", COLORS[OBSERVED_NEW_CASES], _C.OBSERVED),
    Metric(OBSERVED_HOSPITALIZED, "Patients in hospital (data)", COLORS[SEVERE], _C.OBSERVED, source_field="hospitalized"),
    Metric(OBSERVED_ICU, "Patients in ICU (data)", COLORS[CRITICAL], _C.OBSERVED, source_field="icu"),
    Metric(OBSERVED_DEATHS, "Cumulative deaths (data)", COLORS[FATALITY], _C.OBSERVED, source_field="deaths"),
)

METRICS: dict[str, Metric] = {m.key: m for m in _METRICS}

ALL_METRIC_KEYS: frozenset[str] = frozenset(METRICS)


def _check_known(key: str) -> None:
    assert key in METRICS, f"unknown metric key {key!r}"


def get_metric(key: str) -> Metric:
    """Return the Metric registered under `key`."""
    _check_known(key)
    return METRICS[key]


def category(key: str) -> MetricCategory:
    """Return the MetricCategory of `key`."""
    return get_metric(key).category


def is_enabled(key: str, enabled: Iterable[str]) -> bool:
    """True if `key` is a known metric and part of the enabled set."""
    _check_known(key)
    return key in enabled


def metrics_in(cat: MetricCategory) -> tuple[Metric, ...]:
    """All metrics of one category, in catalog order."""
    return tuple(m for m in _METRICS if m.category is cat)


def computed_metrics() -> tuple[Metric, ...]:
    return metrics_in(MetricCategory.COMPUTED)


def observed_metrics() -> tuple[Metric, ...]:
    return metrics_in(MetricCategory.OBSERVED)


def reference_metrics() -> tuple[Metric, ...]:
    return metrics_in(MetricCategory.REFERENCE)

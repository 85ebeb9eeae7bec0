"""Unit tests for the series plan (which lines, scatters and bands to draw)."""

from epicurves.line_plot.series_plan import build_series_plan, legend_entries

NO_COUNTS = {"cases": 0, "newCases": 0, "currentHospitalized": 0, "ICU": 0, "observedDeaths": 0}


def test_lines_cover_computed_then_reference():
    plan = build_series_plan(NO_COUNTS, has_observations=False)
    keys = [s.key for s in plan.lines]
    assert keys == [
        "susceptible", "recovered", "infectious", "severe", "critical", "overflow", "fatality",
        "hospitalBeds", "ICUbeds",
    ]
    legend = {s.key: s.legend_type for s in plan.lines}
    assert legend["susceptible"] == "line"
    assert legend["hospitalBeds"] == "none"


def test_scatters_gated_by_counts():
    counts = dict(NO_COUNTS, cases=4, ICU=1)
    plan = build_series_plan(counts, has_observations=True)
    assert [s.key for s in plan.scatters] == ["cases", "ICU"]
    assert plan.scatters[0].name == "Cumulative cases (data)"


def test_no_scatters_without_observations():
    counts = dict(NO_COUNTS, cases=4)
    assert build_series_plan(counts, has_observations=False).scatters == ()


def test_bands_one_per_computed_metric():
    plan = build_series_plan(NO_COUNTS, has_observations=False)
    assert len(plan.bands) == 7
    band = plan.bands[0]
    assert band.key == "susceptible_area"
    assert band.name == "Susceptible uncertainty"
    assert band.legend_type == "none"


def test_legend_entries_flag_inactive_metrics():
    plan = build_series_plan(dict(NO_COUNTS, cases=1), has_observations=True)
    entries = legend_entries(plan, frozenset({"cases", "infectious"}))
    active = {spec.key: on for spec, on in entries}
    assert active["cases"] is True
    assert active["infectious"] is True
    assert active["susceptible"] is False
    assert "hospitalBeds" not in active
    assert "susceptible_area" not in active

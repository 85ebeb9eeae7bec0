"""Unit tests for LinePlotState snapshots and serialization."""

import pytest

from epicurves.line_plot.metric_catalog import ALL_METRIC_KEYS
from epicurves.line_plot.plot_state import LinePlotState, ScaleMode


def test_default_state_enables_everything():
    state = LinePlotState()
    assert state.enabled == ALL_METRIC_KEYS
    assert state.scale is ScaleMode.LINEAR
    assert state.humanized is False


def test_with_toggled_returns_new_snapshot():
    state = LinePlotState()
    hidden = state.with_toggled("susceptible")
    assert "susceptible" not in hidden.enabled
    assert "susceptible" in state.enabled  # original untouched
    shown = hidden.with_toggled("susceptible")
    assert shown.enabled == state.enabled


def test_to_dict_from_dict_round_trip():
    state = LinePlotState(enabled=frozenset({"cases", "infectious"}), scale=ScaleMode.LOG, humanized=True)
    d = state.to_dict()
    assert d == {"enabled": ["cases", "infectious"], "scale": "log", "humanized": True}
    assert LinePlotState.from_dict(d) == state


def test_from_dict_drops_unknown_metric_keys():
    state = LinePlotState.from_dict({"enabled": ["cases", "bogus"]})
    assert state.enabled == frozenset({"cases"})


def test_from_dict_missing_enabled_means_all():
    state = LinePlotState.from_dict({"scale": "linear"})
    assert state.enabled == ALL_METRIC_KEYS


def test_from_dict_rejects_unknown_scale():
    with pytest.raises(ValueError) as exc_info:
        LinePlotState.from_dict({"scale": "cubic"})
    assert "cubic" in str(exc_info.value)

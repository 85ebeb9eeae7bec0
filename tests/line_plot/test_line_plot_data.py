"""End-to-end tests for recompute() and LinePlotController."""

import pytest

from epicurves.line_plot.interval_clamp import MitigationInterval
from epicurves.line_plot.line_plot_data import LinePlotController, LinePlotInputs, recompute
from epicurves.line_plot.observation_windower import ObservationRecord
from epicurves.line_plot.plot_state import LinePlotState, ScaleMode
from epicurves.line_plot.series_normalizer import Trajectory
from epicurves.line_plot.time_point import TimePoint


def test_susceptible_only_trajectory(sample):
    traj = Trajectory.from_mean([sample(0, susceptible=100), sample(1, susceptible=90)])
    state = LinePlotState(enabled=frozenset({"susceptible"}))
    result = recompute(LinePlotInputs(trajectory=traj), state)
    assert [p.values for p in result.series] == [{"susceptible": 100}, {"susceptible": 90}]
    assert result.domain.y_max == pytest.approx(110)


def test_observation_at_trajectory_time_merges(sample):
    traj = Trajectory.from_mean([sample(5, infectious=20)])
    obs = [ObservationRecord(time=5, cases=7)]
    state = LinePlotState(enabled=frozenset({"infectious", "cases"}))
    result = recompute(LinePlotInputs(trajectory=traj, observations=obs), state)
    assert len(result.series) == 1
    assert result.series[0].values == {"infectious": 20, "cases": 7}
    assert result.records() == [{"time": 5, "infectious": 20, "cases": 7, "infectious_area": [20, 20]}]


def test_empty_inputs_render_nothing():
    result = recompute(LinePlotInputs(), LinePlotState())
    assert result.series == ()
    assert result.is_empty
    d = result.domain
    assert (d.t_min, d.t_max, d.y_max) == (None, None, None)


def test_empty_observation_row_contributes_nothing():
    obs = [ObservationRecord(time=3, cases=0, deaths=0, hospitalized=0, icu=0)]
    result = recompute(LinePlotInputs(observations=obs), LinePlotState())
    assert result.is_empty
    assert result.plan.scatters == ()


def test_toggle_removes_key_from_every_point(trajectory, observations):
    inputs = LinePlotInputs(trajectory=trajectory, observations=observations, hospital_beds=800)
    state = LinePlotState()
    for key in ("infectious", "cases", "newCases"):
        state = state.with_toggled(key)
        result = recompute(inputs, state)
        for p in result.series:
            assert key not in p.keys()


def test_series_sorted_unique_with_interleaved_sources(trajectory, observations):
    result = recompute(LinePlotInputs(trajectory=trajectory, observations=observations), LinePlotState())
    times = [p.time for p in result.series]
    assert times == sorted(set(times))
    assert times == [0, 1, 2, 3, 4, 5]


def test_capacity_does_not_affect_y_max(trajectory):
    state = LinePlotState()
    small = recompute(LinePlotInputs(trajectory=trajectory, hospital_beds=1), state)
    huge = recompute(LinePlotInputs(trajectory=trajectory, hospital_beds=10 ** 8), state)
    assert small.domain.y_max == huge.domain.y_max
    assert huge.series[0].get("hospitalBeds") == 10 ** 8


def test_intervals_clamped_to_series(trajectory):
    intervals = [MitigationInterval(id="m", t_min=-10, t_max=10, strength=120)]
    result = recompute(LinePlotInputs(trajectory=trajectory, intervals=intervals), LinePlotState())
    (clipped,) = result.intervals
    assert (clipped.t_min, clipped.t_max, clipped.strength) == (0, 2, 100)


def test_recompute_is_deterministic(trajectory, observations):
    inputs = LinePlotInputs(trajectory=trajectory, observations=observations)
    state = LinePlotState(scale=ScaleMode.LOG)
    a = recompute(inputs, state)
    b = recompute(inputs, state)
    assert a.series == b.series
    assert a.domain == b.domain


def test_humanized_flag_passed_through():
    result = recompute(LinePlotInputs(), LinePlotState(humanized=True))
    assert result.humanized is True


def test_controller_caches_until_state_changes(trajectory, observations):
    ctrl = LinePlotController(LinePlotInputs(trajectory=trajectory, observations=observations))
    first = ctrl.result()
    assert ctrl.result() is first

    ctrl.toggle_metric("susceptible")
    second = ctrl.result()
    assert second is not first
    assert all("susceptible" not in p.keys() for p in second.series)

    ctrl.set_scale(ScaleMode.LOG)
    third = ctrl.result()
    assert third is not second
    assert third.domain.y_min == 1


def test_controller_recomputes_on_new_inputs(trajectory):
    ctrl = LinePlotController(LinePlotInputs(trajectory=trajectory))
    first = ctrl.result()
    ctrl.set_inputs(LinePlotInputs(trajectory=trajectory, observations=[ObservationRecord(time=9, cases=3)]))
    second = ctrl.result()
    assert second is not first
    assert second.series[-1] == TimePoint(9, {"cases": 3})

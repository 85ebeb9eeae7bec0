# tests/line_plot/conftest.py
"""Pytest configuration and shared builders for line_plot tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure epicurves is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


CUMULATIVE = {"recovered", "fatality"}


def make_sample(time: int, **totals: float):
    """TrajectorySample with the given compartment totals (placed in current/cumulative)."""
    from epicurves.line_plot.series_normalizer import TrajectorySample

    current = {k: {"total": v} for k, v in totals.items() if k not in CUMULATIVE}
    cumulative = {k: {"total": v} for k, v in totals.items() if k in CUMULATIVE}
    return TrajectorySample(time=time, current=current, cumulative=cumulative)


@pytest.fixture
def sample():
    return make_sample


@pytest.fixture
def trajectory():
    """Three-sample trajectory with bands for susceptible and infectious."""
    from epicurves.line_plot.series_normalizer import Trajectory

    mean = [
        make_sample(0, susceptible=1000.4, infectious=10.6, recovered=0.0),
        make_sample(1, susceptible=990.0, infectious=20.2, recovered=3.5),
        make_sample(2, susceptible=975.0, infectious=0.3, recovered=12.0),
    ]
    lower = [
        make_sample(0, susceptible=990.0, infectious=8.0, recovered=0.0),
        make_sample(1, susceptible=980.0, infectious=15.0, recovered=2.0),
        make_sample(2, susceptible=960.0, infectious=0.0, recovered=10.0),
    ]
    upper = [
        make_sample(0, susceptible=1010.0, infectious=13.0, recovered=0.0),
        make_sample(1, susceptible=1000.0, infectious=25.0, recovered=5.0),
        make_sample(2, susceptible=990.0, infectious=1.0, recovered=14.0),
    ]
    return Trajectory(mean=mean, lower=lower, upper=upper)


@pytest.fixture
def observations():
    """Observation records including one all-empty row."""
    from epicurves.line_plot.observation_windower import ObservationRecord

    return [
        ObservationRecord(time=0, cases=10),
        ObservationRecord(time=1, cases=0, deaths=0, hospitalized=0, icu=0),
        ObservationRecord(time=2, cases=15, deaths=1),
        ObservationRecord(time=3, cases=22, hospitalized=4),
        ObservationRecord(time=4, cases=50, icu=2),
        ObservationRecord(time=5, cases=52, deaths=3),
    ]

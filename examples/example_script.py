"""Build a line plot result from a toy SIR-like trajectory and a few case counts."""

import pandas as pd

from epicurves.line_plot import LinePlotController, LinePlotInputs, MitigationInterval, ScaleMode
from epicurves.line_plot.dataframe_io import observations_from_frame, series_to_frame, trajectory_from_dicts
from epicurves.utils.logging import configure_logging

configure_logging(level="DEBUG")

DAY_MS = 86_400_000
T0 = 1583020800000  # 2020-03-01


def sample(day: int, s: float, i: float, r: float) -> dict:
    return {
        "time": T0 + day * DAY_MS,
        "current": {"susceptible": {"total": s}, "infectious": {"total": i}},
        "cumulative": {"recovered": {"total": r}},
    }


mean = [sample(d, 1000 - 12 * d, 10 + 6 * d, 2 * d) for d in range(10)]
lower = [sample(d, 990 - 12 * d, 8 + 5 * d, 1.5 * d) for d in range(10)]
upper = [sample(d, 1010 - 12 * d, 12 + 7 * d, 2.5 * d) for d in range(10)]

case_counts = pd.DataFrame({
    "time": pd.date_range("2020-03-02", periods=6, freq="D"),
    "cases": [4, 0, 9, 15, 24, 31],
    "deaths": [0, 0, 0, 1, 1, 2],
})

inputs = LinePlotInputs(
    trajectory=trajectory_from_dicts(mean, lower, upper),
    observations=observations_from_frame(case_counts),
    hospital_beds=150,
    intervals=[MitigationInterval(id="1", t_min=T0 - DAY_MS, t_max=T0 + 4 * DAY_MS, strength=60, name="Closures")],
)

controller = LinePlotController(inputs)
result = controller.result()
print(series_to_frame(result.series))
print("domain:", result.domain)
print("scatters:", [s.key for s in result.plan.scatters])
print("intervals:", result.intervals)

controller.toggle_metric("susceptible")
controller.set_scale(ScaleMode.LOG)
print("after hiding susceptible, log scale:", controller.result().domain)

"""Text plots of a single forecast variable.

Each simulated hour of a trajectory becomes one line holding the value, its
unit and a bar of ``=`` characters scaled between the smallest and largest
sampled value.
"""

from collections.abc import Callable
from enum import Enum

from rk4_weather.core.state import WeatherState
from rk4_weather.core.trajectory import Trajectory


class PlotVariable(Enum):
    """Variables that can be plotted, with their unit and value accessor."""

    TEMPERATURE = ("Temperature", "°C", lambda s: s.temperature)
    # centred on 1000 hPa so the bars show the variation
    PRESSURE = ("Pressure", "hPa", lambda s: s.pressure - 1000.0)
    HUMIDITY = ("Humidity", "%", lambda s: s.humidity)
    WIND_SPEED = ("Wind Speed", "m/s", lambda s: s.wind_speed)

    def __init__(
        self, label: str, unit: str, accessor: Callable[[WeatherState], float]
    ) -> None:
        self.label = label
        self.unit = unit
        self.accessor = accessor

    def extract(self, state: WeatherState) -> float:
        return self.accessor(state)


def ascii_plot(
    trajectory: Trajectory, variable: PlotVariable, width: int = 50
) -> list[str]:
    """Render ``variable`` over time as lines of text.

    Parameters
    ----------
    trajectory : Trajectory
        Forecast to plot; sampled once per simulated hour.
    variable : PlotVariable
        Which variable to draw.
    width : int, default=50
        Maximum bar length in characters.

    Returns
    -------
    list[str]
        One ``"<value> <unit> | <bar>"`` line per sample. Empty for an empty
        trajectory.
    """
    values = [variable.extract(state) for _, state in trajectory.hourly()]
    if not values:
        return []

    low, high = min(values), max(values)
    scale = width / (high - low + 1.0)

    lines = []
    for value in values:
        length = max(0, min(width, int((value - low) * scale)))
        lines.append(f"{value:4.1f} {variable.unit:>3} | {'=' * length}")
    return lines

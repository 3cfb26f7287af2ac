"""Ordered forecast output."""

from collections.abc import Iterator, Sequence

import pandas as pd

from rk4_weather.core.state import WeatherState


TRAJECTORY_COLUMNS = [
    "time_hours",
    "temperature",
    "pressure",
    "humidity",
    "wind_speed",
    "wind_direction",
]


class Trajectory(Sequence[WeatherState]):
    """Append-only sequence of states sampled every ``step_size`` hours.

    Entry ``i`` holds the state at simulated time ``i * step_size``; entry 0 is
    the initial condition.
    """

    def __init__(
        self, step_size: float, states: Sequence[WeatherState] = ()
    ) -> None:
        self.step_size = step_size
        self._states: list[WeatherState] = list(states)

    def append(self, state: WeatherState) -> None:
        self._states.append(state)

    def __getitem__(self, index):  # type: ignore[override]
        return self._states[index]

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[WeatherState]:
        return iter(self._states)

    def __repr__(self) -> str:
        return f"Trajectory(step_size={self.step_size}, entries={len(self)})"

    def time_at(self, index: int) -> float:
        """Simulated time in hours of entry ``index``."""
        return index * self.step_size

    @property
    def times(self) -> list[float]:
        return [self.time_at(i) for i in range(len(self))]

    @property
    def hourly_stride(self) -> int:
        """Number of entries per simulated hour (at least one)."""
        return max(1, int(round(1.0 / self.step_size)))

    def hourly(self) -> list[tuple[float, WeatherState]]:
        """Return ``(time, state)`` pairs, one per simulated hour."""
        return [
            (self.time_at(i), self._states[i])
            for i in range(0, len(self), self.hourly_stride)
        ]

    def to_frame(self) -> pd.DataFrame:
        """Return the trajectory as a DataFrame, one row per entry."""
        rows = [
            [self.time_at(i), *state.as_tuple()] for i, state in enumerate(self._states)
        ]
        return pd.DataFrame(rows, columns=TRAJECTORY_COLUMNS)

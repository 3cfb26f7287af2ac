"""Forecast loop driving the RK4 integrator.

The engine validates its inputs, then folds the integrator over simulated
time and returns the complete trajectory. Nothing is returned on failure: a
rejected input, a numerical error or a cancellation raises before the caller
sees any states.
"""

import math
from collections.abc import Callable
from typing import Any

from rk4_weather.core.errors import ForecastCancelledError, PreconditionError
from rk4_weather.core.integrator import RK4Integrator
from rk4_weather.core.logger import logger
from rk4_weather.core.physics import DerivativeModel, PhysicsConstants
from rk4_weather.core.state import (
    GeographicContext,
    WeatherState,
    validate_context,
    validate_state,
)
from rk4_weather.core.trajectory import Trajectory


# Relative slack for rounding error in duration / step_size. Only drift that
# pushes the ratio above a whole number is absorbed.
STEP_COUNT_TOLERANCE = 1e-12


def count_steps(duration_hours: float, step_size: float) -> int:
    """Return how many steps cover ``duration_hours``.

    The loop keeps stepping while the simulated time is below the horizon, so
    the count is ``ceil(duration / step)``. The ratio is first shrunk by
    ``STEP_COUNT_TOLERANCE`` of itself, so ``24 h / 0.1 h`` stays at 240 steps
    while any horizon past a step boundary, however small, still gets its
    final step.
    """
    ratio = duration_hours / step_size
    return math.ceil(ratio * (1.0 - STEP_COUNT_TOLERANCE))


class ForecastEngine:
    """Generate forecasts by repeated RK4 stepping.

    Parameters
    ----------
    model : DerivativeModel, optional
        Right-hand side of the ODE system. Defaults to a model with default
        constants and an unseeded generator.
    """

    def __init__(self, model: DerivativeModel | None = None) -> None:
        self.model = model or DerivativeModel()
        self.integrator = RK4Integrator(self.model)

    @classmethod
    def from_constants(
        cls, constants: PhysicsConstants | None = None, seed: int | None = None
    ) -> "ForecastEngine":
        """Build an engine around a fresh ``DerivativeModel``."""
        return cls(DerivativeModel(constants=constants, seed=seed))

    @staticmethod
    def check_preconditions(
        initial_state: WeatherState,
        context: GeographicContext,
        duration_hours: float,
        step_size: float,
    ) -> None:
        """Raise ``PreconditionError`` for any input a run cannot start from."""
        if not math.isfinite(step_size) or step_size <= 0:
            raise PreconditionError(
                f"Step size must be a positive number of hours (got {step_size})"
            )
        if not math.isfinite(duration_hours) or duration_hours < 0:
            raise PreconditionError(
                f"Forecast duration must be a non-negative number of hours "
                f"(got {duration_hours})"
            )
        validate_state(initial_state)
        validate_context(context)
        if math.sin(context.latitude_radians) == 0.0:
            raise PreconditionError(
                f"Latitude {context.latitude} gives a zero Coriolis parameter; "
                "the geostrophic wind is undefined at the equator"
            )

    def run(
        self,
        initial_state: WeatherState,
        context: GeographicContext,
        duration_hours: float,
        step_size: float = 0.1,
        should_cancel: Callable[[], bool] | None = None,
        on_step: Callable[[int, int], None] | None = None,
    ) -> Trajectory:
        """Integrate from ``initial_state`` over ``duration_hours``.

        Parameters
        ----------
        initial_state : WeatherState
            Validated starting conditions at t = 0.
        context : GeographicContext
            Location of the forecast point.
        duration_hours : float
            Forecast horizon in hours, >= 0.
        step_size : float, default=0.1
            Integration step in hours, > 0.
        should_cancel : callable, optional
            Polled between steps; returning True aborts the run.
        on_step : callable, optional
            Called as ``on_step(steps_done, total_steps)`` after each step.

        Returns
        -------
        Trajectory
            ``count_steps(duration_hours, step_size) + 1`` states, the first
            being a copy of ``initial_state``.

        Raises
        ------
        PreconditionError
            If an input is out of its domain. No integration is attempted.
        ComputationError
            If a step produces a non-finite state.
        ForecastCancelledError
            If ``should_cancel`` returned True.
        """
        self.check_preconditions(initial_state, context, duration_hours, step_size)

        total_steps = count_steps(duration_hours, step_size)
        logger.info(
            f"Starting forecast: {duration_hours:g} h in {total_steps} steps of "
            f"{step_size:g} h at lat {context.latitude:g}°, "
            f"elevation {context.elevation:g} m"
        )

        trajectory = Trajectory(step_size, [initial_state.copy()])
        current = initial_state
        for step in range(total_steps):
            if should_cancel is not None and should_cancel():
                logger.warning(f"Forecast cancelled after {step} of {total_steps} steps")
                raise ForecastCancelledError(
                    f"Forecast cancelled after {step} of {total_steps} steps"
                )
            current = self.integrator.step(current, step * step_size, step_size, context)
            trajectory.append(current)
            logger.debug(f"t={(step + 1) * step_size:.2f} h -> {current}")
            if on_step is not None:
                on_step(step + 1, total_steps)

        logger.info(f"Forecast complete: {len(trajectory)} states")
        return trajectory

    def get_model_info(self) -> dict[str, Any]:
        """Describe the model this engine integrates."""
        return {
            "integrator": "Classical Runge-Kutta (RK4)",
            "variables": [
                "temperature",
                "pressure",
                "humidity",
                "wind_speed",
                "wind_direction",
            ],
            "constants": self.model.constants.as_dict(),
            "random_source": type(self.model.rng).__name__,
        }

"""Forecasting core: state types, physics model, integrator and diagnostics."""

from rk4_weather.core.config import (
    build_constants,
    build_context,
    build_initial_state,
    load_config,
)
from rk4_weather.core.diagnostics import classify_weather, compass_direction, heat_index
from rk4_weather.core.engine import ForecastEngine, count_steps
from rk4_weather.core.errors import (
    ComputationError,
    ForecastCancelledError,
    PreconditionError,
    WeatherModelError,
)
from rk4_weather.core.integrator import RK4Integrator, enforce_constraints
from rk4_weather.core.logger import (
    get_file_handler,
    get_logger,
    get_rich_handler,
    logger,
    setup_console_logging,
    setup_file_logging,
    teardown_file_logging,
)
from rk4_weather.core.physics import DerivativeModel, PhysicsConstants
from rk4_weather.core.plotting import PlotVariable, ascii_plot
from rk4_weather.core.state import (
    Derivative,
    GeographicContext,
    WeatherState,
    combine,
    validate_context,
    validate_state,
)
from rk4_weather.core.summary import ForecastSummary, summarize, weather_alerts
from rk4_weather.core.trajectory import Trajectory


__all__ = [
    "ComputationError",
    "Derivative",
    "DerivativeModel",
    "ForecastCancelledError",
    "ForecastEngine",
    "ForecastSummary",
    "GeographicContext",
    "PhysicsConstants",
    "PlotVariable",
    "PreconditionError",
    "RK4Integrator",
    "Trajectory",
    "WeatherModelError",
    "WeatherState",
    "ascii_plot",
    "build_constants",
    "build_context",
    "build_initial_state",
    "classify_weather",
    "combine",
    "compass_direction",
    "count_steps",
    "enforce_constraints",
    "get_file_handler",
    "get_logger",
    "get_rich_handler",
    "heat_index",
    "load_config",
    "logger",
    "setup_console_logging",
    "setup_file_logging",
    "teardown_file_logging",
    "summarize",
    "validate_context",
    "validate_state",
    "weather_alerts",
]

"""Exception types raised by the forecasting core.

Classes
-------
WeatherModelError
    Base class for every error raised by the core.
PreconditionError
    An input was rejected before any integration started.
ComputationError
    The numerical model produced an undefined or non-finite value.
ForecastCancelledError
    A run was stopped by its cancellation callback.
"""


class WeatherModelError(Exception):
    """Base class for forecasting errors."""


class PreconditionError(WeatherModelError, ValueError):
    """Raised when a run is requested with invalid inputs."""


class ComputationError(WeatherModelError, ArithmeticError):
    """Raised when the model produces NaN, infinity or divides by zero."""


class ForecastCancelledError(WeatherModelError):
    """Raised when a forecast run is cancelled between steps."""

"""RK4 Weather - single-point atmospheric forecasting by Runge-Kutta integration.

This package advances a five-variable atmospheric state (temperature, pressure,
humidity, wind speed and wind direction) through a coupled system of ordinary
differential equations and derives simple diagnostics from the result.
"""

__version__ = "0.1.0"

"""Command line interface for RK4 Weather."""

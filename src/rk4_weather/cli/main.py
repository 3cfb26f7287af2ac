"""RK4 Weather - Command Line Interface.

Runs point forecasts from a YAML configuration and/or command line options
and renders the result as rich tables, panels and text plots.
"""

import logging
from argparse import Namespace
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from typing_extensions import Annotated

from rk4_weather import __version__
from rk4_weather.core.config import (
    build_constants,
    build_context,
    build_initial_state,
    load_config,
)
from rk4_weather.core.diagnostics import classify_weather, compass_direction, heat_index
from rk4_weather.core.engine import ForecastEngine
from rk4_weather.core.logger import (
    get_logger,
    setup_console_logging,
    setup_file_logging,
    teardown_file_logging,
)
from rk4_weather.core.plotting import PlotVariable, ascii_plot
from rk4_weather.core.state import GeographicContext
from rk4_weather.core.summary import ForecastSummary, summarize, weather_alerts
from rk4_weather.core.trajectory import Trajectory


app = typer.Typer(
    name="rk4-weather",
    help="🌦️  RK4 Weather - point weather forecasting with Runge-Kutta integration",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console(stderr=True)

setup_console_logging(console=console)


ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]


def _apply_overrides(cfg: Namespace, section: str, **values: float | None) -> None:
    """Overwrite configuration values with options given on the command line."""
    target = getattr(cfg, section)
    for key, value in values.items():
        if value is not None:
            setattr(target, key, value)


def _forecast_table(trajectory: Trajectory) -> Table:
    """Build the hourly forecast table."""
    table = Table(title="Hourly Forecast", header_style="bold cyan")
    table.add_column("Time (h)", justify="right")
    table.add_column("Temp (°C)", justify="right")
    table.add_column("Feels (°C)", justify="right")
    table.add_column("Press (hPa)", justify="right")
    table.add_column("Humid (%)", justify="right")
    table.add_column("Wind (m/s)", justify="right")
    table.add_column("Dir", justify="center")
    table.add_column("Condition")

    for time, state in trajectory.hourly():
        table.add_row(
            f"{time:.2f}",
            f"{state.temperature:.2f}",
            f"{heat_index(state.temperature, state.humidity):.2f}",
            f"{state.pressure:.2f}",
            f"{state.humidity:.2f}",
            f"{state.wind_speed:.2f}",
            compass_direction(state.wind_direction),
            classify_weather(state),
        )
    return table


def _display_summary(summary: ForecastSummary, context: GeographicContext) -> None:
    """Display the summary and alert panels."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold]Location:[/bold] {context.latitude:.1f}°, "
            f"{context.elevation:.0f} m\n"
            f"🌡️  Temperature - Avg: [bold]{summary.avg_temperature:.2f}°C[/bold], "
            f"Max: [bold]{summary.max_temperature:.2f}°C[/bold], "
            f"Min: [bold]{summary.min_temperature:.2f}°C[/bold]\n"
            f"💧 Average Humidity: [bold]{summary.avg_humidity:.2f}%[/bold]\n"
            f"💨 Maximum Wind Speed: [bold]{summary.max_wind_speed:.2f} m/s[/bold]",
            title="Forecast Summary",
            border_style="green",
        )
    )

    alerts = weather_alerts(summary)
    if alerts:
        body = "\n".join(f"[bold yellow]⚠[/bold yellow]  {a}" for a in alerts)
        console.print(Panel.fit(body, title="Weather Alerts", border_style="yellow"))
    else:
        console.print(
            Panel.fit(
                "[green]✓ No severe weather warnings for the forecast period[/green]",
                title="Weather Alerts",
                border_style="green",
            )
        )
    console.print()


def _display_plots(trajectory: Trajectory) -> None:
    for variable in PlotVariable:
        console.print(f"\n[bold cyan]{variable.label} over time:[/bold cyan]")
        for line in ascii_plot(trajectory, variable):
            console.print(line, markup=False, highlight=False)


@app.command(name="forecast")
def forecast(  # noqa: PLR0913
    config: ConfigOption = None,
    latitude: Annotated[
        float | None,
        typer.Option("--latitude", help="Latitude in degrees (0-90)"),
    ] = None,
    elevation: Annotated[
        float | None,
        typer.Option("--elevation", help="Elevation in metres (-100 to 9000)"),
    ] = None,
    temperature: Annotated[
        float | None,
        typer.Option("--temperature", "-t", help="Initial temperature in °C"),
    ] = None,
    pressure: Annotated[
        float | None,
        typer.Option("--pressure", "-p", help="Initial pressure in hPa"),
    ] = None,
    humidity: Annotated[
        float | None,
        typer.Option("--humidity", help="Initial relative humidity in %"),
    ] = None,
    wind_speed: Annotated[
        float | None,
        typer.Option("--wind-speed", help="Initial wind speed in m/s"),
    ] = None,
    wind_direction: Annotated[
        float | None,
        typer.Option("--wind-direction", help="Initial wind direction in degrees"),
    ] = None,
    hours: Annotated[
        float | None,
        typer.Option("--hours", "-H", help="Forecast duration in hours"),
    ] = None,
    step_size: Annotated[
        float | None,
        typer.Option("--step-size", help="Integration step in hours"),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Seed for the wind-direction perturbation"),
    ] = None,
    plots: Annotated[
        bool,
        typer.Option("--plots/--no-plots", help="Show text plots of each variable"),
    ] = False,
    log_dir: Annotated[
        Path | None,
        typer.Option("--log-dir", help="Directory for a forecast log file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed logging output"),
    ] = False,
) -> None:
    """Run a point forecast and print hourly conditions.

    Values given as options override the configuration file, which in turn
    overrides the built-in defaults.

    Example:
        rk4-weather forecast --latitude 52 --temperature 28 --hours 12
        rk4-weather forecast -c config.yaml --seed 7 --plots
    """
    logger = get_logger()
    logger.setLevel(logging.INFO)
    setup_console_logging(
        logger,
        console=console,
        level=logging.INFO if verbose else logging.WARNING,
    )

    try:
        cfg = load_config(config)
        _apply_overrides(cfg, "location", latitude=latitude, elevation=elevation)
        _apply_overrides(
            cfg,
            "initial_state",
            temperature=temperature,
            pressure=pressure,
            humidity=humidity,
            wind_speed=wind_speed,
            wind_direction=wind_direction,
        )
        _apply_overrides(
            cfg, "forecast", duration_hours=hours, step_size=step_size, seed=seed
        )

        run_dir = log_dir if log_dir is not None else cfg.run_dir
        if run_dir:
            log_path = setup_file_logging(run_dir, logger)
            if verbose:
                console.print(f"  [dim]Logging to {log_path}[/dim]")

        initial_state = build_initial_state(cfg)
        context = build_context(cfg)
        engine = ForecastEngine.from_constants(
            build_constants(cfg), seed=cfg.forecast.seed
        )

        console.print()
        console.print(
            Panel.fit(
                "[bold cyan]RK4 Weather Forecast[/bold cyan]\n"
                "[dim]4th-order Runge-Kutta atmospheric model[/dim]",
                border_style="cyan",
            )
        )
        console.print()

        duration = float(cfg.forecast.duration_hours)
        step = float(cfg.forecast.step_size)
        engine.check_preconditions(initial_state, context, duration, step)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("[cyan]Integrating...", total=None)

            def on_step(done: int, total: int) -> None:
                progress.update(task, completed=done, total=total)

            trajectory = engine.run(
                initial_state, context, duration, step, on_step=on_step
            )

        console.print(_forecast_table(trajectory))
        _display_summary(summarize(trajectory), context)

        if plots:
            _display_plots(trajectory)

    except KeyboardInterrupt:
        console.print("\n[yellow]⚠ Operation cancelled by user[/yellow]")
        raise typer.Exit(1) from None
    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1) from e
    finally:
        teardown_file_logging(logger)


@app.command(name="info")
def info(config: ConfigOption = None) -> None:
    """Display model constants and the configured run settings.

    Example:
        rk4-weather info
        rk4-weather info --config config.yaml
    """
    try:
        cfg = load_config(config)
        engine = ForecastEngine.from_constants(build_constants(cfg))
        model_info = engine.get_model_info()

        console.print()
        console.print(
            Panel.fit(
                "[bold cyan]RK4 Weather model information[/bold cyan]",
                border_style="cyan",
            )
        )
        console.print()

        table = Table(title="Physics Constants", show_header=False, box=None)
        table.add_column(style="cyan", width=22)
        table.add_column()
        for name, value in model_info["constants"].items():
            table.add_row(name, f"{value:g}")
        console.print(table)
        console.print()

        run_table = Table(title="Run Settings", show_header=False, box=None)
        run_table.add_column(style="cyan", width=22)
        run_table.add_column()
        run_table.add_row("Integrator", model_info["integrator"])
        run_table.add_row(
            "Location",
            f"{cfg.location.latitude}°, {cfg.location.elevation} m",
        )
        run_table.add_row("Duration", f"{cfg.forecast.duration_hours} h")
        run_table.add_row("Step size", f"{cfg.forecast.step_size} h")
        for name, value in vars(cfg.initial_state).items():
            run_table.add_row(f"Initial {name}", str(value))
        console.print(run_table)
        console.print()

    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        raise typer.Exit(1) from e


@app.command(name="version")
def version() -> None:
    """Show version information."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]RK4 Weather[/bold cyan]\n"
            f"Version: [bold]{__version__}[/bold]\n"
            f"Integrator: classical 4th-order Runge-Kutta",
            border_style="cyan",
        )
    )
    console.print()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """RK4 Weather - point forecasting from a coupled ODE model."""
    if version_flag:
        version()
        raise typer.Exit

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


if __name__ == "__main__":
    app()

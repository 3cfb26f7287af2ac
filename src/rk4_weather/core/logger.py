"""Rich-based logging for the forecasting core and the CLI.

Console output goes through a ``RichHandler`` so that engine messages share
styling and markup with the CLI. A run directory can additionally receive a
plain-text log file that is flushed after every record.

Functions
---------
get_logger
    Return the shared weather logger, creating it on first use.
setup_console_logging
    Attach (or replace) the rich console handler of a logger.
get_rich_handler
    Build a styled ``RichHandler``.
setup_file_logging
    Attach (or replace) a flushing file handler inside a run directory.
teardown_file_logging
    Detach and close the file handlers of a logger.
get_file_handler
    Build a ``FileHandler`` that flushes on every record.

Attributes
----------
logger : logging.Logger
    Shared logger used across the package.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "weather_logger"

_logger: Optional[logging.Logger] = None


class FlushFileHandler(logging.FileHandler):
    """File handler that flushes after each record."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


def get_rich_handler(
    console: Optional[Console] = None,
    level: int = logging.INFO,
    show_path: bool = False,
) -> RichHandler:
    """Create a rich console handler.

    Parameters
    ----------
    console : Console, optional
        Console to write to. Defaults to a new stderr console.
    level : int, default=logging.INFO
        Handler level.
    show_path : bool, default=False
        Whether to print the emitting source location.

    Returns
    -------
    RichHandler
        Handler with timestamps, markup and rich tracebacks enabled.
    """
    if console is None:
        console = Console(stderr=True)

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=show_path,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=True,
    )
    handler.setLevel(level)
    return handler


def get_file_handler(
    log_path: Path | str,
    level: int = logging.INFO,
) -> logging.FileHandler:
    """Create a plain-text file handler that flushes every record.

    Parameters
    ----------
    log_path : Path | str
        Destination file.
    level : int, default=logging.INFO
        Handler level.

    Returns
    -------
    logging.FileHandler
        A ``FlushFileHandler`` without rich markup in its format.
    """
    handler = FlushFileHandler(str(log_path), mode="w", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def get_logger(
    name: str = LOGGER_NAME,
    level: int = logging.INFO,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Return the shared weather logger.

    The first call creates a non-propagating logger with a rich console
    handler; later calls return the same instance and ignore the arguments.
    """
    global _logger  # noqa: PLW0603

    if _logger is not None:
        return _logger

    _logger = logging.getLogger(name)
    _logger.setLevel(level)
    _logger.propagate = False

    if not _logger.hasHandlers():
        setup_console_logging(_logger, console=console, level=level)

    return _logger


def setup_console_logging(
    logger_instance: Optional[logging.Logger] = None,
    console: Optional[Console] = None,
    level: int = logging.INFO,
    show_path: bool = False,
) -> None:
    """Replace the rich console handler of ``logger_instance``.

    Parameters
    ----------
    logger_instance : logging.Logger, optional
        Logger to configure. Defaults to the shared weather logger.
    console : Console, optional
        Console to write to, e.g. the CLI console.
    level : int, default=logging.INFO
        Handler level.
    show_path : bool, default=False
        Whether to print the emitting source location.
    """
    if logger_instance is None:
        logger_instance = get_logger()

    logger_instance.handlers = [
        h for h in logger_instance.handlers if not isinstance(h, RichHandler)
    ]
    logger_instance.addHandler(
        get_rich_handler(console=console, level=level, show_path=show_path)
    )


def setup_file_logging(
    run_dir: Path | str,
    logger_instance: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    filename: str = "forecast.log",
) -> Path:
    """Log to ``run_dir / filename``, creating the directory if needed.

    Any file handler already attached to the logger is closed and replaced.

    Returns
    -------
    Path
        Path of the log file.
    """
    if logger_instance is None:
        logger_instance = get_logger()

    run_dir = Path(run_dir)
    run_dir.mkdir(parents=True, exist_ok=True)
    log_path = run_dir / filename

    teardown_file_logging(logger_instance)
    logger_instance.addHandler(get_file_handler(log_path, level=level))

    return log_path


def teardown_file_logging(logger_instance: Optional[logging.Logger] = None) -> None:
    """Remove and close every file handler of ``logger_instance``."""
    if logger_instance is None:
        logger_instance = get_logger()

    for handler in [
        h for h in logger_instance.handlers if isinstance(h, logging.FileHandler)
    ]:
        logger_instance.removeHandler(handler)
        handler.close()


logger = get_logger()

"""
Logging setup for analysis runs.

The terminal gets a Rich handler whose threshold follows the run's
verbosity (``quiet`` / ``normal`` / ``verbose``). An optional log file
always records the full DEBUG trace of a run, so a quiet terminal session
can still be diagnosed afterwards.

Degraded-data notices (a cycle without internal edges, coupling-blind
single-module scoring) are logged at INFO and only reach the terminal in
verbose mode.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import InvalidConfigError

ROOT_LOGGER_NAME = "monolith_insight"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def verbosity_level(verbosity: str) -> int:
    """Logging level used on the terminal for a verbosity name."""
    try:
        return VERBOSITY_LEVELS[verbosity]
    except KeyError:
        raise InvalidConfigError(
            "verbosity", verbosity, f"must be one of {', '.join(VERBOSITY_LEVELS)}"
        )


def _verbosity_from_flags(verbose: bool, quiet: bool) -> str:
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"


def _console_handler(verbosity: str) -> RichHandler:
    detailed = verbosity == "verbose"
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=detailed,
        markup=False,
        show_time=True,
        show_path=detailed,
    )
    handler.setLevel(verbosity_level(verbosity))
    return handler


def _file_handler(log_file: Union[str, Path]) -> logging.FileHandler:
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Union[str, Path]] = None,
    verbosity: Optional[str] = None,
) -> logging.Logger:
    """
    Install the terminal handler (and optional file handler) for a run.

    Args:
        verbose: Shorthand for ``verbosity="verbose"``
        quiet: Shorthand for ``verbosity="quiet"``, wins over *verbose*
        log_file: Append a DEBUG-level trace of the run to this file
        verbosity: Explicit verbosity name, overrides both flags

    Returns:
        The package root logger
    """
    if verbosity is None:
        verbosity = _verbosity_from_flags(verbose, quiet)
    console_level = verbosity_level(verbosity)

    handlers: list[logging.Handler] = [_console_handler(verbosity)]
    level = console_level
    if log_file:
        handlers.append(_file_handler(log_file))
        level = logging.DEBUG

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    return logger


def apply_verbosity(verbosity: str) -> None:
    """Retune the terminal handler once the run's configuration is known.

    The file handler, if any, keeps recording everything.
    """
    level = verbosity_level(verbosity)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    file_logging = False
    for handler in logging.getLogger().handlers:
        if isinstance(handler, RichHandler):
            handler.setLevel(level)
        elif isinstance(handler, logging.FileHandler):
            file_logging = True
    logger.setLevel(logging.DEBUG if file_logging else level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the package namespace; bare names such as ``"graph"`` are prefixed."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)

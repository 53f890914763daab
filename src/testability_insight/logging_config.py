"""
Logging configuration for Testability Insight.

Log records go to stderr through Rich so that stdout stays reserved for
results (tables or JSON). Levels follow ``AnalysisConfig.verbosity``:

    quiet    ERROR    only fatal problems
    normal   WARNING  plus files skipped during analysis
    verbose  DEBUG    plus parser fallbacks, discovery and run summaries
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "testability_insight"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Install a Rich stderr handler (and optionally a file handler) on the root logger.

    Calling it again replaces the previous handlers.

    Args:
        verbosity: One of ``quiet``, ``normal``, ``verbose``
        log_file: Optional path; records are appended in plain text

    Returns:
        The ``testability_insight`` package logger
    """
    level = LEVELS.get(verbosity, logging.WARNING)
    debug = level == logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=debug,
            markup=False,
            show_path=debug,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``testability_insight`` namespace (the package logger for None)."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)

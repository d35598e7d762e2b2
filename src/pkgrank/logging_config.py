"""
Logging setup for pkgrank.

Engine modules only create loggers under the ``pkgrank`` namespace. Handlers
are installed once per run by the entry point (``pkgrank.api.analyze``),
driven by ``AnalysisConfig.verbosity``.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import Verbosity

PACKAGE_LOGGER = "pkgrank"

_LEVELS: dict[str, int] = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

# Marks handlers owned by setup_logging so a later call can replace them.
_OWNED = "_pkgrank_owned"


def level_for(verbosity: str) -> int:
    """Logging level for a verbosity name.

    Raises:
        ValueError: If *verbosity* is not quiet, normal or verbose
    """
    try:
        return _LEVELS[verbosity]
    except KeyError:
        raise ValueError(f"unknown verbosity {verbosity!r}") from None


def setup_logging(verbosity: Verbosity = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach rich console output (and optionally a log file) to the pkgrank logger.

    Non-convergence and solver fallbacks are WARNINGs, so "normal" shows
    them; "verbose" adds per-run iteration counts and graph sizes, "quiet"
    keeps only errors. Handlers from a previous call are replaced, so
    repeated runs do not duplicate output.

    Args:
        verbosity: quiet, normal or verbose
        log_file: Optional file path to append logs to

    Returns:
        The configured pkgrank logger
    """
    level = level_for(verbosity)
    verbose = verbosity == "verbose"
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # Node payloads are user data and may contain [brackets]
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the pkgrank namespace; bare names get the prefix."""
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)

    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"

    return logging.getLogger(name)

"""Logging configuration."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Configure root logging for the CLI.

    Log records go to stderr so that standard output only carries device
    status lines.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        verbose: Include time and source location in log records
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        rich_tracebacks=verbose,
    )

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    # urllib3 logs every connection at DEBUG
    if not verbose:
        logging.getLogger("urllib3").setLevel(logging.WARNING)

"""Logging configuration for the git-scrub command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def verbosity_to_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbosity: int = 0) -> None:
    """Send log records to stderr through rich, at a level set by ``-v`` flags."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbosity >= 2,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=verbosity_to_level(verbosity),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

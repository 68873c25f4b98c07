"""Core history reading and checkout logic for git-scrub."""

from .coordinator import CheckoutCoordinator
from .errors import (
    CheckoutError,
    CommandTimeout,
    ConfigError,
    ExecutionError,
    ScrubError,
    ToolFailure,
)
from .log_reader import CommitLogReader, parse_log_output
from .navigator import HistoryNavigator
from .runner import CommandResult, CommandRunner, SubprocessRunner

__all__ = [
    "CheckoutCoordinator",
    "CheckoutError",
    "CommandResult",
    "CommandRunner",
    "CommandTimeout",
    "CommitLogReader",
    "ConfigError",
    "ExecutionError",
    "HistoryNavigator",
    "ScrubError",
    "SubprocessRunner",
    "ToolFailure",
    "parse_log_output",
]

"""Exceptions raised by git-scrub."""

from typing import Optional, Sequence


class ScrubError(Exception):
    """Base class for all git-scrub errors."""


class ConfigError(ScrubError):
    """Settings could not be loaded or are invalid."""


class ExecutionError(ScrubError):
    """git could not be run, or did not finish."""

    def __init__(self, message: str, args: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.message = message
        self.command = list(args) if args is not None else []


class CommandTimeout(ExecutionError):
    """git did not finish within the configured timeout."""


class ToolFailure(ExecutionError):
    """git ran but exited with a nonzero status."""

    def __init__(
        self, message: str, returncode: int, args: Optional[Sequence[str]] = None
    ):
        super().__init__(message, args)
        self.returncode = returncode

    def __str__(self) -> str:
        # returncode is -1 when the process never exited on its own
        if self.returncode < 0:
            return self.message
        return f"{self.message} (exit code {self.returncode})"


class CheckoutError(ToolFailure):
    """git refused to check out the requested ref."""

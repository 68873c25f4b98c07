"""Running git as an external process."""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

from pydantic import BaseModel

from git_scrub.core.errors import CommandTimeout, ExecutionError

logger = logging.getLogger(__name__)


class CommandResult(BaseModel):
    """Captured outcome of one finished process."""

    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def error_text(self) -> str:
        """Best available failure detail: stderr, else stdout."""
        return (self.stderr.strip() or self.stdout.strip()) or (
            f"{self.args[0] if self.args else 'command'} exited with status {self.returncode}"
        )


class CommandRunner(Protocol):
    """Anything that can run a command line and capture its output."""

    def run(self, args: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
        ...


class SubprocessRunner:
    """Runs commands with :mod:`subprocess`, capturing stdout and stderr."""

    def run(self, args: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
        argv = [str(arg) for arg in args]
        logger.debug("Running: %s", shlex.join(argv))
        try:
            result = subprocess.run(  # noqa: S603
                argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ExecutionError(
                f"Failed to execute {argv[0]}: command not found", argv
            ) from e
        except PermissionError as e:
            raise ExecutionError(
                f"Failed to execute {argv[0]}: permission denied", argv
            ) from e
        except subprocess.TimeoutExpired as e:
            raise CommandTimeout(
                f"{argv[0]} did not finish within {timeout} seconds", argv
            ) from e
        except OSError as e:
            raise ExecutionError(f"Failed to execute {argv[0]}: {e}", argv) from e

        logger.debug("%s exited with status %d", argv[0], result.returncode)
        return CommandResult(
            args=argv,
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )


def git_command(
    git_executable: str, repo_path: Union[str, Path], *git_args: str
) -> List[str]:
    """Build a git command line that operates on ``repo_path`` via ``-C``."""
    return [git_executable, "--no-pager", "-C", str(repo_path), *git_args]

"""Reading and parsing a repository's commit history."""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from git_scrub.core.errors import ToolFailure
from git_scrub.core.runner import CommandRunner, SubprocessRunner, git_command
from git_scrub.models.commit import Commit, CommitHistory
from git_scrub.models.settings import DEFAULT_DATE_FORMAT, ScrubSettings

logger = logging.getLogger(__name__)

# hash, author name, author date, subject; one per line
LOG_FORMAT = "%H%n%an%n%ad%n%s"
LINES_PER_COMMIT = 4


def parse_git_date(text: str, date_format: str = DEFAULT_DATE_FORMAT) -> Optional[datetime]:
    """Parse a date as printed by ``git log``; None if it doesn't match."""
    try:
        return datetime.strptime(text.strip(), date_format)
    except ValueError:
        return None


def parse_log_output(output: str, date_format: str = DEFAULT_DATE_FORMAT) -> CommitHistory:
    """Turn ``git log --pretty=format:%H%n%an%n%ad%n%s`` output into commits.

    Lines are consumed in groups of four. An incomplete trailing group is
    ignored, and a group whose date can't be parsed is skipped without
    affecting the groups around it.
    """
    if not output:
        return CommitHistory()

    # split rather than splitlines so an empty subject on the last commit survives
    lines = output.replace("\r\n", "\n").split("\n")
    commits: List[Commit] = []

    for start in range(0, len(lines), LINES_PER_COMMIT):
        group = lines[start : start + LINES_PER_COMMIT]
        if len(group) < LINES_PER_COMMIT:
            logger.debug("Dropping incomplete log record at line %d", start + 1)
            break

        commit_hash, author, date_text, subject = group
        date = parse_git_date(date_text, date_format)
        if date is None:
            logger.debug(
                "Dropping commit %s: unparseable date %r", commit_hash, date_text
            )
            continue

        commits.append(
            Commit(id=commit_hash, author=author, date=date, message=subject)
        )

    return CommitHistory(commits)


class CommitLogReader:
    """Fetches the commit history of a repository with ``git log``."""

    def __init__(
        self,
        settings: Optional[ScrubSettings] = None,
        runner: Optional[CommandRunner] = None,
    ):
        self.settings = settings or ScrubSettings()
        self.runner = runner or SubprocessRunner()

    def date_option(self) -> str:
        """``--date`` argument that makes git print dates in ``date_format``."""
        if self.settings.date_format == DEFAULT_DATE_FORMAT:
            return "--date=default"
        # git formats with the same strftime codes strptime reads back
        return f"--date=format:{self.settings.date_format}"

    def log_command(self, repo_path: Union[str, Path]) -> List[str]:
        """Command line used to list the history of ``repo_path``."""
        args = ["log", self.date_option(), f"--pretty=format:{LOG_FORMAT}"]
        if self.settings.history_limit is not None:
            args.append(f"--max-count={self.settings.history_limit}")
        return git_command(self.settings.git_executable, repo_path, *args)

    def fetch_history(self, repo_path: Union[str, Path]) -> CommitHistory:
        """Return the history of ``repo_path``, newest commit first.

        Raises:
            ExecutionError: git is missing, unrunnable or timed out.
            ToolFailure: git failed and produced no usable output.
        """
        result = self.runner.run(self.log_command(repo_path), timeout=self.settings.timeout)
        history = parse_log_output(result.stdout, self.settings.date_format)

        if not result.ok:
            if not history:
                raise ToolFailure(result.error_text, result.returncode, result.args)
            logger.warning(
                "git log exited with status %d; using %d commits it printed: %s",
                result.returncode,
                len(history),
                result.error_text,
            )

        logger.info("Read %d commits from %s", len(history), repo_path)
        return history

"""Shared fixtures for git-scrub tests."""

import tempfile
from pathlib import Path
from typing import List, Optional, Sequence

import pytest
from git import Repo

from git_scrub.core.runner import CommandResult

COMMIT_MESSAGES = ["First commit", "Second commit", "Third commit"]


class FakeRunner:
    """Command runner that records calls and replays canned results."""

    def __init__(self, results: Optional[List[CommandResult]] = None):
        self.results = list(results or [])
        self.calls: List[List[str]] = []
        self.timeouts: List[Optional[float]] = []
        self.error: Optional[Exception] = None

    def run(self, args: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
        self.calls.append(list(args))
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        if self.results:
            return self.results.pop(0)
        return CommandResult(args=list(args), returncode=0)


def make_result(stdout: str = "", returncode: int = 0, stderr: str = "") -> CommandResult:
    return CommandResult(
        args=["git"], returncode=returncode, stdout=stdout, stderr=stderr
    )


def log_lines(*records) -> str:
    """Join (hash, author, date, subject) records the way git prints them."""
    return "\n".join("\n".join(record) for record in records)


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path, monkeypatch):
    """Keep the user's own git-scrub config out of the tests."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def temp_git_repo():
    """Create a real git repository with three commits on ``main``."""
    with tempfile.TemporaryDirectory() as temp_dir:
        repo_path = Path(temp_dir)
        repo = Repo.init(repo_path)

        with repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")

        for i, message in enumerate(COMMIT_MESSAGES):
            (repo_path / "story.txt").write_text(f"chapter {i + 1}\n")
            repo.index.add(["story.txt"])
            repo.index.commit(message)

        repo.git.branch("-M", "main")
        yield repo_path

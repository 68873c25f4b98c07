"""Data models for git-scrub."""

from .commit import Commit, CommitHistory
from .settings import DEFAULT_DATE_FORMAT, ScrubSettings

__all__ = ["Commit", "CommitHistory", "ScrubSettings", "DEFAULT_DATE_FORMAT"]

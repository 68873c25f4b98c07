"""Commit and commit history models for git-scrub."""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Iterable, Iterator, Optional, Tuple, Union, overload

from pydantic import BaseModel

SHORT_ID_LENGTH = 7

_AGE_UNITS = [
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
]


class Commit(BaseModel):
    """A single commit as reported by ``git log``."""

    id: str
    message: str
    author: str
    date: datetime

    model_config = {"frozen": True}

    @property
    def short_id(self) -> str:
        """Abbreviated hash for display."""
        return self.id[:SHORT_ID_LENGTH]

    def age(self, now: Optional[datetime] = None) -> str:
        """Describe how long ago the commit was made, e.g. ``3 days ago``."""
        if now is None:
            now = datetime.now(timezone.utc)
        seconds = int((now - self.date).total_seconds())
        if seconds < 0:
            return "in the future"
        for unit, length in _AGE_UNITS:
            count = seconds // length
            if count:
                return f"{count} {unit}{'s' if count != 1 else ''} ago"
        return "just now"


class CommitHistory(Sequence):
    """Commits of a repository, newest first.

    Index 0 is the tip of the default branch. The history never changes after
    construction; a new fetch produces a new instance.
    """

    def __init__(self, commits: Iterable[Commit] = ()):
        self._commits: Tuple[Commit, ...] = tuple(commits)

    @overload
    def __getitem__(self, index: int) -> Commit: ...

    @overload
    def __getitem__(self, index: slice) -> "CommitHistory": ...

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return CommitHistory(self._commits[index])
        return self._commits[index]

    def __len__(self) -> int:
        return len(self._commits)

    def __iter__(self) -> Iterator[Commit]:
        return iter(self._commits)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CommitHistory):
            return self._commits == other._commits
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._commits)

    def __repr__(self) -> str:
        return f"CommitHistory({len(self._commits)} commits)"

    @property
    def tip(self) -> Optional[Commit]:
        """Newest commit, or None for an empty history."""
        return self._commits[0] if self._commits else None

    def clamp(self, index: int) -> Optional[int]:
        """Clamp ``index`` into the valid range; None when the history is empty."""
        if not self._commits:
            return None
        return max(0, min(index, len(self._commits) - 1))

    def index_of(self, commit_id: str) -> Optional[int]:
        """Find a commit by full hash or unique hash prefix."""
        if not commit_id:
            return None
        matches = [
            i for i, commit in enumerate(self._commits) if commit.id.startswith(commit_id)
        ]
        for i in matches:
            if self._commits[i].id == commit_id:
                return i
        if len(matches) == 1:
            return matches[0]
        return None

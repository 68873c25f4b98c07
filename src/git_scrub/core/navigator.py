"""Selected-position state for scrubbing through a history."""

import logging
import math
from pathlib import Path
from typing import Optional, Union

from git_scrub.core.coordinator import CheckoutCoordinator
from git_scrub.core.errors import ScrubError
from git_scrub.core.log_reader import CommitLogReader
from git_scrub.models.commit import Commit, CommitHistory

logger = logging.getLogger(__name__)


class HistoryNavigator:
    """Tracks which commit of a repository is selected and keeps the
    working tree in step with it.

    After :meth:`load` the tip is selected without checking anything out, so
    the working tree stays whatever it already was. Only a change of the
    selected index triggers a checkout.

    Not thread safe: callers must not overlap fetches or checkouts.
    """

    def __init__(
        self,
        repo_path: Union[str, Path],
        reader: CommitLogReader,
        coordinator: CheckoutCoordinator,
    ):
        self.repo_path = Path(repo_path)
        self.reader = reader
        self.coordinator = coordinator
        self.history = CommitHistory()
        self.selected_index: Optional[int] = None
        self.last_error: Optional[str] = None

    def load(self) -> CommitHistory:
        """Fetch the history, replacing any previous one, and select the tip.

        A failed fetch leaves an empty history behind.
        """
        try:
            history = self.reader.fetch_history(self.repo_path)
        except ScrubError as e:
            self.history = CommitHistory()
            self.selected_index = None
            self.last_error = str(e)
            raise

        self.history = history
        self.selected_index = 0 if history else None
        self.last_error = None
        return history

    @property
    def selected_commit(self) -> Optional[Commit]:
        if self.selected_index is None:
            return None
        return self.history[self.selected_index]

    @property
    def title(self) -> str:
        commit = self.selected_commit
        return f"Commit: {commit.message}" if commit else "Commits"

    def set_index(self, index: int) -> bool:
        """Select ``index`` (clamped) and check it out if it changed.

        Returns True when a checkout was performed. On failure the previous
        selection is kept and the error is re-raised.
        """
        target = self.history.clamp(index)
        if target is None or target == self.selected_index:
            return False

        try:
            ref = self.coordinator.reconcile(self.repo_path, self.history, target)
        except ScrubError as e:
            self.last_error = str(e)
            logger.warning("Checkout of index %d failed: %s", target, e)
            raise

        logger.debug("Selected index %d (%s)", target, ref)
        self.selected_index = target
        self.last_error = None
        return True

    def set_position(self, position: float) -> bool:
        """Select the commit under a continuous slider ``position``."""
        if not self.history or math.isnan(position):
            return False
        position = max(0.0, min(position, float(len(self.history) - 1)))
        return self.set_index(int(position))

    def step(self, delta: int) -> bool:
        """Move ``delta`` commits; positive is older, negative is newer."""
        if self.selected_index is None:
            return False
        return self.set_index(self.selected_index + delta)

    def select_commit(self, commit_id: str) -> bool:
        """Select a commit by hash or unique hash prefix."""
        index = self.history.index_of(commit_id)
        if index is None:
            logger.debug("No commit matches %r", commit_id)
            return False
        return self.set_index(index)

"""Checking out the commit that corresponds to a position in the history."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from git_scrub.core.errors import CheckoutError, CommandTimeout
from git_scrub.core.runner import CommandRunner, SubprocessRunner, git_command
from git_scrub.models.commit import CommitHistory
from git_scrub.models.settings import ScrubSettings

logger = logging.getLogger(__name__)


class CheckoutCoordinator:
    """Moves a working tree to a given index of its history.

    Index 0 goes back to the default branch so HEAD stays attached; every
    other index is checked out by hash, detaching HEAD. Each call runs a
    checkout; skipping unchanged indexes is left to the caller.
    """

    def __init__(
        self,
        settings: Optional[ScrubSettings] = None,
        runner: Optional[CommandRunner] = None,
    ):
        self.settings = settings or ScrubSettings()
        self.runner = runner or SubprocessRunner()

    def ref_for_index(self, history: CommitHistory, target_index: int) -> str:
        """Ref to check out for ``target_index`` (clamped into range)."""
        index = history.clamp(target_index)
        if index is None or index == 0:
            # Tip or empty history: follow the default branch
            return self.settings.default_branch
        return history[index].id

    def checkout_command(self, repo_path: Union[str, Path], ref: str) -> List[str]:
        return git_command(self.settings.git_executable, repo_path, "checkout", ref)

    def reconcile(
        self, repo_path: Union[str, Path], history: CommitHistory, target_index: int
    ) -> str:
        """Check out the commit at ``target_index`` and return the ref used.

        Raises:
            ExecutionError: git is missing or unrunnable.
            CheckoutError: git refused the checkout or timed out.
        """
        ref = self.ref_for_index(history, target_index)
        args = self.checkout_command(repo_path, ref)
        try:
            result = self.runner.run(args, timeout=self.settings.timeout)
        except CommandTimeout as e:
            raise CheckoutError(e.message, -1, e.command) from e

        if not result.ok:
            raise CheckoutError(result.error_text, result.returncode, result.args)

        logger.info("Checked out %s in %s", ref, repo_path)
        return ref

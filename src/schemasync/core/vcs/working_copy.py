"""
Working-copy controller.

Drives a `VersionControl` through the branch, commit and push sequences the
reconciliation engine needs. Any git failure propagates and aborts the run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from schemasync.core.errors import BranchCreateFailed
from schemasync.core.vcs.git import CommitIdentity, VersionControl

if TYPE_CHECKING:
    from schemasync.core.artifact.store import ArtifactStore

logger = logging.getLogger(__name__)


class WorkingCopy:
    """
    Thin state machine over a local checkout.

    Example:
        >>> wc = WorkingCopy(GitCli(Path(".")))
        >>> wc.create_branch("update-schema-01-31_12-00")
        >>> wc.commit_all("schema.graphqls", identity, "update schema")
        >>> wc.push_branch("origin", "update-schema-01-31_12-00", force=True)
    """

    def __init__(self, vcs: VersionControl, identity: CommitIdentity | None = None) -> None:
        """
        Initialize WorkingCopy.

        Args:
            vcs: Version-control capability for the checkout
            identity: Identity used for commits that git creates implicitly (stash)
        """
        self.vcs = vcs
        self.identity = identity

    def create_branch(self, name: str) -> None:
        """
        Create `name` from the current HEAD and switch to it.

        Raises:
            BranchCreateFailed: If a local branch with that name already exists
        """
        if self.vcs.local_branch_exists(name):
            raise BranchCreateFailed(
                ["git", "checkout", "-b", name],
                128,
                f"fatal: a branch named '{name}' already exists",
            )
        logger.info("Creating branch %s", name)
        self.vcs.create_branch(name)

    def commit_all(self, path: str, identity: CommitIdentity, message: str) -> None:
        """Stage `path` and commit every tracked change as `identity`."""
        self.vcs.add(path)
        self.vcs.commit_all(message, identity)

    def push_branch(self, remote: str, name: str, force: bool = False) -> None:
        """Push `name` to `remote`, overwriting stale history when `force` is set."""
        logger.info("Pushing %s to %s%s", name, remote, " (force)" if force else "")
        self.vcs.push(remote, name, force=force)

    def switch_to_existing_branch(
        self, remote: str, name: str, artifact: ArtifactStore
    ) -> None:
        """
        Move the working copy onto the remote branch `name`, keeping the new artifact.

        The freshly fetched artifact is held aside, local modifications are
        stashed, untracked files that could block the checkout are removed,
        and the branch is shallow-fetched. The local branch is then reset to
        the fetched tip, which may be ahead of a local branch left by an
        earlier run. The held artifact is then written back. The stash
        belongs to the previous branch and is never popped here.
        """
        held = artifact.hold()
        self.vcs.stash(self.identity)
        # a newly introduced schema file is untracked and is not stashed
        self.vcs.clean_untracked()
        self.vcs.fetch_branch(remote, name, depth=1)
        self.vcs.checkout_fetched(name)
        artifact.restore(held)
        logger.info("Switched to existing branch %s", name)


__all__ = ["WorkingCopy"]

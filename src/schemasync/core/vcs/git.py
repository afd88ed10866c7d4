"""
Git access for schemasync.

`VersionControl` is the narrow capability the reconciliation engine needs
from a local checkout. `GitCli` implements it by shelling out to `git`;
tests can substitute any object with the same methods.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field

from schemasync.core.errors import VersionControlCommandFailed

logger = logging.getLogger(__name__)


class CommitIdentity(BaseModel):
    """
    Identity used for automated commits.

    `user_name`/`user_email` are passed as one-off `-c` config so that the
    commit works on checkouts without a configured git identity, while
    `author` makes the commit attributable to the bot.
    """

    user_name: str = Field(..., description="Committer name (user.name)")
    user_email: str = Field(..., description="Committer email (user.email)")
    author: str = Field(..., description="Commit author, e.g. 'Bot <bot@example.com>'")

    def config_args(self) -> list[str]:
        """Return the `-c` arguments that set this identity for one command."""
        return ["-c", f"user.name={self.user_name}", "-c", f"user.email={self.user_email}"]


class VersionControl(Protocol):
    """Capability interface over a local git working copy."""

    def is_clean(self) -> bool:
        """Return True when there is nothing to commit and no untracked files."""
        ...

    def create_branch(self, name: str) -> None:
        """Create `name` from HEAD and switch to it."""
        ...

    def checkout_fetched(self, name: str) -> None:
        """Point local branch `name` at the last fetched commit and switch to it."""
        ...

    def add(self, path: str) -> None:
        """Stage `path`."""
        ...

    def commit_all(self, message: str, identity: CommitIdentity) -> None:
        """Commit all tracked changes."""
        ...

    def push(self, remote: str, branch: str, force: bool = False) -> None:
        """Push `branch` to `remote`."""
        ...

    def fetch_branch(self, remote: str, branch: str, depth: int = 1) -> None:
        """Shallow-fetch a single branch from `remote`."""
        ...

    def stash(self, identity: CommitIdentity | None = None) -> None:
        """Stash uncommitted changes to tracked files."""
        ...

    def clean_untracked(self) -> None:
        """Remove untracked files and directories."""
        ...

    def local_branch_exists(self, name: str) -> bool:
        """Return True if a local branch called `name` exists."""
        ...


class GitCli:
    """
    `VersionControl` implementation backed by the `git` executable.

    Every command runs in `project_dir`. A non-zero exit status raises
    `VersionControlCommandFailed` with the command and its captured output.

    Example:
        >>> git = GitCli(Path("."))
        >>> if not git.is_clean():
        ...     git.create_branch("update-schema-01-31_12-00")
    """

    def __init__(self, project_dir: Path | None = None, timeout: float | None = None) -> None:
        """
        Initialize GitCli.

        Args:
            project_dir: Root of the git working copy (defaults to cwd)
            timeout: Optional per-command timeout in seconds
        """
        self.project_dir = (project_dir or Path.cwd()).resolve()
        self.timeout = timeout

    def run(self, *args: str) -> str:
        """
        Run a git command and return its stdout.

        Args:
            *args: Git arguments (without the "git" prefix)

        Returns:
            Command stdout

        Raises:
            VersionControlCommandFailed: If git exits non-zero or cannot be run
        """
        cmd = ["git", *args]
        logger.debug("Running git command: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                cwd=self.project_dir,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise VersionControlCommandFailed(cmd, -1, f"timed out after {e.timeout}s") from e
        except OSError as e:
            raise VersionControlCommandFailed(cmd, 127, str(e)) from e

        if result.returncode != 0:
            output = "\n".join(s for s in (result.stdout.strip(), result.stderr.strip()) if s)
            raise VersionControlCommandFailed(cmd, result.returncode, output)

        return result.stdout

    def is_clean(self) -> bool:
        return not self.run("status", "--porcelain").strip()

    def create_branch(self, name: str) -> None:
        self.run("checkout", "-b", name)

    def checkout_fetched(self, name: str) -> None:
        # resets a stale local branch to the fetched remote tip
        self.run("checkout", "-B", name, "FETCH_HEAD")

    def add(self, path: str) -> None:
        self.run("add", path)

    def commit_all(self, message: str, identity: CommitIdentity) -> None:
        self.run(
            *identity.config_args(),
            "commit",
            "-a",
            "-m",
            message,
            "--author",
            identity.author,
        )

    def push(self, remote: str, branch: str, force: bool = False) -> None:
        args = ["push", remote, branch]
        if force:
            args.append("--force")
        self.run(*args)

    def fetch_branch(self, remote: str, branch: str, depth: int = 1) -> None:
        self.run("fetch", remote, "--depth", str(depth), branch)

    def stash(self, identity: CommitIdentity | None = None) -> None:
        # stash creates commits, so it needs an identity on bare CI checkouts
        prefix = identity.config_args() if identity else []
        self.run(*prefix, "stash")

    def clean_untracked(self) -> None:
        self.run("clean", "-fd")

    def local_branch_exists(self, name: str) -> bool:
        try:
            self.run("show-ref", "--verify", "--quiet", f"refs/heads/{name}")
            return True
        except VersionControlCommandFailed:
            return False


__all__ = ["CommitIdentity", "GitCli", "VersionControl"]

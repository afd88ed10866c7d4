"""
Pytest configuration and shared fixtures.

Provides temporary git repositories (a bare `file://` remote plus working
clones) and collaborator fakes, so that the reconciliation engine can be run
end to end without network access.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from helpers import SCHEMA_V1, FakeGitHub, configure_identity, git, make_config

from schemasync.core.config.models import SyncConfig

# ==============================================================================
# Git Fixtures
# ==============================================================================


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with an initial commit on main."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "--initial-branch=main")
    configure_identity(repo)

    (repo / "README.md").write_text("# Test Repo\n")
    (repo / "schema.graphqls").write_text(SCHEMA_V1)
    git(repo, "add", "README.md", "schema.graphqls")
    git(repo, "commit", "-m", "Initial commit")
    return repo


@pytest.fixture
def remote_repo(tmp_path: Path, git_repo: Path) -> Path:
    """Bare repository standing in for the GitHub remote."""
    bare = tmp_path / "remote.git"
    git(tmp_path, "clone", "--bare", str(git_repo), str(bare))
    return bare


@pytest.fixture
def clone(tmp_path: Path, remote_repo: Path) -> Callable[[], Path]:
    """
    Factory for fresh working copies of the remote, like a CI checkout.

    The remote is cloned through a file:// URL so shallow fetches behave as
    they do against a real server.
    """
    counter = {"n": 0}

    def make() -> Path:
        counter["n"] += 1
        dest = tmp_path / f"work{counter['n']}"
        git(tmp_path, "clone", f"file://{remote_repo}", str(dest))
        configure_identity(dest)
        return dest

    return make


# ==============================================================================
# Collaborator Fixtures
# ==============================================================================


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def sync_config() -> SyncConfig:
    return make_config()

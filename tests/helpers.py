"""
Test helpers shared across the suite.

Git helpers for inspecting temporary repositories, and in-memory fakes for
the schema downloader and GitHub.
"""

import subprocess
from pathlib import Path

from schemasync.core.artifact.store import ArtifactStore
from schemasync.core.config.models import SyncConfig
from schemasync.core.fetch.downloader import DownloadRequest
from schemasync.core.github.models import (
    CreatedPullRequest,
    PullRequestState,
    RepoInfo,
    RepositoryDetails,
)
from schemasync.core.reconcile.engine import ReconciliationEngine
from schemasync.core.vcs.git import CommitIdentity, GitCli
from schemasync.core.vcs.working_copy import WorkingCopy

SCHEMA_V1 = "type Query {\n  hello: String\n}\n"
SCHEMA_V2 = "type Query {\n  hello: String\n  world: String\n}\n"
SCHEMA_V3 = "type Query {\n  hello: String\n  world: String\n  answer: Int\n}\n"
SCHEMA_V4 = "type Query {\n  hello: String\n  world: String\n  answer: Int\n  version: String\n}\n"

SYNC_BRANCH = "update-schema-03-07_09-05"

BOT = CommitIdentity(
    user_name="schema-bot",
    user_email="schema-bot@example.com",
    author="Schema Bot <schema-bot@example.com>",
)


def git(cwd: Path, *args: str) -> str:
    """Run a git command in `cwd` and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def configure_identity(repo: Path) -> None:
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "user.name", "Test User")


def remote_file(remote: Path, ref: str, path: str = "schema.graphqls") -> str:
    """Content of `path` at `ref` in the bare remote."""
    return git(remote, "show", f"{ref}:{path}") + "\n"


def remote_branches(remote: Path) -> list[str]:
    output = git(remote, "for-each-ref", "--format=%(refname:short)", "refs/heads")
    return [line for line in output.splitlines() if line]


class RecordingGit(GitCli):
    """GitCli that remembers every command it ran."""

    def __init__(self, project_dir: Path) -> None:
        super().__init__(project_dir)
        self.calls: list[tuple[str, ...]] = []

    def run(self, *args: str) -> str:
        self.calls.append(args)
        return super().run(*args)

    def pushes(self) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] == "push"]

    def commits(self) -> list[tuple[str, ...]]:
        return [call for call in self.calls if "commit" in call]


class FakeDownloader:
    """Writes a fixed schema instead of downloading one."""

    def __init__(self, content: str) -> None:
        self.content = content
        self.requests: list[DownloadRequest] = []

    def download(self, request: DownloadRequest) -> Path:
        self.requests.append(request)
        request.output_path.parent.mkdir(parents=True, exist_ok=True)
        request.output_path.write_text(self.content)
        return request.output_path


class FakeGitHub:
    """In-memory GitHub serving as both proposal locator and publisher."""

    def __init__(self, default_branch: str = "main", repository_id: str = "R_kgDOtest") -> None:
        self.default_branch = default_branch
        self.repository_id = repository_id
        self.pull_requests: list[dict[str, object]] = []
        self.lookups: list[tuple[str, str, str]] = []
        self.created: list[dict[str, object]] = []

    def add_pull_request(self, head: str, state: PullRequestState, base: str = "main") -> None:
        self.pull_requests.append({"head": head, "base": base, "state": state})

    def lookup(self, owner: str, name: str, branch: str) -> RepositoryDetails:
        self.lookups.append((owner, name, branch))
        return RepositoryDetails(
            id=self.repository_id,
            default_branch=self.default_branch,
            has_open_proposal=any(
                pr["head"] == branch and pr["state"] == PullRequestState.OPEN
                for pr in self.pull_requests
            ),
        )

    def create_pull_request(
        self, repository_id: str, base: str, head: str, title: str, body: str
    ) -> CreatedPullRequest:
        number = len(self.pull_requests) + 1
        pr = {
            "repository_id": repository_id,
            "base": base,
            "head": head,
            "title": title,
            "body": body,
            "state": PullRequestState.OPEN,
        }
        self.pull_requests.append(pr)
        self.created.append(pr)
        return CreatedPullRequest(number=number, url=f"https://github.com/user/repo/pull/{number}")


def make_config(**overrides: object) -> SyncConfig:
    """Build a SyncConfig for tests; keyword arguments override fields."""
    values: dict[str, object] = {
        "artifact_path": Path("schema.graphqls"),
        "download": DownloadRequest(
            endpoint="https://example.com/graphql",
            output_path=Path("schema.graphqls"),
        ),
        "repository": RepoInfo(owner="user", repo="repo"),
        "branch": SYNC_BRANCH,
        "identity": BOT,
        "commit_message": "update schema",
        "pr_title": "Update schema",
        "pr_body": "Automated schema update",
        "token": "ghp_test",
    }
    values.update(overrides)
    return SyncConfig(**values)


def build_engine(
    work_dir: Path,
    config: SyncConfig,
    github: FakeGitHub,
    content: str,
) -> tuple[ReconciliationEngine, RecordingGit]:
    """Wire a ReconciliationEngine against a real working copy and fakes."""
    vcs = RecordingGit(work_dir)
    store = ArtifactStore(work_dir / config.artifact_path, vcs, FakeDownloader(content))
    working_copy = WorkingCopy(vcs, identity=config.identity)
    engine = ReconciliationEngine(config, store, working_copy, github, github)
    return engine, vcs

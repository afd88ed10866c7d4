"""
Configuration data model for schemasync.

`SyncConfig` is assembled once at process start and handed to the
reconciliation engine, which reads nothing else from the environment.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from schemasync.core.fetch.downloader import DownloadRequest
from schemasync.core.github.client import DEFAULT_API_URL
from schemasync.core.github.models import RepoInfo
from schemasync.core.vcs.git import CommitIdentity

DEFAULT_REMOTE = "origin"
DEFAULT_COMMIT_USER_NAME = "github-actions[bot]"
DEFAULT_COMMIT_USER_EMAIL = "41898282+github-actions[bot]@users.noreply.github.com"
DEFAULT_COMMIT_AUTHOR = f"{DEFAULT_COMMIT_USER_NAME} <{DEFAULT_COMMIT_USER_EMAIL}>"
DEFAULT_COMMIT_MESSAGE = "update schema"
DEFAULT_PR_TITLE = "Update GraphQL schema"
DEFAULT_PR_BODY = "This pull request was opened automatically because the schema changed."


class SyncConfig(BaseModel):
    """
    Everything a reconciliation run needs.

    Example:
        >>> config = SyncConfig(
        ...     artifact_path=Path("schema.graphqls"),
        ...     download=DownloadRequest(endpoint="https://example.com/graphql",
        ...                              output_path=Path("schema.graphqls")),
        ...     repository=RepoInfo(owner="user", repo="repo"),
        ...     branch="update-schema-03-07_09-05",
        ...     identity=CommitIdentity(user_name="bot", user_email="bot@example.com",
        ...                             author="bot <bot@example.com>"),
        ...     token="ghp_...",
        ... )
    """

    model_config = ConfigDict(frozen=True)

    artifact_path: Path = Field(..., description="Schema file, relative to the working copy")
    download: DownloadRequest = Field(..., description="How to fetch the schema")
    repository: RepoInfo = Field(..., description="GitHub repository to open pull requests on")
    branch: str = Field(..., min_length=1, description="Sync branch name")
    base_branch: str | None = Field(
        default=None, description="Pull request base; repository default branch when unset"
    )
    remote: str = Field(default=DEFAULT_REMOTE, description="Git remote to push to")
    identity: CommitIdentity = Field(..., description="Identity for automated commits")
    commit_message: str = Field(default=DEFAULT_COMMIT_MESSAGE)
    pr_title: str = Field(default=DEFAULT_PR_TITLE)
    pr_body: str = Field(default=DEFAULT_PR_BODY)
    token: str = Field(..., repr=False, description="GitHub token")
    github_api_url: str = Field(default=DEFAULT_API_URL)

"""
GitHub data models for schemasync.

Defines Pydantic models for repository identity, pull request state and the
typed responses of the two GraphQL operations schemasync performs.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class RepoInfo(BaseModel):
    """
    GitHub repository identity.

    Example:
        >>> RepoInfo.from_slug("user/repo")
        RepoInfo(owner='user', repo='repo')
    """

    owner: str = Field(..., description="Repository owner (user or organization)")
    repo: str = Field(..., description="Repository name")

    @computed_field
    @property
    def full_name(self) -> str:
        """Full repository name (owner/repo)."""
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_slug(cls, slug: str) -> RepoInfo | None:
        """
        Parse an `owner/name` slug, as found in `GITHUB_REPOSITORY`.

        Returns:
            RepoInfo or None if the slug is not of that form
        """
        parts = slug.strip().split("/")
        if len(parts) != 2 or not all(parts):
            return None
        return cls(owner=parts[0], repo=parts[1])


class PullRequestState(str, Enum):
    """State of a GitHub pull request."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    MERGED = "MERGED"


class RepositoryDetails(BaseModel):
    """What the engine needs to know about the remote repository."""

    id: str = Field(..., description="GraphQL node id of the repository")
    default_branch: str = Field(..., description="Name of the default branch")
    has_open_proposal: bool = Field(
        ..., description="True if an open pull request has the sync branch as head"
    )


class CreatedPullRequest(BaseModel):
    """A pull request returned by the create mutation."""

    number: int | None = None
    url: str | None = None


# GraphQL response shapes. Field names follow the GitHub schema.


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PullRequestNode(_Node):
    state: PullRequestState


class PullRequestConnection(_Node):
    nodes: list[PullRequestNode]


class BranchRef(_Node):
    name: str


class RepositoryNode(_Node):
    id: str
    default_branch_ref: BranchRef = Field(alias="defaultBranchRef")
    pull_requests: PullRequestConnection = Field(alias="pullRequests")


class RepositoryLookupData(_Node):
    repository: RepositoryNode


class RepositoryLookupResponse(_Node):
    """Response of the repository lookup query."""

    data: RepositoryLookupData

    def to_details(self) -> RepositoryDetails:
        repository = self.data.repository
        return RepositoryDetails(
            id=repository.id,
            default_branch=repository.default_branch_ref.name,
            has_open_proposal=any(
                node.state == PullRequestState.OPEN for node in repository.pull_requests.nodes
            ),
        )


class CreatePullRequestPayload(_Node):
    client_mutation_id: str | None = Field(default=None, alias="clientMutationId")
    pull_request: CreatedPullRequest | None = Field(default=None, alias="pullRequest")


class CreatePullRequestData(_Node):
    create_pull_request: CreatePullRequestPayload = Field(alias="createPullRequest")


class CreatePullRequestResponse(_Node):
    """Response of the createPullRequest mutation."""

    data: CreatePullRequestData

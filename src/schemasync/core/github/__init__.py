"""
GitHub integration for schemasync.

Locates the repository and any open pull request for the sync branch, and
opens new pull requests, through the GitHub GraphQL API.
"""

from schemasync.core.github.client import DEFAULT_API_URL, GitHubClient
from schemasync.core.github.models import (
    CreatedPullRequest,
    PullRequestState,
    RepoInfo,
    RepositoryDetails,
)

__all__ = [
    "CreatedPullRequest",
    "DEFAULT_API_URL",
    "GitHubClient",
    "PullRequestState",
    "RepoInfo",
    "RepositoryDetails",
]

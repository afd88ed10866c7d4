"""
GitHub GraphQL client for schemasync.

Implements the two remote operations the reconciliation engine needs:
locating the repository (and any open pull request for the sync branch)
and opening a new pull request.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from schemasync.core.errors import RemoteMutationFailed, RemoteQueryFailed
from schemasync.core.github.models import (
    CreatedPullRequest,
    CreatePullRequestResponse,
    RepositoryDetails,
    RepositoryLookupResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com/graphql"

REPOSITORY_QUERY = """
query RepositoryDetails($owner: String!, $name: String!, $headRefName: String!) {
  repository(owner: $owner, name: $name) {
    id
    defaultBranchRef {
      id
      name
    }
    pullRequests(first: 100, headRefName: $headRefName) {
      nodes {
        state
      }
    }
  }
}
"""

CREATE_PULL_REQUEST_MUTATION = """
mutation CreatePullRequest(
  $repositoryId: ID!, $baseRefName: String!, $headRefName: String!,
  $title: String!, $body: String!
) {
  createPullRequest(input: {
    repositoryId: $repositoryId, baseRefName: $baseRefName, headRefName: $headRefName,
    title: $title, body: $body
  }) {
    clientMutationId
    pullRequest {
      number
      url
    }
  }
}
"""


class GitHubClient:
    """
    Client for the GitHub GraphQL API.

    Serves as both the proposal locator and the proposal publisher of the
    reconciliation engine.

    Example:
        >>> client = GitHubClient(token=os.environ["GITHUB_TOKEN"])
        >>> details = client.lookup("user", "repo", "update-schema")
        >>> if not details.has_open_proposal:
        ...     client.create_pull_request(details.id, "main", "update-schema", "t", "b")
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        http_client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize GitHubClient.

        Args:
            token: Bearer token used for every request
            api_url: GraphQL endpoint
            http_client: Client to use instead of a private one (tests)
            timeout: Request timeout in seconds
        """
        self.token = token
        self.api_url = api_url
        self._http_client = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._http_client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def lookup(self, owner: str, name: str, branch: str) -> RepositoryDetails:
        """
        Fetch repository id, default branch and open pull request status.

        Args:
            owner: Repository owner
            name: Repository name
            branch: Head branch to look for pull requests on

        Returns:
            RepositoryDetails

        Raises:
            RemoteQueryFailed: On HTTP, GraphQL or response shape errors
        """
        status, body = self._graphql(
            REPOSITORY_QUERY,
            {"owner": owner, "name": name, "headRefName": branch},
            RemoteQueryFailed,
        )
        try:
            details = RepositoryLookupResponse.model_validate(body).to_details()
        except ValidationError as e:
            raise RemoteQueryFailed(
                f"Unexpected repository response: {e}", status=status, body=str(body)
            ) from e

        logger.debug(
            "Repository %s/%s: default=%s open_pr=%s",
            owner,
            name,
            details.default_branch,
            details.has_open_proposal,
        )
        return details

    def create_pull_request(
        self,
        repository_id: str,
        base: str,
        head: str,
        title: str,
        body: str,
    ) -> CreatedPullRequest:
        """
        Open a pull request from `head` into `base`.

        Raises:
            RemoteMutationFailed: On HTTP, GraphQL or response shape errors
        """
        status, response = self._graphql(
            CREATE_PULL_REQUEST_MUTATION,
            {
                "repositoryId": repository_id,
                "baseRefName": base,
                "headRefName": head,
                "title": title,
                "body": body,
            },
            RemoteMutationFailed,
        )
        try:
            payload = CreatePullRequestResponse.model_validate(response).data.create_pull_request
        except ValidationError as e:
            raise RemoteMutationFailed(
                f"Unexpected createPullRequest response: {e}", status=status, body=str(response)
            ) from e

        return payload.pull_request or CreatedPullRequest()

    def _graphql(
        self,
        operation: str,
        variables: dict[str, Any],
        error_cls: type[RemoteQueryFailed] | type[RemoteMutationFailed],
    ) -> tuple[int, dict[str, Any]]:
        try:
            response = self._http_client.post(
                self.api_url,
                json={"query": operation, "variables": variables},
                headers={"Authorization": f"bearer {self.token}"},
            )
        except httpx.HTTPError as e:
            raise error_cls(f"Failed to reach {self.api_url}: {e}") from e

        if not response.is_success:
            raise error_cls(
                "GitHub API request failed", status=response.status_code, body=response.text
            )

        try:
            body = response.json()
        except ValueError as e:
            raise error_cls(
                "GitHub API returned invalid JSON", status=response.status_code, body=response.text
            ) from e

        if not isinstance(body, dict):
            raise error_cls(
                "Unexpected GitHub API response", status=response.status_code, body=response.text
            )
        if body.get("errors"):
            raise error_cls(
                "GitHub API returned errors", status=response.status_code, body=response.text
            )
        return response.status_code, body


__all__ = ["DEFAULT_API_URL", "GitHubClient"]

"""
GraphQL schema downloader.

Downloads a schema either from a live endpoint (via introspection) or from
the Apollo schema registry, and writes it to a file. The reconciliation
engine treats this as an opaque step: the only contract is that the output
file is overwritten on success and `FetchFailed` is raised otherwise.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from graphql import (
    GraphQLError,
    build_ast_schema,
    build_client_schema,
    get_introspection_query,
    introspection_from_schema,
    parse,
    print_schema,
)
from pydantic import BaseModel, Field

from schemasync.core.errors import FetchFailed

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://graphql.api.apollographql.com/api/graphql"
DEFAULT_GRAPH_VARIANT = "current"

REGISTRY_QUERY = """
query DownloadSchema($graphID: ID!, $variant: String!) {
  service(id: $graphID) {
    variant(name: $variant) {
      latestPublication {
        schema {
          document
        }
      }
    }
  }
}
"""


class DownloadRequest(BaseModel):
    """Parameters for a single schema download."""

    endpoint: str | None = Field(default=None, description="GraphQL endpoint to introspect")
    graph: str | None = Field(default=None, description="Apollo registry graph id")
    key: str | None = Field(default=None, description="Apollo registry API key")
    graph_variant: str = Field(default=DEFAULT_GRAPH_VARIANT, description="Registry variant")
    registry_url: str = Field(default=DEFAULT_REGISTRY_URL, description="Registry URL")
    output_path: Path = Field(..., description="File the schema is written to")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra HTTP headers")
    insecure: bool = Field(default=False, description="Skip TLS certificate verification")


def _introspection_json(sdl: str) -> str:
    """Render an SDL document as the introspection JSON an endpoint would return."""
    try:
        schema = build_ast_schema(parse(sdl), assume_valid_sdl=True)
    except (GraphQLError, TypeError) as e:
        raise FetchFailed(f"Registry returned an invalid schema document: {e}") from e
    return json.dumps(introspection_from_schema(schema), indent=2)


class SchemaDownloader:
    """
    Download GraphQL schemas with httpx.

    Example:
        >>> downloader = SchemaDownloader()
        >>> downloader.download(
        ...     DownloadRequest(endpoint="https://example.com/graphql",
        ...                     output_path=Path("schema.graphqls"))
        ... )
    """

    def __init__(self, http_client: httpx.Client | None = None, timeout: float = 30.0) -> None:
        """
        Initialize SchemaDownloader.

        Args:
            http_client: Client to use instead of a per-request one (tests)
            timeout: Request timeout in seconds
        """
        self._http_client = http_client
        self.timeout = timeout

    def download(self, request: DownloadRequest) -> Path:
        """
        Download the schema described by `request` into `request.output_path`.

        Returns:
            The output path

        Raises:
            FetchFailed: On any HTTP, GraphQL or IO failure
        """
        if request.graph:
            document = self._download_from_registry(request)
        elif request.endpoint:
            document = self._download_from_endpoint(request, request.endpoint)
        else:
            raise FetchFailed("One of 'endpoint' or 'graph' is required to download a schema")

        try:
            request.output_path.parent.mkdir(parents=True, exist_ok=True)
            request.output_path.write_text(document)
        except OSError as e:
            raise FetchFailed(f"Failed to write schema to {request.output_path}: {e}") from e

        logger.info("Wrote schema to %s", request.output_path)
        return request.output_path

    def _download_from_registry(self, request: DownloadRequest) -> str:
        if not request.key:
            raise FetchFailed("'key' is required to download a schema from the registry")

        headers = {
            **request.headers,
            "x-api-key": request.key,
            "apollographql-client-name": "schemasync",
        }
        data = self._post(
            request,
            request.registry_url,
            {
                "query": REGISTRY_QUERY,
                "variables": {"graphID": request.graph, "variant": request.graph_variant},
            },
            headers,
        )

        try:
            variant = data["service"]["variant"]
            document = variant["latestPublication"]["schema"]["document"]
        except (KeyError, TypeError) as e:
            raise FetchFailed(
                f"Cannot find schema for {request.graph}@{request.graph_variant}: "
                f"unexpected registry response {json.dumps(data)}"
            ) from e

        if not isinstance(document, str):
            raise FetchFailed(f"Registry returned no schema document for {request.graph}")

        if request.output_path.suffix == ".json":
            return _introspection_json(document)
        return document

    def _download_from_endpoint(self, request: DownloadRequest, endpoint: str) -> str:
        data = self._post(
            request,
            endpoint,
            {"query": get_introspection_query(), "operationName": "IntrospectionQuery"},
            dict(request.headers),
        )

        if request.output_path.suffix == ".json":
            return json.dumps(data, indent=2)

        try:
            schema = build_client_schema(data)
        except (TypeError, ValueError) as e:
            raise FetchFailed(f"Endpoint returned an invalid introspection result: {e}") from e
        return print_schema(schema)

    def _post(
        self,
        request: DownloadRequest,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str],
    ) -> dict[str, Any]:
        logger.debug("POST %s", url)
        try:
            if self._http_client is not None:
                response = self._http_client.post(url, json=payload, headers=headers)
            else:
                with httpx.Client(verify=not request.insecure, timeout=self.timeout) as client:
                    response = client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise FetchFailed(f"Failed to reach {url}: {e}") from e

        if not response.is_success:
            raise FetchFailed(
                f"Cannot download schema from {url}: HTTP {response.status_code}\n{response.text}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise FetchFailed(f"Response from {url} is not JSON: {response.text}") from e

        if not isinstance(body, dict):
            raise FetchFailed(f"Unexpected response from {url}: {response.text}")
        if body.get("errors"):
            raise FetchFailed(f"GraphQL errors from {url}: {json.dumps(body['errors'])}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise FetchFailed(f"Response from {url} has no data: {response.text}")
        return data


__all__ = [
    "DEFAULT_GRAPH_VARIANT",
    "DEFAULT_REGISTRY_URL",
    "DownloadRequest",
    "SchemaDownloader",
]

"""
Configuration loading.

Inputs arrive as a flat mapping of input names to strings, matching the
GitHub Action convention where each input `foo` is exposed to the process
as `INPUT_FOO` (the CLI options read those variables). Blank values count
as unset.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from schemasync.core.errors import ConfigurationMissing, MalformedHeaders
from schemasync.core.fetch.downloader import (
    DEFAULT_GRAPH_VARIANT,
    DEFAULT_REGISTRY_URL,
    DownloadRequest,
)
from schemasync.core.github.client import DEFAULT_API_URL
from schemasync.core.github.models import RepoInfo
from schemasync.core.reconcile.naming import timestamp_branch_name
from schemasync.core.vcs.git import CommitIdentity

from .models import (
    DEFAULT_COMMIT_AUTHOR,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_COMMIT_USER_EMAIL,
    DEFAULT_COMMIT_USER_NAME,
    DEFAULT_PR_BODY,
    DEFAULT_PR_TITLE,
    DEFAULT_REMOTE,
    SyncConfig,
)

TRUE_VALUES = {"true", "1", "yes", "on"}


def parse_headers(raw: str | None) -> dict[str, str]:
    """
    Parse the headers input.

    Args:
        raw: JSON object of header name to value, or None/blank

    Returns:
        Header mapping (empty when unset)

    Raises:
        MalformedHeaders: If the input is not a JSON object of scalar values
    """
    if raw is None or not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedHeaders(raw) from e
    if not isinstance(data, dict):
        raise MalformedHeaders(raw)

    headers: dict[str, str] = {}
    for name, value in data.items():
        if isinstance(value, (dict, list)) or value is None:
            raise MalformedHeaders(raw)
        headers[str(name)] = value if isinstance(value, str) else json.dumps(value)
    return headers


def parse_bool(raw: str | bool | None) -> bool:
    if isinstance(raw, bool):
        return raw
    return raw is not None and raw.strip().lower() in TRUE_VALUES


def _optional(inputs: Mapping[str, Any], name: str) -> str | None:
    value = inputs.get(name)
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def _required(inputs: Mapping[str, Any], name: str) -> str:
    value = _optional(inputs, name)
    if value is None:
        raise ConfigurationMissing(name)
    return value


def load_download_request(inputs: Mapping[str, Any]) -> DownloadRequest:
    """
    Build the schema download parameters from raw inputs.

    Raises:
        ConfigurationMissing: If `schema` or both of `endpoint`/`graph` are missing
        MalformedHeaders: If `headers` is not a JSON object of strings
    """
    schema = Path(_required(inputs, "schema"))

    endpoint = _optional(inputs, "endpoint")
    graph = _optional(inputs, "graph")
    if endpoint is None and graph is None:
        raise ConfigurationMissing("endpoint")

    return DownloadRequest(
        endpoint=endpoint,
        graph=graph,
        key=_optional(inputs, "key"),
        graph_variant=_optional(inputs, "graph_variant") or DEFAULT_GRAPH_VARIANT,
        registry_url=_optional(inputs, "registry_url") or DEFAULT_REGISTRY_URL,
        output_path=schema,
        headers=parse_headers(_optional(inputs, "headers")),
        insecure=parse_bool(inputs.get("insecure")),
    )


def load_config(
    inputs: Mapping[str, Any],
    *,
    repository: str | None,
    now: datetime | None = None,
) -> SyncConfig:
    """
    Build a SyncConfig from raw inputs.

    Args:
        inputs: Input name to value (`endpoint`, `schema`, `token`, `branch`, ...); blank values are unset
        repository: `owner/name` slug (usually GITHUB_REPOSITORY)
        now: Time used to derive the branch name when `branch` is unset

    Returns:
        Validated SyncConfig

    Raises:
        ConfigurationMissing: If a required input is missing
        MalformedHeaders: If `headers` is not a JSON object of strings
    """
    if not repository or not repository.strip():
        raise ConfigurationMissing("repository")
    repo = RepoInfo.from_slug(repository)
    if repo is None:
        raise ConfigurationMissing("repository")

    download = load_download_request(inputs)
    token = _required(inputs, "token")

    branch = _optional(inputs, "branch")
    if branch is None:
        branch = timestamp_branch_name(now or datetime.now(timezone.utc))

    identity = CommitIdentity(
        user_name=_optional(inputs, "commit_user_name") or DEFAULT_COMMIT_USER_NAME,
        user_email=_optional(inputs, "commit_user_email") or DEFAULT_COMMIT_USER_EMAIL,
        author=_optional(inputs, "commit_author") or DEFAULT_COMMIT_AUTHOR,
    )

    return SyncConfig(
        artifact_path=download.output_path,
        download=download,
        repository=repo,
        branch=branch,
        base_branch=_optional(inputs, "base_branch"),
        remote=_optional(inputs, "remote") or DEFAULT_REMOTE,
        identity=identity,
        commit_message=_optional(inputs, "commit_message") or DEFAULT_COMMIT_MESSAGE,
        pr_title=_optional(inputs, "pr_title") or DEFAULT_PR_TITLE,
        pr_body=_optional(inputs, "pr_body") or DEFAULT_PR_BODY,
        token=token,
        github_api_url=_optional(inputs, "github_api_url") or DEFAULT_API_URL,
    )

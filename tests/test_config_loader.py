"""
Tests for configuration loading.

Tests cover:
- Header parsing
- Required and defaulted inputs
- Branch name derivation
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from schemasync.core.config.loader import (
    load_config,
    load_download_request,
    parse_bool,
    parse_headers,
)
from schemasync.core.config.models import (
    DEFAULT_COMMIT_AUTHOR,
    DEFAULT_COMMIT_USER_EMAIL,
    DEFAULT_COMMIT_USER_NAME,
    DEFAULT_PR_TITLE,
)
from schemasync.core.errors import ConfigurationMissing, MalformedHeaders

NOW = datetime(2024, 3, 7, 9, 5, 42, tzinfo=timezone.utc)


@pytest.fixture
def inputs() -> dict[str, str]:
    return {
        "endpoint": "https://api.example.com/graphql",
        "schema": "schema.graphqls",
        "token": "ghp_test",
    }


class TestParseHeaders:
    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_unset(self, raw):
        assert parse_headers(raw) == {}

    def test_object_of_strings(self):
        assert parse_headers('{"Authorization": "Bearer x", "X-Tenant": "a"}') == {
            "Authorization": "Bearer x",
            "X-Tenant": "a",
        }

    def test_scalars_become_strings(self):
        assert parse_headers('{"X-Count": 3, "X-Flag": true}') == {
            "X-Count": "3",
            "X-Flag": "true",
        }

    @pytest.mark.parametrize(
        "raw",
        ["not json", '["a"]', '"text"', '{"a": {"b": 1}}', '{"a": [1]}', '{"a": null}'],
    )
    def test_malformed(self, raw):
        with pytest.raises(MalformedHeaders):
            parse_headers(raw)


class TestParseBool:
    @pytest.mark.parametrize("raw", ["true", "TRUE", "1", "yes", " on ", True])
    def test_true(self, raw):
        assert parse_bool(raw) is True

    @pytest.mark.parametrize("raw", [None, "", "false", "0", "no", False])
    def test_false(self, raw):
        assert parse_bool(raw) is False


class TestLoadDownloadRequest:
    def test_endpoint(self, inputs):
        request = load_download_request(inputs)

        assert request.endpoint == "https://api.example.com/graphql"
        assert request.graph is None
        assert request.output_path == Path("schema.graphqls")
        assert request.graph_variant == "current"
        assert request.insecure is False

    def test_registry(self):
        request = load_download_request(
            {"graph": "g", "key": "k", "graph_variant": "staging", "schema": "s.graphqls"}
        )

        assert request.graph == "g"
        assert request.key == "k"
        assert request.graph_variant == "staging"

    def test_schema_required(self, inputs):
        del inputs["schema"]

        with pytest.raises(ConfigurationMissing) as exc_info:
            load_download_request(inputs)
        assert exc_info.value.key == "schema"

    def test_source_required(self):
        with pytest.raises(ConfigurationMissing) as exc_info:
            load_download_request({"schema": "s.graphqls", "endpoint": "  "})
        assert exc_info.value.key == "endpoint"

    def test_headers_and_insecure(self, inputs):
        inputs["headers"] = '{"Authorization": "Bearer x"}'
        inputs["insecure"] = "true"

        request = load_download_request(inputs)

        assert request.headers == {"Authorization": "Bearer x"}
        assert request.insecure is True


class TestLoadConfig:
    def test_defaults(self, inputs):
        config = load_config(inputs, repository="user/repo", now=NOW)

        assert config.repository.full_name == "user/repo"
        assert config.artifact_path == Path("schema.graphqls")
        assert config.branch == "update-schema-03-07_09-05"
        assert config.base_branch is None
        assert config.remote == "origin"
        assert config.identity.user_name == DEFAULT_COMMIT_USER_NAME
        assert config.identity.user_email == DEFAULT_COMMIT_USER_EMAIL
        assert config.identity.author == DEFAULT_COMMIT_AUTHOR
        assert config.commit_message == "update schema"
        assert config.pr_title == DEFAULT_PR_TITLE
        assert config.token == "ghp_test"
        assert config.github_api_url == "https://api.github.com/graphql"

    def test_overrides(self, inputs):
        inputs.update(
            branch="schema-sync",
            base_branch="develop",
            remote="upstream",
            commit_user_name="bot",
            commit_user_email="bot@example.com",
            commit_author="Bot <bot@example.com>",
            commit_message="chore: schema",
            pr_title="Schema",
            pr_body="Body",
            github_api_url="https://ghe.example.com/api/graphql",
        )

        config = load_config(inputs, repository="user/repo", now=NOW)

        assert config.branch == "schema-sync"
        assert config.base_branch == "develop"
        assert config.remote == "upstream"
        assert config.identity.author == "Bot <bot@example.com>"
        assert config.commit_message == "chore: schema"
        assert config.pr_title == "Schema"
        assert config.pr_body == "Body"
        assert config.github_api_url == "https://ghe.example.com/api/graphql"

    def test_blank_branch_uses_timestamp(self, inputs):
        inputs["branch"] = ""

        assert load_config(inputs, repository="user/repo", now=NOW).branch == (
            "update-schema-03-07_09-05"
        )

    def test_token_required(self, inputs):
        del inputs["token"]

        with pytest.raises(ConfigurationMissing) as exc_info:
            load_config(inputs, repository="user/repo", now=NOW)
        assert exc_info.value.key == "token"

    @pytest.mark.parametrize("repository", [None, "", "not-a-slug"])
    def test_repository_required(self, inputs, repository):
        with pytest.raises(ConfigurationMissing) as exc_info:
            load_config(inputs, repository=repository, now=NOW)
        assert exc_info.value.key == "repository"

    def test_token_hidden_from_repr(self, inputs):
        config = load_config(inputs, repository="user/repo", now=NOW)

        assert "ghp_test" not in repr(config)

    def test_config_is_frozen(self, inputs):
        config = load_config(inputs, repository="user/repo", now=NOW)

        with pytest.raises(Exception):
            config.branch = "other"  # type: ignore[misc]

"""
Shared CLI options.

Every option falls back to the matching `INPUT_<NAME>` environment variable,
which is how GitHub Actions passes inputs to a step.
"""

from typing import Annotated

import typer
from typer.models import OptionInfo


def _input(name: str, help: str) -> OptionInfo:
    return typer.Option(
        f"--{name.replace('_', '-')}",
        envvar=f"INPUT_{name.upper()}",
        help=help,
        show_envvar=True,
    )


Endpoint = Annotated[str | None, _input("endpoint", "GraphQL endpoint to introspect")]
Graph = Annotated[str | None, _input("graph", "Apollo registry graph id (instead of --endpoint)")]
Key = Annotated[str | None, _input("key", "Apollo registry API key")]
GraphVariant = Annotated[str | None, _input("graph_variant", "Registry variant [default: current]")]
RegistryUrl = Annotated[str | None, _input("registry_url", "Apollo registry URL")]
Schema = Annotated[str | None, _input("schema", "Path of the schema file in the repository")]
Headers = Annotated[
    str | None, _input("headers", 'Extra HTTP headers as JSON, e.g. {"Authorization": "..."}')
]
Insecure = Annotated[str | None, _input("insecure", "Skip TLS verification (true/false)")]
Branch = Annotated[
    str | None, _input("branch", "Sync branch [default: update-schema-MM-DD_hh-mm]")
]
BaseBranch = Annotated[
    str | None, _input("base_branch", "Pull request base [default: repository default branch]")
]
CommitUserName = Annotated[str | None, _input("commit_user_name", "Committer name")]
CommitUserEmail = Annotated[str | None, _input("commit_user_email", "Committer email")]
CommitAuthor = Annotated[str | None, _input("commit_author", "Commit author 'Name <email>'")]
CommitMessage = Annotated[str | None, _input("commit_message", "Commit message")]
PrTitle = Annotated[str | None, _input("pr_title", "Pull request title")]
PrBody = Annotated[str | None, _input("pr_body", "Pull request body")]
Remote = Annotated[str | None, _input("remote", "Git remote [default: origin]")]
Token = Annotated[str | None, _input("token", "GitHub token")]
GitHubApiUrl = Annotated[str | None, _input("github_api_url", "GitHub GraphQL endpoint")]
Repository = Annotated[
    str | None,
    typer.Option(
        "--repository",
        envvar="GITHUB_REPOSITORY",
        help="GitHub repository as owner/name",
        show_envvar=True,
    ),
]
ProjectDir = Annotated[
    str,
    typer.Option("--project-dir", "-C", help="Root of the git working copy"),
]

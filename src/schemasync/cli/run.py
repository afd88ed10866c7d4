"""
schemasync CLI - run command.

Fetches the schema and opens or updates the sync pull request.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.console import Console

from schemasync.cli import options
from schemasync.cli.errors import ExitCode, report_error
from schemasync.core.artifact.store import ArtifactStore
from schemasync.core.config.loader import load_config
from schemasync.core.errors import SchemaSyncError
from schemasync.core.fetch.downloader import SchemaDownloader
from schemasync.core.github.client import GitHubClient
from schemasync.core.reconcile.engine import ReconciliationEngine
from schemasync.core.reconcile.models import OutcomeKind
from schemasync.core.vcs.git import GitCli
from schemasync.core.vcs.working_copy import WorkingCopy

logger = logging.getLogger(__name__)

console = Console()


class RichReconcileCallback:
    """Rich Console-based implementation of ReconcileEventCallback."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def on_progress(self, message: str) -> None:
        self.console.print(f"[cyan]→[/cyan] {message}")

    def on_status(self, message: str, level: str = "info") -> None:
        if level == "success":
            self.console.print(f"[green]{message}[/green]")
        elif level == "warning":
            self.console.print(f"[yellow]{message}[/yellow]")
        elif level == "error":
            self.console.print(f"[red]{message}[/red]")
        else:
            self.console.print(message)


def run(
    endpoint: options.Endpoint = None,
    graph: options.Graph = None,
    key: options.Key = None,
    graph_variant: options.GraphVariant = None,
    registry_url: options.RegistryUrl = None,
    schema: options.Schema = None,
    headers: options.Headers = None,
    insecure: options.Insecure = None,
    branch: options.Branch = None,
    base_branch: options.BaseBranch = None,
    commit_user_name: options.CommitUserName = None,
    commit_user_email: options.CommitUserEmail = None,
    commit_author: options.CommitAuthor = None,
    commit_message: options.CommitMessage = None,
    pr_title: options.PrTitle = None,
    pr_body: options.PrBody = None,
    remote: options.Remote = None,
    token: options.Token = None,
    github_api_url: options.GitHubApiUrl = None,
    repository: options.Repository = None,
    project_dir: options.ProjectDir = ".",
) -> None:
    """
    Fetch the schema and open or update a pull request if it changed.

    Safe to run repeatedly: when the schema is unchanged nothing happens,
    and when a pull request for the sync branch is already open its branch
    is updated instead of opening another one.

    Examples:
        schemasync run --endpoint https://example.com/graphql \\
            --schema schema.graphqls --repository user/repo --token $GITHUB_TOKEN
        INPUT_SCHEMA=schema.graphqls INPUT_GRAPH=my-graph INPUT_KEY=... schemasync run
    """
    inputs = {
        "endpoint": endpoint,
        "graph": graph,
        "key": key,
        "graph_variant": graph_variant,
        "registry_url": registry_url,
        "schema": schema,
        "headers": headers,
        "insecure": insecure,
        "branch": branch,
        "base_branch": base_branch,
        "commit_user_name": commit_user_name,
        "commit_user_email": commit_user_email,
        "commit_author": commit_author,
        "commit_message": commit_message,
        "pr_title": pr_title,
        "pr_body": pr_body,
        "remote": remote,
        "token": token,
        "github_api_url": github_api_url,
    }

    try:
        config = load_config(inputs, repository=repository, now=datetime.now(timezone.utc))
        root = Path(project_dir)
        vcs = GitCli(root)
        store = ArtifactStore(root / config.artifact_path, vcs, SchemaDownloader())
        working_copy = WorkingCopy(vcs, identity=config.identity)

        with GitHubClient(config.token, api_url=config.github_api_url) as github:
            engine = ReconciliationEngine(
                config,
                store,
                working_copy,
                github,
                github,
                callback=RichReconcileCallback(console),
            )
            outcome = engine.run()
    except SchemaSyncError as e:
        logger.debug("Reconciliation failed", exc_info=True)
        raise typer.Exit(report_error(e))
    except KeyboardInterrupt:
        raise typer.Exit(ExitCode.SIGINT)

    if outcome.kind == OutcomeKind.NO_CHANGE:
        console.print("[blue]Done, nothing to do.[/blue]")
    else:
        console.print("[green]✓[/green] Done.")

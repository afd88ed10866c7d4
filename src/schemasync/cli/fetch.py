"""
schemasync CLI - fetch command.

Downloads the schema without touching git or GitHub.
"""

from __future__ import annotations

import typer
from rich.console import Console

from schemasync.cli import options
from schemasync.cli.errors import report_error
from schemasync.core.config.loader import load_download_request
from schemasync.core.errors import SchemaSyncError
from schemasync.core.fetch.downloader import SchemaDownloader

console = Console()


def fetch(
    endpoint: options.Endpoint = None,
    graph: options.Graph = None,
    key: options.Key = None,
    graph_variant: options.GraphVariant = None,
    registry_url: options.RegistryUrl = None,
    schema: options.Schema = None,
    headers: options.Headers = None,
    insecure: options.Insecure = None,
) -> None:
    """
    Download the schema to --schema and exit.

    Examples:
        schemasync fetch --endpoint https://example.com/graphql --schema schema.graphqls
        schemasync fetch --graph my-graph --key $APOLLO_KEY --schema schema.graphqls
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
    }
    try:
        request = load_download_request(inputs)
        path = SchemaDownloader().download(request)
    except SchemaSyncError as e:
        raise typer.Exit(report_error(e))

    console.print(f"[green]✓[/green] Schema written to {path}")

"""
schemasync CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer

from schemasync import __version__
from schemasync.cli import fetch, run
from schemasync.core.config.env import load_layered_env

app = typer.Typer(
    name="schemasync",
    help="Keep a GraphQL schema in sync with a repository through pull requests",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)


def configure_logging(debug: bool) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, log at DEBUG level (git commands, state transitions)
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"schemasync {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    schemasync - keep a GraphQL schema in sync through pull requests.

    Run it on a schedule: when the downloaded schema differs from the one in
    the repository, a pull request is opened (or its branch updated).
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    configure_logging(debug)
    ctx.obj = {"debug": debug}


app.command(name="run")(run.run)
app.command(name="fetch")(fetch.fetch)


def cli_main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "cli_main"]

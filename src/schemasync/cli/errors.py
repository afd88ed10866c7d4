"""
Standardized error handling and exit codes for the schemasync CLI.

Every failure is fatal: the CLI prints one error message (with the captured
git output or API response body) and exits non-zero.
"""

from enum import IntEnum

from rich.console import Console

from schemasync.core.errors import (
    ConfigurationMissing,
    FetchFailed,
    MalformedHeaders,
    RemoteMutationFailed,
    RemoteQueryFailed,
    SchemaSyncError,
    VersionControlCommandFailed,
)

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for schemasync."""

    SUCCESS = 0
    """Reconciliation finished (no change, created or updated)."""

    GENERAL_ERROR = 1
    """A fetch, git or GitHub step failed."""

    USER_ERROR = 2
    """Missing or malformed configuration (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional detail, printed verbatim (command output, response body)
        solution: Optional action to fix it
    """
    console.print(f"[red]Error:[/red] {problem}", markup=True, highlight=False)

    if reason:
        console.print(reason, markup=False, highlight=False, style="dim")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def report_error(error: SchemaSyncError) -> ExitCode:
    """
    Print `error` and return the exit code it maps to.

    Args:
        error: The fatal error that aborted the run

    Returns:
        USER_ERROR for configuration problems, GENERAL_ERROR otherwise
    """
    if isinstance(error, ConfigurationMissing):
        print_error(
            f"Missing configuration: {error.key}",
            solution=f"--{error.key.replace('_', '-')} or INPUT_{error.key.upper()}"
            if error.key != "repository"
            else "--repository owner/name or GITHUB_REPOSITORY",
        )
        return ExitCode.USER_ERROR

    if isinstance(error, MalformedHeaders):
        print_error(str(error), reason=f"Got: {error.input}")
        return ExitCode.USER_ERROR

    if isinstance(error, VersionControlCommandFailed):
        print_error(
            f"git command failed with exit code {error.exit_code}: {' '.join(error.command)}",
            reason=error.output or None,
        )
    elif isinstance(error, RemoteQueryFailed):
        print_error("Could not look up the repository on GitHub", reason=str(error))
    elif isinstance(error, RemoteMutationFailed):
        print_error("Could not open the pull request on GitHub", reason=str(error))
    elif isinstance(error, FetchFailed):
        print_error("Could not download the schema", reason=str(error))
    else:
        print_error(str(error))
    return ExitCode.GENERAL_ERROR


__all__ = ["ExitCode", "console", "print_error", "report_error"]

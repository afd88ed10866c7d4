"""
Error taxonomy for schemasync.

Every error is fatal for the current invocation: nothing is retried and
nothing is rolled back. The next scheduled run is the retry mechanism, so
each error carries enough context (command output, response body) for an
operator to inspect the local and remote state by hand.
"""

from __future__ import annotations


class SchemaSyncError(Exception):
    """Base class for all schemasync errors."""

    pass


class FetchFailed(SchemaSyncError):
    """The schema could not be downloaded or written to disk."""

    pass


class VersionControlCommandFailed(SchemaSyncError):
    """A git command exited with a non-zero status."""

    def __init__(self, command: list[str], exit_code: int, output: str = "") -> None:
        self.command = command
        self.exit_code = exit_code
        self.output = output
        super().__init__(
            f"Command {' '.join(command)} failed with exitCode '{exit_code}'\n"
            f"output was: {output}"
        )


class BranchCreateFailed(VersionControlCommandFailed):
    """A branch could not be created because it already exists locally."""

    pass


class _RemoteError(SchemaSyncError):
    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        self.status = status
        self.body = body
        detail = f"{message} (status {status})" if status is not None else message
        if body:
            detail = f"{detail}\n{body}"
        super().__init__(detail)


class RemoteQueryFailed(_RemoteError):
    """A read query against the GitHub GraphQL API failed."""

    pass


class RemoteMutationFailed(_RemoteError):
    """A mutation against the GitHub GraphQL API failed."""

    pass


class ConfigurationMissing(SchemaSyncError):
    """A required configuration value is unset or blank."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Cannot find an input for {key}")


class MalformedHeaders(SchemaSyncError):
    """The headers option is not a JSON object of strings."""

    def __init__(self, input: str) -> None:
        self.input = input
        super().__init__(
            "'headers' must be a JSON object of the form "
            '{"header1": "value1", "header2": "value2"}'
        )


__all__ = [
    "BranchCreateFailed",
    "ConfigurationMissing",
    "FetchFailed",
    "MalformedHeaders",
    "RemoteMutationFailed",
    "RemoteQueryFailed",
    "SchemaSyncError",
    "VersionControlCommandFailed",
]

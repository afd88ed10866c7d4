"""
Artifact store.

Wraps the on-disk schema file. Change detection is delegated to git rather
than comparing hashes, so anything git considers a change (including line
ending or formatting differences, or a brand new untracked file) counts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from schemasync.core.errors import FetchFailed
from schemasync.core.fetch.downloader import DownloadRequest
from schemasync.core.vcs.git import VersionControl

logger = logging.getLogger(__name__)


class Downloader(Protocol):
    """Anything that can write a schema to `request.output_path`."""

    def download(self, request: DownloadRequest) -> Path: ...


@dataclass(frozen=True)
class Artifact:
    """Snapshot of the artifact file after a fetch."""

    path: Path
    content: bytes


class ArtifactStore:
    """
    The schema file inside the working copy.

    Example:
        >>> store = ArtifactStore(Path("schema.graphqls"), GitCli(), SchemaDownloader())
        >>> store.fetch(request)
        >>> if store.has_changes():
        ...     ...
    """

    def __init__(self, path: Path, vcs: VersionControl, downloader: Downloader) -> None:
        self.path = path
        self.vcs = vcs
        self.downloader = downloader

    def fetch(self, request: DownloadRequest) -> Artifact:
        """
        Download the schema over the artifact file.

        Args:
            request: Download parameters; `output_path` is forced to this store's path

        Returns:
            The freshly written artifact

        Raises:
            FetchFailed: If the download fails or the file cannot be read back
        """
        request = request.model_copy(update={"output_path": self.path})
        self.downloader.download(request)
        try:
            content = self.path.read_bytes()
        except OSError as e:
            raise FetchFailed(f"Cannot read downloaded schema at {self.path}: {e}") from e
        logger.debug("Fetched %d bytes into %s", len(content), self.path)
        return Artifact(path=self.path, content=content)

    def has_changes(self) -> bool:
        """Return True when git reports the working copy as dirty."""
        return not self.vcs.is_clean()

    def hold(self) -> bytes:
        """Read the current artifact content so it survives a branch switch."""
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise FetchFailed(f"Cannot read schema at {self.path}: {e}") from e

    def restore(self, content: bytes) -> None:
        """Write previously held content back over the artifact file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(content)


__all__ = ["Artifact", "ArtifactStore", "Downloader"]

"""Schema download."""

from schemasync.core.fetch.downloader import (
    DEFAULT_GRAPH_VARIANT,
    DEFAULT_REGISTRY_URL,
    DownloadRequest,
    SchemaDownloader,
)

__all__ = [
    "DEFAULT_GRAPH_VARIANT",
    "DEFAULT_REGISTRY_URL",
    "DownloadRequest",
    "SchemaDownloader",
]

"""
Artifact storage.

The artifact is the downloaded schema file tracked in the working copy.
"""

from schemasync.core.artifact.store import Artifact, ArtifactStore, Downloader

__all__ = ["Artifact", "ArtifactStore", "Downloader"]

"""
Version control for schemasync.

`VersionControl` is the capability interface, `GitCli` the subprocess
implementation and `WorkingCopy` the controller the engine drives.
"""

from schemasync.core.vcs.git import CommitIdentity, GitCli, VersionControl
from schemasync.core.vcs.working_copy import WorkingCopy

__all__ = ["CommitIdentity", "GitCli", "VersionControl", "WorkingCopy"]

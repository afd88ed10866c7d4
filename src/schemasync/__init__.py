"""
schemasync - keep a downloaded GraphQL schema in sync with a repository.

Fetches a schema, and when it changed, commits it to a sync branch and opens
(or updates) a GitHub pull request. Safe to run repeatedly on a schedule.
"""

__version__ = "0.1.0"

from schemasync.core.config.models import SyncConfig
from schemasync.core.reconcile.models import OutcomeKind, ReconciliationOutcome

__all__ = ["OutcomeKind", "ReconciliationOutcome", "SyncConfig", "__version__"]

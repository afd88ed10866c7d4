"""
Reconciliation of a fetched schema against git and GitHub.

Example:
    >>> from schemasync.core.reconcile import ReconciliationEngine
    >>> outcome = ReconciliationEngine(config, store, working_copy, github, github).run()
    >>> outcome.kind
    <OutcomeKind.NO_CHANGE: 'no_change'>
"""

from schemasync.core.reconcile.engine import (
    ProposalLocator,
    ProposalPublisher,
    ReconcileEventCallback,
    ReconciliationEngine,
)
from schemasync.core.reconcile.models import (
    OutcomeKind,
    ProposalRequest,
    ReconcileState,
    ReconciliationOutcome,
)
from schemasync.core.reconcile.naming import timestamp_branch_name

__all__ = [
    "OutcomeKind",
    "ProposalLocator",
    "ProposalPublisher",
    "ProposalRequest",
    "ReconcileEventCallback",
    "ReconcileState",
    "ReconciliationEngine",
    "ReconciliationOutcome",
    "timestamp_branch_name",
]

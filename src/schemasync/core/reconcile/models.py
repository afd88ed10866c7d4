"""
Data models for the reconciliation engine.

Defines the engine's states and the outcome of a single run.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from schemasync.core.github.models import CreatedPullRequest


class ReconcileState(str, Enum):
    """States of a single reconciliation run."""

    START = "start"
    FETCHED = "fetched"
    NO_CHANGE = "no_change"
    CLASSIFYING = "classifying"
    CREATING_NEW = "creating_new"
    UPDATING_EXISTING = "updating_existing"
    DONE = "done"


class OutcomeKind(str, Enum):
    """Terminal result of a run."""

    NO_CHANGE = "no_change"
    CREATED = "created"
    UPDATED = "updated"


class ProposalRequest(BaseModel):
    """A pull request the engine asked the publisher to open."""

    repository_id: str
    base: str
    head: str
    title: str
    body: str
    created: CreatedPullRequest | None = None


class ReconciliationOutcome(BaseModel):
    """
    Result of one reconciliation.

    Example:
        >>> outcome = ReconciliationOutcome.updated("update-schema-03-07_09-05")
        >>> outcome.summary
        'Pushed schema update to existing pull request branch update-schema-03-07_09-05'
    """

    kind: OutcomeKind
    branch: str | None = Field(default=None, description="Sync branch touched by the run")
    proposal: ProposalRequest | None = Field(
        default=None, description="Pull request opened by the run (CREATED only)"
    )

    @model_validator(mode="after")
    def _proposal_only_when_created(self) -> ReconciliationOutcome:
        if (self.kind == OutcomeKind.CREATED) != (self.proposal is not None):
            raise ValueError("a proposal is required for CREATED outcomes and only for them")
        return self

    @classmethod
    def no_change(cls, branch: str | None = None) -> ReconciliationOutcome:
        return cls(kind=OutcomeKind.NO_CHANGE, branch=branch)

    @classmethod
    def created(cls, proposal: ProposalRequest) -> ReconciliationOutcome:
        return cls(kind=OutcomeKind.CREATED, branch=proposal.head, proposal=proposal)

    @classmethod
    def updated(cls, branch: str) -> ReconciliationOutcome:
        return cls(kind=OutcomeKind.UPDATED, branch=branch)

    @property
    def summary(self) -> str:
        """Human-readable one-line description."""
        proposal = self.proposal
        if proposal is not None:
            text = f"Opened pull request {proposal.head} -> {proposal.base}"
            if proposal.created and proposal.created.url:
                text = f"{text}: {proposal.created.url}"
            return text
        if self.kind == OutcomeKind.UPDATED:
            return f"Pushed schema update to existing pull request branch {self.branch}"
        return "The schema did not change"

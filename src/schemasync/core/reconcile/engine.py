"""
Reconciliation engine.

Decides, for one run, whether the freshly fetched schema needs no action, a
new pull request, or an update to the branch of an already open pull
request, and drives the working copy and GitHub accordingly.

State machine:
    START -> FETCHED -> NO_CHANGE
                     -> CLASSIFYING -> CREATING_NEW -> DONE
                                    -> UPDATING_EXISTING -> DONE | NO_CHANGE

Whether to create or update is decided only by the existence of an open
pull request for the sync branch on GitHub, never by local branch state: a
local branch left behind by a failed run must not suppress a new pull
request, and a deleted local branch must not cause a duplicate one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from schemasync.core.github.models import CreatedPullRequest, RepositoryDetails
from schemasync.core.reconcile.models import (
    ProposalRequest,
    ReconcileState,
    ReconciliationOutcome,
)

if TYPE_CHECKING:
    from schemasync.core.artifact.store import ArtifactStore
    from schemasync.core.config.models import SyncConfig
    from schemasync.core.vcs.working_copy import WorkingCopy

logger = logging.getLogger(__name__)


class ProposalLocator(Protocol):
    """Reads repository identity and open pull request status."""

    def lookup(self, owner: str, name: str, branch: str) -> RepositoryDetails: ...


class ProposalPublisher(Protocol):
    """Opens pull requests."""

    def create_pull_request(
        self, repository_id: str, base: str, head: str, title: str, body: str
    ) -> CreatedPullRequest | None: ...


class ReconcileEventCallback(Protocol):
    """Protocol for engine progress callbacks."""

    def on_progress(self, message: str) -> None:
        """Called before each step (e.g. "Fetching schema").

        Args:
            message: Progress message
        """
        ...

    def on_status(self, message: str, level: str = "info") -> None:
        """Called when a decision or result should be reported.

        Args:
            message: Status message (e.g. "Pull request is already open")
            level: Message level (info, success, warning, error)
        """
        ...


class _SilentCallback:
    def on_progress(self, message: str) -> None:
        pass

    def on_status(self, message: str, level: str = "info") -> None:
        pass


class ReconciliationEngine:
    """
    Converge the repository and GitHub to the freshly fetched schema.

    The engine is single-use per run and holds no global state: everything
    it knows comes from `config` and its collaborators.

    Example:
        >>> engine = ReconciliationEngine(config, store, working_copy, github, github)
        >>> outcome = engine.run()
        >>> print(outcome.summary)
    """

    def __init__(
        self,
        config: SyncConfig,
        artifacts: ArtifactStore,
        working_copy: WorkingCopy,
        locator: ProposalLocator,
        publisher: ProposalPublisher,
        callback: ReconcileEventCallback | None = None,
    ) -> None:
        self.config = config
        self.artifacts = artifacts
        self.working_copy = working_copy
        self.locator = locator
        self.publisher = publisher
        self.callback = callback or _SilentCallback()
        self.state = ReconcileState.START
        self.history: list[ReconcileState] = [ReconcileState.START]

    def _transition(self, state: ReconcileState) -> None:
        logger.debug("Reconcile state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def run(self) -> ReconciliationOutcome:
        """
        Perform one reconciliation.

        Returns:
            The outcome (NO_CHANGE, CREATED or UPDATED)

        Raises:
            SchemaSyncError: Any failure; the run is aborted where it stands
        """
        if self.state != ReconcileState.START:
            raise RuntimeError("ReconciliationEngine.run() can only be called once")

        self.callback.on_progress("Fetching schema")
        artifact = self.artifacts.fetch(self.config.download)
        logger.debug("Fetched schema into %s", artifact.path)
        self._transition(ReconcileState.FETCHED)

        if not self.artifacts.has_changes():
            return self._no_change()

        self._transition(ReconcileState.CLASSIFYING)
        self.callback.on_progress("Looking up pull requests")
        repo = self.config.repository
        details = self.locator.lookup(repo.owner, repo.repo, self.config.branch)

        if details.has_open_proposal:
            return self._update_existing()
        return self._create_new(details)

    def _no_change(self) -> ReconciliationOutcome:
        self._transition(ReconcileState.NO_CHANGE)
        outcome = ReconciliationOutcome.no_change(self.config.branch)
        logger.info("%s", outcome.summary)
        self.callback.on_status(f"{outcome.summary}, exiting.")
        return outcome

    def _commit(self) -> None:
        self.working_copy.commit_all(
            str(self.config.artifact_path), self.config.identity, self.config.commit_message
        )

    def _create_new(self, details: RepositoryDetails) -> ReconciliationOutcome:
        self._transition(ReconcileState.CREATING_NEW)
        branch = self.config.branch
        self.callback.on_status("Opening pull request")

        self.working_copy.create_branch(branch)
        self._commit()
        # force: the remote may hold a stale branch of this name from an abandoned run
        self.working_copy.push_branch(self.config.remote, branch, force=True)

        proposal = ProposalRequest(
            repository_id=details.id,
            base=self.config.base_branch or details.default_branch,
            head=branch,
            title=self.config.pr_title,
            body=self.config.pr_body,
        )
        created = self.publisher.create_pull_request(
            proposal.repository_id, proposal.base, proposal.head, proposal.title, proposal.body
        )
        proposal = proposal.model_copy(update={"created": created})

        self._transition(ReconcileState.DONE)
        outcome = ReconciliationOutcome.created(proposal)
        logger.info("%s", outcome.summary)
        self.callback.on_status(outcome.summary, level="success")
        return outcome

    def _update_existing(self) -> ReconciliationOutcome:
        self._transition(ReconcileState.UPDATING_EXISTING)
        branch = self.config.branch
        self.callback.on_status("Pull request is already open, update branch")

        self.working_copy.switch_to_existing_branch(self.config.remote, branch, self.artifacts)

        # the branch may already carry this exact schema from an earlier partial run
        if not self.artifacts.has_changes():
            return self._no_change()

        self._commit()
        self.working_copy.push_branch(self.config.remote, branch, force=False)

        self._transition(ReconcileState.DONE)
        outcome = ReconciliationOutcome.updated(branch)
        logger.info("%s", outcome.summary)
        self.callback.on_status(outcome.summary, level="success")
        return outcome


__all__ = [
    "ProposalLocator",
    "ProposalPublisher",
    "ReconcileEventCallback",
    "ReconciliationEngine",
]

"""State machine driving one edit-client workflow instance."""
from __future__ import annotations

import logging

from clientdesk.core.schema import ClientEdit
from clientdesk.core.validation import SubmissionRejected, SubmissionValidator
from clientdesk.domain import Completed, Error, Loaded, Loading, Ready, Submitting, WorkflowState
from clientdesk.infrastructure import BranchStore, ClientStore, Navigator, NotificationSink, StoreError

from .loader import WorkflowDataLoader, user_message

logger = logging.getLogger(__name__)


class WorkflowStateError(RuntimeError):
    """Raised when an action is requested in a state that does not allow it."""


class ClientEditWorkflow:
    """Loading -> (Error | Ready) -> Submitting -> (Ready | Completed).

    One instance edits one client. After :meth:`dispose` every result that
    arrives late is dropped without touching state, notifications or
    navigation.
    """

    UPDATE_FAILED_TITLE = "Error updating client"

    def __init__(
        self,
        client_id: str,
        *,
        clients: ClientStore,
        branches: BranchStore,
        notifications: NotificationSink,
        navigator: Navigator,
        loader: WorkflowDataLoader | None = None,
        validator: SubmissionValidator | None = None,
        return_route: str = "/clients",
    ) -> None:
        self.client_id = client_id
        self._clients = clients
        self._notifications = notifications
        self._navigator = navigator
        self._loader = loader or WorkflowDataLoader(clients, branches)
        self._validator = validator or SubmissionValidator()
        self._return_route = return_route
        self._state: WorkflowState = Loading()
        self._disposed = False
        self._started = False

    # ------------------------------------------------------------------
    # inspection
    # ------------------------------------------------------------------
    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def is_terminal(self) -> bool:
        return isinstance(self._state, (Error, Completed))

    def _transition(self, state: WorkflowState) -> None:
        logger.debug("client %s: %s -> %s", self.client_id, self._state.status, state.status)
        self._state = state

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    async def start(self) -> WorkflowState:
        """Load the client and branches. Runs once per instance."""
        if self._disposed:
            return self._state
        if self._started:
            raise WorkflowStateError(f"workflow already started, now {self._state.status}")
        self._started = True
        self._transition(Loading())

        outcome = await self._loader.load(self.client_id)
        if self._disposed:
            logger.debug("client %s: dropping load result after dispose", self.client_id)
            return self._state

        if isinstance(outcome, Loaded):
            self._transition(Ready(record=outcome.record, branches=outcome.branches))
            if outcome.used_fallback:
                self._notifications.notify(
                    "warning",
                    "Using mock branch data",
                    "No active branches found in the database",
                )
        else:
            self._transition(Error(outcome.message))
        return self._state

    def dispose(self) -> None:
        self._disposed = True

    # ------------------------------------------------------------------
    # submission
    # ------------------------------------------------------------------
    async def submit(self, edit: ClientEdit) -> WorkflowState:
        if self._disposed:
            return self._state
        current = self._state
        if isinstance(current, Submitting):
            logger.info("client %s: submit ignored, one is already in flight", self.client_id)
            return current
        if not isinstance(current, Ready):
            raise WorkflowStateError(f"cannot submit while {current.status}")

        self._transition(Submitting(record=current.record, branches=current.branches))

        verdict = self._validator.validate(edit, current.branches)
        if isinstance(verdict, SubmissionRejected):
            self._transition(current)
            self._notifications.notify("error", self.UPDATE_FAILED_TITLE, verdict.reason)
            return self._state

        updated = current.record.apply_edit(edit)
        try:
            await self._clients.update(updated)
        except Exception as exc:
            if self._disposed:
                return self._state
            if isinstance(exc, StoreError):
                logger.warning("client %s: update rejected by store: %s", self.client_id, exc)
            else:
                logger.error("client %s: unexpected error during update", self.client_id, exc_info=exc)
            self._transition(current)
            self._notifications.notify("error", self.UPDATE_FAILED_TITLE, user_message(exc))
            return self._state

        if self._disposed:
            return self._state
        self._transition(Completed(record=updated))
        self._notifications.notify("info", "Client updated", "The client has been updated successfully")
        self._navigator.go_to(self._return_route)
        return self._state

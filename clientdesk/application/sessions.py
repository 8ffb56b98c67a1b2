"""Application service keeping live edit workflows for the HTTP layer."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from clientdesk.core.schema import ClientEdit
from clientdesk.domain import Completed, Error, Ready, Submitting
from clientdesk.infrastructure import (
    BranchStore,
    ClientStore,
    CollectingNotificationSink,
    InMemoryBranchRepository,
    InMemoryClientRepository,
    LoggingNotificationSink,
    RecordingNavigator,
)

from .workflow import ClientEditWorkflow

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EditSession:
    """One workflow instance plus the side channels it reports into."""

    session_id: str
    workflow: ClientEditWorkflow
    notifications: CollectingNotificationSink
    navigator: RecordingNavigator = field(default_factory=RecordingNavigator)

    def snapshot(self) -> dict[str, Any]:
        state = self.workflow.state
        client: dict[str, Any] | None = None
        branches: list[dict[str, Any]] = []
        error: str | None = None

        if isinstance(state, (Ready, Submitting)):
            client = state.record.model_dump(by_alias=True)
            branches = [branch.model_dump() for branch in state.branches]
        elif isinstance(state, Completed):
            client = state.record.model_dump(by_alias=True)
        elif isinstance(state, Error):
            error = state.message

        return {
            "session_id": self.session_id,
            "client_id": self.workflow.client_id,
            "status": state.status,
            "error": error,
            "client": client,
            "branches": branches,
            "notifications": [
                {"kind": item.kind, "title": item.title, "detail": item.detail}
                for item in self.notifications.items
            ],
            "redirect": self.navigator.current,
        }


class EditSessionService:
    """Opens, drives and disposes edit workflows keyed by session id.

    Sessions that ended in ``Completed`` or ``Error`` stay readable until the
    next session is opened, at which point they are pruned. Live sessions are
    only removed by :meth:`close_session`.
    """

    def __init__(
        self,
        clients: ClientStore,
        branches: BranchStore,
        *,
        return_route: str = "/clients",
    ) -> None:
        self._clients = clients
        self._branches = branches
        self._return_route = return_route
        self._sessions: dict[str, EditSession] = {}
        self._session_counter = 0

    def _next_session_id(self) -> str:
        self._session_counter += 1
        return f"edit-{self._session_counter:05d}"

    # ------------------------------------------------------------------
    # session lifecycle
    # ------------------------------------------------------------------
    async def open_session(self, client_id: str) -> EditSession:
        self.prune_finished()
        notifications = CollectingNotificationSink(forward=LoggingNotificationSink())
        navigator = RecordingNavigator()
        workflow = ClientEditWorkflow(
            client_id,
            clients=self._clients,
            branches=self._branches,
            notifications=notifications,
            navigator=navigator,
            return_route=self._return_route,
        )
        session = EditSession(
            session_id=self._next_session_id(),
            workflow=workflow,
            notifications=notifications,
            navigator=navigator,
        )
        self._sessions[session.session_id] = session
        logger.info("opened %s for client %s", session.session_id, client_id)
        await workflow.start()
        return session

    def prune_finished(self) -> int:
        finished = [sid for sid, session in self._sessions.items() if session.workflow.is_terminal]
        for session_id in finished:
            self.close_session(session_id)
        return len(finished)

    def get_session(self, session_id: str) -> EditSession | None:
        return self._sessions.get(session_id)

    async def submit(self, session_id: str, edit: ClientEdit) -> EditSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(session_id)
        await session.workflow.submit(edit)
        return session

    def close_session(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.workflow.dispose()
        logger.info("closed %s", session_id)
        return True

    def list_sessions(self) -> list[dict[str, object]]:
        return [
            {
                "session_id": session.session_id,
                "client_id": session.workflow.client_id,
                "status": session.workflow.state.status,
            }
            for session in self._sessions.values()
        ]

    # ------------------------------------------------------------------
    # testing helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        for session in self._sessions.values():
            session.workflow.dispose()
        self._sessions.clear()
        self._session_counter = 0


_service = EditSessionService(InMemoryClientRepository(), InMemoryBranchRepository())


def get_edit_session_service() -> EditSessionService:
    """Return the edit session service for the process."""

    return _service


def configure_edit_session_service(service: EditSessionService) -> None:
    """Install the service used by the HTTP routes."""

    global _service
    _service = service


def reset_edit_sessions() -> None:
    """Dispose every open session (used in tests)."""

    _service.reset()

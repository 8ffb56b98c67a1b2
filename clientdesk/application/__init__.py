"""Application services."""

from .loader import WorkflowDataLoader
from .sessions import (
    EditSession,
    EditSessionService,
    configure_edit_session_service,
    get_edit_session_service,
    reset_edit_sessions,
)
from .workflow import ClientEditWorkflow, WorkflowStateError

__all__ = [
    "ClientEditWorkflow",
    "EditSession",
    "EditSessionService",
    "WorkflowDataLoader",
    "WorkflowStateError",
    "configure_edit_session_service",
    "get_edit_session_service",
    "reset_edit_sessions",
]

"""Domain layer definitions."""

from .workflow import (
    Completed,
    Error,
    Loaded,
    LoadFailed,
    LoadOutcome,
    Loading,
    Notification,
    NotificationKind,
    Ready,
    Submitting,
    WorkflowState,
)

__all__ = [
    "Completed",
    "Error",
    "Loaded",
    "LoadFailed",
    "LoadOutcome",
    "Loading",
    "Notification",
    "NotificationKind",
    "Ready",
    "Submitting",
    "WorkflowState",
]

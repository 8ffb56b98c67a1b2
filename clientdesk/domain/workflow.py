"""Domain values for the edit-client workflow."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from clientdesk.core.schema import Branch, ClientRecord

NotificationKind = Literal["info", "warning", "error"]


@dataclass(frozen=True, slots=True)
class Loading:
    status: Literal["loading"] = "loading"


@dataclass(frozen=True, slots=True)
class Error:
    """Load failed; the only way out is navigating away."""

    message: str
    status: Literal["error"] = "error"


@dataclass(frozen=True, slots=True)
class Ready:
    record: ClientRecord
    branches: tuple[Branch, ...]
    status: Literal["ready"] = "ready"


@dataclass(frozen=True, slots=True)
class Submitting:
    record: ClientRecord
    branches: tuple[Branch, ...]
    status: Literal["submitting"] = "submitting"


@dataclass(frozen=True, slots=True)
class Completed:
    """The update was persisted and the caller was sent away."""

    record: ClientRecord
    status: Literal["completed"] = "completed"


WorkflowState = Union[Loading, Error, Ready, Submitting, Completed]


@dataclass(frozen=True, slots=True)
class Loaded:
    record: ClientRecord
    branches: tuple[Branch, ...]
    used_fallback: bool = False


@dataclass(frozen=True, slots=True)
class LoadFailed:
    message: str


LoadOutcome = Union[Loaded, LoadFailed]


@dataclass(frozen=True, slots=True)
class Notification:
    kind: NotificationKind
    title: str
    detail: str

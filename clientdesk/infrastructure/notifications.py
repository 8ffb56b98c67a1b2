"""User-facing side channels of the workflow: notifications and navigation.

The workflow never renders anything itself. It hands notifications to a
:class:`NotificationSink` and asks a :class:`Navigator` to move on once it is
done. Both are injected per workflow instance so tests and the HTTP layer can
observe exactly what a single instance emitted.
"""
from __future__ import annotations

import logging
from typing import Protocol

from clientdesk.domain import Notification, NotificationKind

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Contract for notification delivery (fire-and-forget)."""

    def notify(self, kind: NotificationKind, title: str, detail: str) -> None:
        """Deliver a notification to the user."""


class Navigator(Protocol):
    """Contract for leaving the current screen."""

    def go_to(self, route: str) -> None:
        """Navigate to ``route``."""


class LoggingNotificationSink:
    """Default sink that only writes notifications to the log."""

    _LEVELS = {"info": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR}

    def notify(self, kind: NotificationKind, title: str, detail: str) -> None:
        logger.log(self._LEVELS.get(kind, logging.INFO), "%s: %s", title, detail)


class CollectingNotificationSink:
    """Keeps every notification so it can be returned to the client."""

    def __init__(self, forward: NotificationSink | None = None) -> None:
        self.items: list[Notification] = []
        self._forward = forward

    def notify(self, kind: NotificationKind, title: str, detail: str) -> None:
        self.items.append(Notification(kind=kind, title=title, detail=detail))
        if self._forward is not None:
            self._forward.notify(kind, title, detail)

    def of_kind(self, kind: NotificationKind) -> list[Notification]:
        return [item for item in self.items if item.kind == kind]


class RecordingNavigator:
    """Navigator that remembers the requested routes instead of moving."""

    def __init__(self) -> None:
        self.routes: list[str] = []

    @property
    def current(self) -> str | None:
        return self.routes[-1] if self.routes else None

    def go_to(self, route: str) -> None:
        self.routes.append(route)

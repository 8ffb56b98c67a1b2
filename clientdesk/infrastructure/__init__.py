"""Infrastructure layer exports."""

from .clients import (
    BranchStore,
    ClientStore,
    InMemoryBranchRepository,
    InMemoryClientRepository,
    RecordNotFoundError,
    StoreError,
)
from .notifications import (
    CollectingNotificationSink,
    LoggingNotificationSink,
    Navigator,
    NotificationSink,
    RecordingNavigator,
)
from .supabase import SupabaseBranchStore, SupabaseClientStore

__all__ = [
    "BranchStore",
    "ClientStore",
    "CollectingNotificationSink",
    "InMemoryBranchRepository",
    "InMemoryClientRepository",
    "LoggingNotificationSink",
    "Navigator",
    "NotificationSink",
    "RecordNotFoundError",
    "RecordingNavigator",
    "StoreError",
    "SupabaseBranchStore",
    "SupabaseClientStore",
]

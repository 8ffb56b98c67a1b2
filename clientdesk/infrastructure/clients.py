"""Store contracts and in-memory repositories for clients and branches."""
from __future__ import annotations

from typing import Iterable, Protocol

from clientdesk.core.schema import Branch, ClientRecord


class StoreError(RuntimeError):
    """Raised by a store when an operation fails.

    The message is meant to be safe to show to an end user.
    """


class RecordNotFoundError(StoreError):
    """Raised when the requested client does not exist."""


class ClientStore(Protocol):
    """Persistence contract for client records."""

    async def fetch_by_id(self, client_id: str) -> ClientRecord: ...

    async def update(self, record: ClientRecord) -> None: ...


class BranchStore(Protocol):
    """Read-only source of selectable branches."""

    async def list_active(self) -> list[Branch]: ...


class InMemoryClientRepository:
    """Simple in-memory client store for local runs and tests."""

    def __init__(self, records: Iterable[ClientRecord] = ()) -> None:
        self._records: dict[str, ClientRecord] = {}
        for record in records:
            self.add(record)

    def add(self, record: ClientRecord) -> None:
        self._records[record.id] = record

    def get(self, client_id: str) -> ClientRecord | None:
        return self._records.get(client_id)

    async def fetch_by_id(self, client_id: str) -> ClientRecord:
        record = self._records.get(client_id)
        if record is None:
            raise RecordNotFoundError("Client not found")
        return record.model_copy()

    async def update(self, record: ClientRecord) -> None:
        if record.id not in self._records:
            raise RecordNotFoundError("Client not found")
        self._records[record.id] = record.model_copy()

    def reset(self) -> None:
        self._records.clear()


class InMemoryBranchRepository:
    """In-memory branch table; only ``ACTIVE`` rows are listed."""

    def __init__(self, branches: Iterable[Branch] = ()) -> None:
        self._rows: list[tuple[Branch, str]] = []
        for branch in branches:
            self.add(branch)

    def add(self, branch: Branch, *, status: str = "ACTIVE") -> None:
        self._rows.append((branch, status))

    async def list_active(self) -> list[Branch]:
        return [branch for branch, status in self._rows if status == "ACTIVE"]

    def reset(self) -> None:
        self._rows.clear()

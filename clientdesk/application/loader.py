from __future__ import annotations

import asyncio
import logging

from clientdesk.core.fallback import ReferenceFallbackResolver
from clientdesk.core.schema import Branch
from clientdesk.domain import Loaded, LoadFailed, LoadOutcome
from clientdesk.infrastructure import BranchStore, ClientStore, StoreError

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred"


def user_message(exc: BaseException) -> str:
    """Message safe to show for ``exc``; store messages pass through."""

    if isinstance(exc, StoreError) and str(exc):
        return str(exc)
    return UNEXPECTED_ERROR


def _unique_by_id(branches: list[Branch]) -> tuple[Branch, ...]:
    seen: dict[str, Branch] = {}
    for branch in branches:
        seen.setdefault(branch.id, branch)
    return tuple(seen.values())


class WorkflowDataLoader:
    """Fetches the client and the active branches concurrently.

    The client is mandatory, and so is a successful branch fetch. An empty
    branch list is not a failure: the fallback set is used instead and the
    outcome is flagged so the caller can warn the user.
    """

    def __init__(
        self,
        clients: ClientStore,
        branches: BranchStore,
        fallback: ReferenceFallbackResolver | None = None,
    ) -> None:
        self._clients = clients
        self._branches = branches
        self._fallback = fallback or ReferenceFallbackResolver()

    async def load(self, client_id: str) -> LoadOutcome:
        if not client_id or not client_id.strip():
            return LoadFailed("Client id is required")

        record_result, branches_result = await asyncio.gather(
            self._clients.fetch_by_id(client_id),
            self._branches.list_active(),
            return_exceptions=True,
        )

        # record failure wins regardless of the branch outcome
        for label, result in (("client", record_result), ("branches", branches_result)):
            if isinstance(result, Exception):
                if isinstance(result, StoreError):
                    logger.warning("loading %s for client %s failed: %s", label, client_id, result)
                else:
                    logger.error(
                        "unexpected error loading %s for client %s",
                        label,
                        client_id,
                        exc_info=result,
                    )
                return LoadFailed(user_message(result))
            if isinstance(result, BaseException):
                raise result

        branches = _unique_by_id(list(branches_result))
        if branches:
            return Loaded(record=record_result, branches=branches)

        placeholders = tuple(self._fallback.resolve())
        logger.warning("no active branches found, using %d placeholder branches", len(placeholders))
        return Loaded(record=record_result, branches=placeholders, used_fallback=True)

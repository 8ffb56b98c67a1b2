"""Client and branch stores backed by a Supabase (PostgREST) project."""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from clientdesk.core.schema import Branch, ClientRecord

from .clients import RecordNotFoundError, StoreError

logger = logging.getLogger(__name__)


class _PostgrestTable:
    """Shared plumbing for talking to one PostgREST table."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str,
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        parsed = urlparse(base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("base_url must include scheme and host")

        self._table = table
        self._url = f"{parsed.scheme}://{parsed.netloc}/rest/v1/{table}"
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _error_message(response: httpx.Response, fallback: str) -> str:
        try:
            body = response.json()
        except ValueError:
            return fallback
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return fallback

    async def _request(
        self,
        method: str,
        *,
        params: dict[str, str],
        failure: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        try:
            response = await self._client.request(
                method,
                self._url,
                params=params,
                json=json,
                headers={**self._headers, **(headers or {})},
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, self._table, exc)
            raise StoreError(failure) from exc

        if response.is_error:
            message = self._error_message(response, failure)
            logger.warning("%s %s returned %s: %s", method, self._table, response.status_code, message)
            raise StoreError(message)

        if not response.content:
            return []
        payload = response.json()
        if not isinstance(payload, list):
            raise StoreError(failure)
        return payload

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class SupabaseClientStore(_PostgrestTable):
    """Client store over a PostgREST table.

    The table is expected to use snake_case columns (``date_of_birth``,
    ``branch_id``). Rows with camelCase columns can be read, but updates are
    always written with snake_case keys.
    """

    def __init__(self, base_url: str, api_key: str, *, table: str = "clients", **kwargs: Any) -> None:
        super().__init__(base_url, api_key, table, **kwargs)

    @staticmethod
    def _to_record(row: dict[str, Any]) -> ClientRecord:
        try:
            return ClientRecord.model_validate(row)
        except ValidationError as exc:
            logger.warning("client row failed validation: %s", exc)
            raise StoreError("Client data is malformed") from exc

    async def fetch_by_id(self, client_id: str) -> ClientRecord:
        rows = await self._request(
            "GET",
            params={"select": "*", "id": f"eq.{client_id}"},
            failure="Failed to load client",
        )
        if not rows:
            raise RecordNotFoundError("Client not found")
        return self._to_record(rows[0])

    async def update(self, record: ClientRecord) -> None:
        row = record.to_row()
        row.pop("id", None)
        rows = await self._request(
            "PATCH",
            params={"id": f"eq.{record.id}"},
            json=row,
            headers={"Prefer": "return=representation"},
            failure="Failed to update client",
        )
        if not rows:
            raise RecordNotFoundError("Client not found")


class SupabaseBranchStore(_PostgrestTable):
    def __init__(self, base_url: str, api_key: str, *, table: str = "branches", **kwargs: Any) -> None:
        super().__init__(base_url, api_key, table, **kwargs)

    async def list_active(self) -> list[Branch]:
        rows = await self._request(
            "GET",
            params={"select": "id,name", "status": "eq.ACTIVE"},
            failure="Failed to load branches",
        )
        try:
            return [Branch.model_validate(row) for row in rows]
        except ValidationError as exc:
            logger.warning("branch rows failed validation: %s", exc)
            raise StoreError("Branch data is malformed") from exc


__all__ = ["SupabaseBranchStore", "SupabaseClientStore"]

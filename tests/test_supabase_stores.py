from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from clientdesk.core.schema import ClientRecord
from clientdesk.infrastructure import (
    RecordNotFoundError,
    StoreError,
    SupabaseBranchStore,
    SupabaseClientStore,
)

BASE_URL = "https://demo.supabase.co"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_fetch_by_id_queries_postgrest():
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["params"] = dict(request.url.params)
        captured["apikey"] = request.headers["apikey"]
        captured["authorization"] = request.headers["authorization"]
        return httpx.Response(
            200,
            json=[
                {
                    "id": 42,
                    "name": "Ada",
                    "date_of_birth": "1990-05-01",
                    "branch_id": 9,
                    "email": "ada@example.com",
                }
            ],
        )

    store = SupabaseClientStore(BASE_URL, "anon-key", http_client=_client(handler))

    record = asyncio.run(store.fetch_by_id("42"))

    assert captured["path"] == "/rest/v1/clients"
    assert captured["params"] == {"select": "*", "id": "eq.42"}
    assert captured["apikey"] == "anon-key"
    assert captured["authorization"] == "Bearer anon-key"
    assert record.id == "42"
    assert record.branch_id == "9"
    assert record.to_row()["email"] == "ada@example.com"


def test_fetch_by_id_empty_result_is_not_found():
    store = SupabaseClientStore(
        BASE_URL, "key", http_client=_client(lambda request: httpx.Response(200, json=[]))
    )

    with pytest.raises(RecordNotFoundError, match="Client not found"):
        asyncio.run(store.fetch_by_id("7"))


def test_transport_error_becomes_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store = SupabaseClientStore(BASE_URL, "key", http_client=_client(handler))

    with pytest.raises(StoreError, match="Failed to load client"):
        asyncio.run(store.fetch_by_id("42"))


def test_update_patches_row_and_reports_backend_message():
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["params"] = dict(request.url.params)
        captured["prefer"] = request.headers.get("prefer")
        captured["body"] = json.loads(request.content.decode("utf-8"))
        return httpx.Response(409, json={"message": "duplicate key value violates unique constraint"})

    store = SupabaseClientStore(BASE_URL, "key", table="customers", http_client=_client(handler))
    record = ClientRecord(id="42", name="Ada", date_of_birth="1990-05-01", branch_id="1")

    with pytest.raises(StoreError, match="duplicate key"):
        asyncio.run(store.update(record))

    assert captured["method"] == "PATCH"
    assert captured["params"] == {"id": "eq.42"}
    assert captured["prefer"] == "return=representation"
    assert captured["body"] == {"name": "Ada", "date_of_birth": "1990-05-01", "branch_id": "1"}


def test_update_of_missing_row_is_not_found():
    store = SupabaseClientStore(
        BASE_URL, "key", http_client=_client(lambda request: httpx.Response(200, json=[]))
    )
    record = ClientRecord(id="404", name="Nobody")

    with pytest.raises(RecordNotFoundError):
        asyncio.run(store.update(record))


def test_list_active_filters_by_status():
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["params"] = dict(request.url.params)
        return httpx.Response(200, json=[{"id": 1, "name": "Main"}, {"id": "2", "name": "East"}])

    store = SupabaseBranchStore(BASE_URL, "key", http_client=_client(handler))

    branches = asyncio.run(store.list_active())

    assert captured["params"] == {"select": "id,name", "status": "eq.ACTIVE"}
    assert [(b.id, b.name) for b in branches] == [("1", "Main"), ("2", "East")]


def test_list_active_server_error_without_body():
    store = SupabaseBranchStore(
        BASE_URL, "key", http_client=_client(lambda request: httpx.Response(503, text="unavailable"))
    )

    with pytest.raises(StoreError, match="Failed to load branches"):
        asyncio.run(store.list_active())


def test_rejects_base_url_without_scheme():
    with pytest.raises(ValueError):
        SupabaseBranchStore("demo.supabase.co", "key")

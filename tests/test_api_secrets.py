"""
tests.test_api_secrets

End-to-end `/secrets` behaviour: permission policy, encryption at rest, error mapping.
"""

from __future__ import annotations

import logging

import httpx
import pytest
from fastapi import FastAPI

from secrets_api.errors import OperationError

WRITE = ["write:secrets"]


@pytest.mark.asyncio
async def test_secret_round_trip(client: httpx.AsyncClient, auth_headers) -> None:
    headers = auth_headers("user-a", permissions=WRITE)

    r = await client.post("/secrets", json={"secret": "confidential-data"}, headers=headers)
    assert r.status_code == 201
    assert r.headers["location"] == "/secrets"

    r = await client.get("/secrets", headers=headers)
    assert r.status_code == 200
    assert r.json() == ["confidential-data"]


@pytest.mark.asyncio
async def test_secrets_are_encrypted_at_rest(
    app: FastAPI, client: httpx.AsyncClient, auth_headers
) -> None:
    await client.post(
        "/secrets", json={"secret": "confidential-data"}, headers=auth_headers(permissions=WRITE)
    )
    stored = app.state.secrets_service._store.get_by_user_id("test-user-123")
    assert len(stored) == 1
    assert "confidential-data" not in stored[0]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "permissions",
    [
        "write:secrets",
        "read:secrets,write:secrets,read:names",
        "read:secrets, write:secrets , read:names",
        ["read:secrets", "write:secrets", "read:names"],
    ],
    ids=["single", "comma", "whitespace", "array"],
)
async def test_write_permission_encodings_are_accepted(
    client: httpx.AsyncClient, auth_headers, permissions
) -> None:
    r = await client.post(
        "/secrets", json={"secret": "my-secret-value"}, headers=auth_headers(permissions=permissions)
    )
    assert r.status_code == 201


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "permissions",
    [None, "", [], "read:secrets", ["read:secrets", "read:names"], "WRITE:SECRETS"],
    ids=["absent", "empty", "empty-array", "read-only", "array-without-write", "wrong-case"],
)
async def test_missing_write_permission_is_forbidden(
    client: httpx.AsyncClient, auth_headers, permissions
) -> None:
    headers = auth_headers("user-c", permissions=permissions)
    r = await client.post("/secrets", json={"secret": "my-secret-value"}, headers=headers)
    assert r.status_code == 403

    # Nothing was stored for the rejected caller.
    assert (await client.get("/secrets", headers=headers)).json() == []


@pytest.mark.asyncio
async def test_reading_secrets_needs_no_write_permission(
    client: httpx.AsyncClient, auth_headers
) -> None:
    await client.post(
        "/secrets", json={"secret": "kept"}, headers=auth_headers("user-a", permissions=WRITE)
    )
    r = await client.get("/secrets", headers=auth_headers("user-a"))
    assert r.status_code == 200
    assert r.json() == ["kept"]


@pytest.mark.asyncio
async def test_secrets_are_per_user(client: httpx.AsyncClient, auth_headers) -> None:
    await client.post(
        "/secrets", json={"secret": "a-only"}, headers=auth_headers("user-a", permissions=WRITE)
    )
    r = await client.get("/secrets", headers=auth_headers("user-b"))
    assert r.json() == []


@pytest.mark.asyncio
async def test_secrets_require_authentication(client: httpx.AsyncClient) -> None:
    assert (await client.get("/secrets")).status_code == 401
    assert (await client.post("/secrets", json={"secret": "x"})).status_code == 401


@pytest.mark.asyncio
async def test_secret_too_long_is_bad_request(client: httpx.AsyncClient, auth_headers) -> None:
    headers = auth_headers(permissions=WRITE)
    r = await client.post("/secrets", json={"secret": "x" * 501}, headers=headers)
    assert r.status_code == 400
    r = await client.post("/secrets", json={"secret": "x" * 500}, headers=headers)
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_corrupt_secret_maps_to_decrypt_error(
    app: FastAPI, client: httpx.AsyncClient, auth_headers
) -> None:
    app.state.secrets_service._store.add("user-a", "corrupted-token")

    r = await client.get("/secrets", headers=auth_headers("user-a"))
    assert r.status_code == 500
    problem = r.json()
    assert problem["title"] == "Encryption Error"
    assert problem["detail"] == "Failed to decrypt data"
    assert "corrupted-token" not in r.text


class _BrokenStore:
    def add(self, user_id: str, item: str) -> str:
        raise OperationError("store unavailable")

    def get_by_user_id(self, user_id: str) -> tuple[str, ...]:
        raise OperationError("store unavailable")


@pytest.mark.asyncio
async def test_operation_error_maps_to_generic_500(
    app: FastAPI, client: httpx.AsyncClient, auth_headers
) -> None:
    app.state.secrets_service._store = _BrokenStore()

    r = await client.post(
        "/secrets", json={"secret": "x"}, headers=auth_headers(permissions=WRITE)
    )
    assert r.status_code == 500
    problem = r.json()
    assert problem["detail"] == "An error occurred while processing your request"
    assert "store unavailable" not in r.text
    assert problem["correlation_id"] == r.headers["x-request-id"]


class _CrashingStore:
    def add(self, user_id: str, item: str) -> str:
        raise RuntimeError("disk full")

    def get_by_user_id(self, user_id: str) -> tuple[str, ...]:
        raise RuntimeError("disk full")


@pytest.mark.asyncio
async def test_unexpected_failure_never_logs_the_secret(
    app: FastAPI, client: httpx.AsyncClient, auth_headers, caplog: pytest.LogCaptureFixture
) -> None:
    app.state.secrets_service._store = _CrashingStore()

    with caplog.at_level(logging.ERROR):
        r = await client.post(
            "/secrets", json={"secret": "TOPSECRETVALUE"}, headers=auth_headers(permissions=WRITE)
        )

    assert r.status_code == 500
    assert "unhandled_exception" in caplog.text
    assert "disk full" in caplog.text
    assert "TOPSECRETVALUE" not in caplog.text
    assert "TOPSECRETVALUE" not in r.text

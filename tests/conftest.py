"""
tests.conftest

Shared fixtures.

Responsibilities:
- Build a test-mode app with a fixed HS256 secret.
- Mint bearer tokens for arbitrary subjects/permissions.
- Provide an httpx client bound to the ASGI app.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from secrets_api.api.app import create_app
from secrets_api.auth.jwt import issue_token, jwt_config
from secrets_api.settings import Settings

TEST_JWT_SECRET = "test-only-secret-with-enough-bytes-for-hs256"

TokenFactory = Callable[..., str]


@pytest.fixture
def settings() -> Settings:
    return Settings(env="test", jwt_secret=TEST_JWT_SECRET, log_level="WARNING")


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings=settings)


@pytest.fixture
def make_token(settings: Settings) -> TokenFactory:
    def _make(
        subject: str | None = "test-user-123",
        permissions: list[str] | str | None = None,
        **extra_claims: Any,
    ) -> str:
        return issue_token(
            cfg=jwt_config(settings),
            subject=subject,
            permissions=permissions,
            extra_claims=extra_claims or None,
        )

    return _make


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(make_token: TokenFactory) -> Callable[..., dict[str, str]]:
    # Same arguments as `make_token`, wrapped as an Authorization header.
    def _headers(*args: Any, **kwargs: Any) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(*args, **kwargs)}"}

    return _headers


# --- Module Notes -----------------------------------------------------------
# Each test gets a fresh app, so the in-memory stores start empty every time.

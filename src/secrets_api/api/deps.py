"""
secrets_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Hand out the services built in the composition root (`api.app.create_app`).
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from secrets_api.health.checks import HealthCheck
from secrets_api.services.names_service import NamesService
from secrets_api.services.secrets_service import SecretsService


def names_service(request: Request) -> NamesService:
    return request.app.state.names_service  # type: ignore[attr-defined]


def secrets_service(request: Request) -> SecretsService:
    return request.app.state.secrets_service  # type: ignore[attr-defined]


def health_checks(request: Request) -> list[HealthCheck]:
    return request.app.state.health_checks  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Services are process-lifetime singletons owned by the app; nothing here is request-scoped.

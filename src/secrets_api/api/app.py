"""
secrets_api.api.app

FastAPI app factory for the secrets API service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Construct the process-lifetime collaborators (stores, key provider,
  services, policies, health checks) and stash them on app.state.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from secrets_api import __version__
from secrets_api.api.errors import register_exception_handlers
from secrets_api.api.routers.dev_auth import router as dev_auth_router
from secrets_api.api.routers.health import router as health_router
from secrets_api.api.routers.names import router as names_router
from secrets_api.api.routers.secrets import router as secrets_router
from secrets_api.auth.jwt import auth0_base_url
from secrets_api.auth.permissions import build_policies
from secrets_api.health.checks import default_checks
from secrets_api.observability.logging import configure_logging, get_logger
from secrets_api.observability.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from secrets_api.security.encryption import EncryptionService, KeyProvider
from secrets_api.services.names_service import NamesService
from secrets_api.services.secrets_service import SecretsService
from secrets_api.settings import Settings
from secrets_api.storage.user_store import UserKeyedStore

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    app = FastAPI(
        title="Secrets API",
        version=__version__,
        docs_url="/docs" if settings.env != "prod" else None,
        openapi_url="/openapi.json" if settings.env != "prod" else None,
        lifespan=_lifespan(settings),
    )

    # Composition root: one store per item kind, owned by this app instance.
    encryption = EncryptionService(
        KeyProvider.from_settings(settings),
        purpose=settings.secret_protection_purpose,
    )
    app.state.settings = settings
    app.state.names_service = NamesService(store=UserKeyedStore[str]())
    app.state.secrets_service = SecretsService(store=UserKeyedStore[str](), encryption=encryption)
    app.state.policies = build_policies(permissions_claim=settings.permissions_claim)
    app.state.health_checks = default_checks(
        auth_provider_url=auth0_base_url(settings.auth0_domain) if settings.auth0_domain else None,
        timeout_seconds=settings.auth_provider_timeout_seconds,
    )

    expose_details = settings.env == "dev"
    register_exception_handlers(app, expose_details=expose_details)

    # Last added is outermost: CORS answers preflights before anything else runs, and
    # security headers wrap the request context so its error responses are hardened too.
    app.add_middleware(RequestContextMiddleware, expose_details=expose_details)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(names_router)
    app.include_router(secrets_router)

    return app


def _lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log.info(
            "startup",
            env=settings.env,
            auth_mode="auth0" if settings.uses_auth0 else "local",
            persistent_keys=bool(settings.data_protection_keys),
        )
        yield
        log.info("shutdown")

    return lifespan


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; business logic stays
# in services, auth and storage.

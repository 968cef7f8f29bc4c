"""
secrets_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, data protection keys).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration, safe defaults for local dev.

    Auth runs in one of two modes:
    - `auth0_domain` unset: HS256 tokens signed with `jwt_secret` (dev/test).
    - `auth0_domain` set: RS256 tokens verified against the tenant's JWKS.
    """

    model_config = SettingsConfigDict(env_prefix="SECRETS_API_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "secrets-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth (local HS256)
    jwt_alg: str = "HS256"
    jwt_issuer: str = "secrets-api"
    jwt_audience: str = "secrets-api"
    jwt_secret: str = Field(default="dev-secret-change-me-dev-secret-change-me", repr=False)

    # Auth (Auth0 RS256 + JWKS)
    auth0_domain: str | None = None
    auth0_audience: str | None = None
    auth_provider_timeout_seconds: float = 5.0

    # Claim types read from the validated token.
    user_id_claim: str = "sub"
    permissions_claim: str = "permissions"

    # Data protection. Empty means a random key per process (data dies with it).
    # The first key encrypts; every key can decrypt.
    data_protection_keys: list[str] = Field(default_factory=list, repr=False)
    secret_protection_purpose: str = "SecretProtection"

    cors_origins: list[str] = Field(
        default_factory=lambda: ["https://localhost:3000", "https://localhost:5001"]
    )

    @property
    def uses_auth0(self) -> bool:
        return bool(self.auth0_domain)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `Settings(env="test", ...)` directly and pass it to `create_app`;
# the cached instance is only used by the process entrypoint.

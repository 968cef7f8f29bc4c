"""
secrets_api.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue short-lived HS256 JWTs for local/dev scenarios and tests.
- Decode and validate JWTs with strict claim requirements (iss/aud/exp/iat).
- Resolve Auth0 signing keys from the tenant JWKS when configured.

Note:
- Auth0 access tokens are RS256; local tokens are HS256 with a shared secret.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import jwt
from jwt import PyJWKClient, PyJWTError

from secrets_api.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str
    jwks_url: str | None = None


class JwtValidationError(Exception):
    pass


def jwt_config(settings: Settings) -> JwtConfig:
    if settings.uses_auth0:
        domain = auth0_base_url(settings.auth0_domain or "")
        return JwtConfig(
            alg="RS256",
            issuer=f"{domain}/",
            audience=settings.auth0_audience or settings.jwt_audience,
            secret="",
            jwks_url=f"{domain}/.well-known/jwks.json",
        )
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


def auth0_base_url(domain: str) -> str:
    domain = domain.rstrip("/")
    if not domain.startswith(("https://", "http://")):
        domain = f"https://{domain}"
    return domain


@lru_cache(maxsize=8)
def _jwks_client(url: str) -> PyJWKClient:
    # PyJWKClient caches fetched keys; one client per JWKS url for the process.
    return PyJWKClient(url)


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str | None,
    permissions: list[str] | str | None = None,
    ttl: timedelta = timedelta(hours=1),
    extra_claims: dict[str, Any] | None = None,
) -> str:
    if cfg.jwks_url:
        raise JwtValidationError("cannot issue tokens for a JWKS-backed issuer")
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    if subject is not None:
        payload["sub"] = subject
    if permissions is not None:
        payload["permissions"] = permissions
    if extra_claims:
        payload.update(extra_claims)
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        key: Any = cfg.secret
        if cfg.jwks_url:
            key = _jwks_client(cfg.jwks_url).get_signing_key_from_jwt(token).key
        return jwt.decode(
            token,
            key,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                # `sub` is checked by the API layer so a missing one maps to 400, not 401.
                "require": ["exp", "iat", "iss", "aud"],
            },
        )
    except PyJWTError as e:
        raise JwtValidationError(str(e)) from e


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `api/routers/dev_auth.py` (dev convenience) and the tests.

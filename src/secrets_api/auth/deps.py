"""
secrets_api.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal`.
- Enforce named authorization policies via reusable dependency factories.
- Extract the caller's user id.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from secrets_api.auth.jwt import JwtValidationError, decode_and_validate, jwt_config
from secrets_api.auth.models import Principal
from secrets_api.auth.permissions import AuthorizationPolicy
from secrets_api.observability.logging import get_logger
from secrets_api.settings import Settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)
_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def settings_from_app(request: Request) -> Settings:
    # Settings passed to `create_app` win over the env-cached instance.
    return request.app.state.settings  # type: ignore[attr-defined]


def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_from_app),
) -> Principal:
    if creds is None or not creds.credentials:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token", headers=_CHALLENGE
        )

    try:
        payload = decode_and_validate(cfg=jwt_config(settings), token=creds.credentials)
    except JwtValidationError as e:
        log.info("token_rejected", reason=str(e))
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token", headers=_CHALLENGE
        ) from e

    return Principal.from_payload(payload, user_id_claim=settings.user_id_claim)


def current_user_id(principal: Principal = Depends(get_principal)) -> str:
    if not principal.user_id:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="User ID not found in token")
    return principal.user_id


def require_policy(policy_name: str):
    def _dep(request: Request, principal: Principal = Depends(get_principal)) -> Principal:
        policies: dict[str, AuthorizationPolicy] = request.app.state.policies  # type: ignore[attr-defined]
        policy = policies[policy_name]
        if not policy.evaluate(principal.claims):
            log.info("authorization_denied", policy=policy_name, user_id=principal.user_id)
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return principal

    return _dep


# --- Module Notes -----------------------------------------------------------
# Authentication failures are 401, policy non-success is 403, and a valid token
# without a user id is a 400 (the request cannot be partitioned).

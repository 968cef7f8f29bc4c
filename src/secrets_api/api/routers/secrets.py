"""
secrets_api.api.routers.secrets

Per-user encrypted secrets endpoints.

Responsibilities:
- Store a secret for the calling user (`POST /secrets`, policy `WriteSecrets`).
- Return the calling user's decrypted secrets (`GET /secrets`).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_201_CREATED

from secrets_api.api.deps import secrets_service
from secrets_api.api.schemas import SecretRequest
from secrets_api.auth.deps import current_user_id, require_policy
from secrets_api.auth.permissions import WRITE_SECRETS_POLICY
from secrets_api.services.secrets_service import SecretsService

router = APIRouter(prefix="/secrets", tags=["secrets"])


@router.post(
    "",
    status_code=HTTP_201_CREATED,
    response_class=Response,
    dependencies=[Depends(require_policy(WRITE_SECRETS_POLICY))],
)
async def add_secret(
    body: SecretRequest,
    user_id: str = Depends(current_user_id),
    service: SecretsService = Depends(secrets_service),
) -> Response:
    # The returned ciphertext is the secret's id; it is not exposed to callers.
    await service.add_secret(user_id, body.secret)
    return Response(status_code=HTTP_201_CREATED, headers={"Location": "/secrets"})


@router.get("", response_model=list[str])
async def get_secrets(
    user_id: str = Depends(current_user_id),
    service: SecretsService = Depends(secrets_service),
) -> list[str]:
    return await service.get_secrets(user_id)


# --- Module Notes -----------------------------------------------------------
# Encryption failures surface through `api.errors` as 500 "Failed to encrypt/decrypt data".

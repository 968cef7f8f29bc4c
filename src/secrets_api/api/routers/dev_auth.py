from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_404_NOT_FOUND

from secrets_api.auth.deps import settings_from_app
from secrets_api.auth.jwt import issue_token, jwt_config
from secrets_api.settings import Settings

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevTokenRequest(BaseModel):
    subject: str = Field(min_length=1, max_length=256)
    permissions: list[str] = Field(default_factory=list)
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/token", response_model=DevTokenResponse)
async def mint_dev_token(
    body: DevTokenRequest,
    settings: Settings = Depends(settings_from_app),
) -> DevTokenResponse:
    # Only local HS256 tokens can be minted; Auth0 tenants sign their own.
    if settings.env == "prod" or settings.uses_auth0:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")

    token = issue_token(
        cfg=jwt_config(settings),
        subject=body.subject,
        permissions=body.permissions,
        ttl=timedelta(minutes=body.ttl_minutes),
    )
    return DevTokenResponse(access_token=token)

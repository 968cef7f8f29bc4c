"""
secrets_api.api.routers.names

Per-user names endpoints.

Responsibilities:
- Store a name for the calling user (`POST /names`).
- List the calling user's names (`GET /names`).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_201_CREATED

from secrets_api.api.deps import names_service
from secrets_api.api.schemas import NameRequest
from secrets_api.auth.deps import current_user_id
from secrets_api.services.names_service import NamesService

router = APIRouter(prefix="/names", tags=["names"])


@router.post("", status_code=HTTP_201_CREATED, response_class=Response)
async def add_name(
    body: NameRequest,
    user_id: str = Depends(current_user_id),
    service: NamesService = Depends(names_service),
) -> Response:
    await service.add_name(user_id, body.name)
    return Response(status_code=HTTP_201_CREATED, headers={"Location": "/names"})


@router.get("", response_model=list[str])
async def get_names(
    user_id: str = Depends(current_user_id),
    service: NamesService = Depends(names_service),
) -> list[str]:
    return await service.get_names(user_id)

"""
secrets_api.api.errors

Exception handlers for the HTTP boundary.

Responsibilities:
- Map error kinds to status codes and problem-details payloads.
- Keep raw exception text out of responses outside dev.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from secrets_api.api.schemas import ProblemDetails
from secrets_api.errors import EncryptionError, InvalidArgumentError, OperationError
from secrets_api.observability.logging import get_logger

log = get_logger(__name__)

PROBLEM_JSON = "application/problem+json"


def problem_response(
    request: Request,
    *,
    status_code: int,
    title: str | None = None,
    detail: str | None = None,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ProblemDetails(
        title=title or HTTPStatus(status_code).phrase,
        status=status_code,
        detail=detail,
        instance=request.url.path,
        correlation_id=getattr(request.state, "request_id", None),
        errors=errors,
    )
    return JSONResponse(
        body.model_dump(exclude_none=True),
        status_code=status_code,
        media_type=PROBLEM_JSON,
        headers=headers,
    )


async def _http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return problem_response(
        request,
        status_code=exc.status_code,
        detail=str(exc.detail) if exc.detail else None,
        headers=getattr(exc, "headers", None),
    )


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Only loc/msg: pydantic's ctx may hold exception objects and echo rejected input.
    errors = [
        {"loc": [str(p) for p in e.get("loc", ())], "msg": str(e.get("msg", ""))}
        for e in exc.errors()
    ]
    return problem_response(
        request,
        status_code=HTTP_400_BAD_REQUEST,
        title="One or more validation errors occurred",
        errors=errors,
    )


async def _invalid_argument(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    log.error("invalid_argument", error=str(exc))
    return problem_response(
        request, status_code=HTTP_400_BAD_REQUEST, title="Bad Request", detail="Invalid request data"
    )


async def _encryption_error(request: Request, exc: EncryptionError) -> JSONResponse:
    log.error("encryption_error", operation=exc.operation)
    return problem_response(
        request,
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        title="Encryption Error",
        detail=f"Failed to {exc.operation} data",
    )


async def _operation_error(request: Request, exc: OperationError) -> JSONResponse:
    log.error("operation_error", error=str(exc))
    return problem_response(
        request,
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        title="Internal Server Error",
        detail="An error occurred while processing your request",
    )


def unhandled_error_response(
    request: Request, exc: Exception, *, expose_details: bool
) -> JSONResponse:
    log.error("unhandled_exception", exc_info=exc)
    return problem_response(
        request,
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        title="An error occurred while processing your request",
        detail=str(exc) if expose_details else None,
    )


def _unhandled(expose_details: bool):
    # Last resort for failures raised by middleware itself; endpoint failures are
    # turned into responses by `RequestContextMiddleware` so they keep its headers.
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        return unhandled_error_response(request, exc, expose_details=expose_details)

    return handler


def register_exception_handlers(app: FastAPI, *, expose_details: bool) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidArgumentError, _invalid_argument)  # type: ignore[arg-type]
    app.add_exception_handler(EncryptionError, _encryption_error)  # type: ignore[arg-type]
    app.add_exception_handler(OperationError, _operation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled(expose_details))


# --- Module Notes -----------------------------------------------------------
# Authorization non-success arrives here as a plain 403 HTTPException from
# `auth.deps.require_policy`; it is not an error kind of its own.

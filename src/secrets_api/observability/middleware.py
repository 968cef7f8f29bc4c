"""
secrets_api.observability.middleware

HTTP middleware for request-scoped logging context and response hardening.

Responsibilities:
- Generate/propagate request IDs.
- Bind request metadata into structlog contextvars.
- Emit one access log line per request.
- Attach security headers to every response.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from secrets_api.api.errors import unhandled_error_response
from secrets_api.observability.logging import get_logger

log = get_logger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'; frame-ancestors 'none'",
}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Ensures every request has a request id
    - Binds request-scoped contextvars for structured logs
    - Turns unexpected endpoint failures into a problem+json 500
    - Logs method/path/status/elapsed once the response is ready
    """

    def __init__(self, app: ASGIApp, *, expose_details: bool = False) -> None:
        super().__init__(app)
        self.expose_details = expose_details

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        started = time.perf_counter()
        try:
            try:
                response: Response = await call_next(request)
            except Exception as exc:
                response = unhandled_error_response(
                    request, exc, expose_details=self.expose_details
                )
            elapsed_ms = round((time.perf_counter() - started) * 1000, 4)
            _access_log(request.url.path, response.status_code)(
                "http_request", status_code=response.status_code, elapsed_ms=elapsed_ms
            )
        finally:
            # Avoid leaking context across requests under async concurrency.
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response


def _access_log(path: str, status_code: int):
    # Health probes are noisy; keep them out of the default log level.
    if path.startswith("/health"):
        return log.debug
    if status_code > 499:
        return log.error
    return log.info


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


# --- Module Notes -----------------------------------------------------------
# This middleware complements `observability.logging.configure_logging` by ensuring
# request metadata is present on every log line without explicit parameter threading.

"""
secrets_api.api.routers.health

Health, readiness and liveness endpoints.

Responsibilities:
- `/health`: every registered check.
- `/health/ready`: checks tagged `ready`.
- `/health/live`: checks tagged `live`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from secrets_api.api.deps import health_checks
from secrets_api.api.schemas import HealthEntryResponse, HealthReportResponse
from secrets_api.health.checks import HealthCheck, HealthReport, HealthStatus, run_checks

router = APIRouter(prefix="/health")


def _to_response(report: HealthReport) -> JSONResponse:
    body = HealthReportResponse(
        status=report.status.value,
        total_duration_ms=report.total_duration_ms,
        entries=[
            HealthEntryResponse(
                name=e.name,
                status=e.result.status.value,
                description=e.result.description,
                duration_ms=e.duration_ms,
                tags=sorted(e.tags),
                error=e.result.error,
            )
            for e in report.entries
        ],
    )
    status_code = (
        HTTP_200_OK if report.status is HealthStatus.healthy else HTTP_503_SERVICE_UNAVAILABLE
    )
    return JSONResponse(body.model_dump(exclude_none=True), status_code=status_code)


@router.get("", response_model=HealthReportResponse)
async def health(checks: list[HealthCheck] = Depends(health_checks)) -> JSONResponse:
    return _to_response(await run_checks(checks))


@router.get("/ready", response_model=HealthReportResponse)
async def ready(checks: list[HealthCheck] = Depends(health_checks)) -> JSONResponse:
    return _to_response(await run_checks(checks, tag="ready"))


@router.get("/live", response_model=HealthReportResponse)
async def live(checks: list[HealthCheck] = Depends(health_checks)) -> JSONResponse:
    return _to_response(await run_checks(checks, tag="live"))


# --- Module Notes -----------------------------------------------------------
# Kubernetes typically uses /health/live for liveness and /health/ready for readiness gating.

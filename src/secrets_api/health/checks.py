"""
secrets_api.health.checks

Health checks and report aggregation.

Responsibilities:
- `self` check: the process is serving.
- `auth_provider` check: the Auth0 tenant's discovery document is reachable.
- Run a tag-filtered subset of checks and aggregate them into one report.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

import httpx

from secrets_api.observability.logging import get_logger

log = get_logger(__name__)


class HealthStatus(str, Enum):
    healthy = "Healthy"
    unhealthy = "Unhealthy"


@dataclass(frozen=True, slots=True)
class HealthCheckResult:
    status: HealthStatus
    description: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, description: str | None = None) -> HealthCheckResult:
        return cls(HealthStatus.healthy, description)

    @classmethod
    def failed(cls, description: str, error: BaseException | None = None) -> HealthCheckResult:
        return cls(HealthStatus.unhealthy, description, str(error) if error else None)


@dataclass(frozen=True, slots=True)
class HealthCheck:
    name: str
    check: Callable[[], Awaitable[HealthCheckResult]]
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class HealthEntry:
    name: str
    result: HealthCheckResult
    duration_ms: float
    tags: frozenset[str]


@dataclass(frozen=True, slots=True)
class HealthReport:
    entries: tuple[HealthEntry, ...]
    total_duration_ms: float

    @property
    def status(self) -> HealthStatus:
        if all(e.result.status is HealthStatus.healthy for e in self.entries):
            return HealthStatus.healthy
        return HealthStatus.unhealthy


async def run_checks(checks: Sequence[HealthCheck], *, tag: str | None = None) -> HealthReport:
    started = time.perf_counter()
    entries: list[HealthEntry] = []
    for hc in checks:
        if tag is not None and tag not in hc.tags:
            continue
        t0 = time.perf_counter()
        try:
            result = await hc.check()
        except Exception as e:
            log.error("health_check_failed", check=hc.name, error=str(e))
            result = HealthCheckResult.failed("Health check raised an exception", e)
        entries.append(
            HealthEntry(
                name=hc.name,
                result=result,
                duration_ms=round((time.perf_counter() - t0) * 1000, 3),
                tags=hc.tags,
            )
        )
    return HealthReport(
        entries=tuple(entries),
        total_duration_ms=round((time.perf_counter() - started) * 1000, 3),
    )


async def _self_check() -> HealthCheckResult:
    return HealthCheckResult.ok("Process is serving")


class AuthProviderCheck:
    """
    Fetches `{domain}/.well-known/openid-configuration`.

    `transport` lets tests swap in `httpx.MockTransport`.
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/.well-known/openid-configuration"
        self._timeout = timeout_seconds
        self._transport = transport

    async def __call__(self) -> HealthCheckResult:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as http:
                r = await http.get(self._url)
        except httpx.InvalidURL as e:
            log.error("auth_provider_invalid_url", error=str(e))
            return HealthCheckResult.failed("Invalid auth provider configuration", e)
        except httpx.TimeoutException as e:
            log.error("auth_provider_check_timeout", url=self._url)
            return HealthCheckResult.failed("Auth provider health check timed out", e)
        except httpx.HTTPError as e:
            log.error("auth_provider_unreachable", url=self._url, error=str(e))
            return HealthCheckResult.failed("Failed to reach auth provider", e)

        if r.is_success:
            return HealthCheckResult.ok("Auth provider is reachable")
        return HealthCheckResult.failed(f"Auth provider returned status code: {r.status_code}")


def default_checks(
    *,
    auth_provider_url: str | None,
    timeout_seconds: float = 5.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[HealthCheck]:
    checks = [HealthCheck("self", _self_check, frozenset({"ready"}))]
    if auth_provider_url:
        checks.append(
            HealthCheck(
                "auth_provider",
                AuthProviderCheck(
                    base_url=auth_provider_url,
                    timeout_seconds=timeout_seconds,
                    transport=transport,
                ),
                frozenset({"ready", "live"}),
            )
        )
    return checks


# --- Module Notes -----------------------------------------------------------
# Without an Auth0 domain the service validates tokens locally, so there is no
# upstream to probe and only the `self` check is registered.

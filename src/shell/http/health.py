"""
Health endpoints for the SSR server.

Key behaviors:
- /health: overall status across registered checks (503 if any fails)
- /health/ready: same checks, shaped for readiness
- /health/live: process answers at all
- /metrics: request counters fed by the logging middleware
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Protocol

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class CheckResult:
    """Outcome of one check; details are omitted from the JSON when empty."""

    name: str
    status: HealthStatus
    message: str = ""
    latency_ms: float = 0.0
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        if not self.details:
            del data["details"]
        return data


class HealthCheck(Protocol):
    name: str

    def check(self) -> CheckResult: ...


class StartupTracker:
    """Set by the app lifespan; cleared again on shutdown."""

    _start_time: float | None = None

    @classmethod
    def mark_started(cls) -> None:
        cls._start_time = time.time()

    @classmethod
    def reset(cls) -> None:
        cls._start_time = None

    @classmethod
    def is_started(cls) -> bool:
        return cls._start_time is not None

    @classmethod
    def get_uptime_seconds(cls) -> float:
        return 0.0 if cls._start_time is None else time.time() - cls._start_time


# --- Metrics ---


@dataclass
class MetricsSnapshot:
    request_count: int = 0
    error_count: int = 0
    not_found_count: int = 0
    avg_response_time_ms: float = 0.0
    uptime_seconds: float = 0.0


class MetricsCollector:
    """In-memory request counters, bucketed by response status."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._by_status: dict[int, int] = {}
        self._total_ms = 0.0

    def record_request(self, response_time_ms: float, status_code: int) -> None:
        self._by_status[status_code] = self._by_status.get(status_code, 0) + 1
        self._total_ms += response_time_ms

    def get_snapshot(self) -> MetricsSnapshot:
        count = sum(self._by_status.values())
        return MetricsSnapshot(
            request_count=count,
            error_count=sum(n for code, n in self._by_status.items() if code >= 500),
            not_found_count=self._by_status.get(404, 0),
            avg_response_time_ms=self._total_ms / count if count else 0.0,
            uptime_seconds=StartupTracker.get_uptime_seconds(),
        )


# --- Checks ---


class HealthCheckRegistry:
    def __init__(self) -> None:
        self._checks: list[HealthCheck] = []

    def register(self, check: HealthCheck) -> None:
        self._checks.append(check)

    def run_all(self) -> list[CheckResult]:
        return [check.check() for check in self._checks]


class ProcessCheck:
    """Reports the serving process; healthy whenever it can answer."""

    name = "process"

    def check(self) -> CheckResult:
        return CheckResult(
            name=self.name,
            status=HealthStatus.HEALTHY,
            message="Process is running",
            details={"pid": os.getpid()},
        )


class StartupCheck:
    name = "startup"

    def check(self) -> CheckResult:
        if not StartupTracker.is_started():
            return CheckResult(self.name, HealthStatus.UNHEALTHY, "Startup not complete")
        return CheckResult(
            self.name,
            HealthStatus.HEALTHY,
            "Startup complete",
            details={"uptime_seconds": StartupTracker.get_uptime_seconds()},
        )


class LoaderCheck:
    """
    Runs a loader callable and reports whether it succeeded.

    Used for the HTML template and the site config; both loaders are
    cached, so a passing check costs a dictionary lookup.
    """

    def __init__(self, name: str, load: Callable[[], Any]) -> None:
        self.name = name
        self._load = load

    def check(self) -> CheckResult:
        start = time.perf_counter()
        try:
            self._load()
        except Exception as e:
            result = CheckResult(self.name, HealthStatus.UNHEALTHY, f"{type(e).__name__}: {e!s}")
        else:
            result = CheckResult(self.name, HealthStatus.HEALTHY, "Loaded")
        result.latency_ms = (time.perf_counter() - start) * 1000
        return result


# --- FastAPI Router ---


def create_health_router(
    registry: HealthCheckRegistry,
    metrics: MetricsCollector,
    version: str = "0.0.0",
) -> APIRouter:
    """Build the health/metrics router bound to one app's registry and counters."""
    router = APIRouter(tags=["health"])

    def _run() -> tuple[bool, list[dict[str, Any]], int]:
        results = registry.run_all()
        healthy = all(r.ok for r in results)
        code = status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE
        return healthy, [r.to_dict() for r in results], code

    @router.get("/health", response_model=None)
    def health_check() -> JSONResponse:
        healthy, checks, code = _run()
        overall = HealthStatus.HEALTHY if healthy else HealthStatus.UNHEALTHY
        return JSONResponse(
            content={
                "status": overall.value,
                "version": version,
                "uptime_seconds": StartupTracker.get_uptime_seconds(),
                "checks": checks,
            },
            status_code=code,
        )

    @router.get("/health/ready", response_model=None)
    def readiness_check() -> JSONResponse:
        ready, checks, code = _run()
        return JSONResponse(content={"ready": ready, "checks": checks}, status_code=code)

    @router.get("/health/live", response_model=None)
    def liveness_check() -> JSONResponse:
        return JSONResponse(
            content={"alive": True, "uptime_seconds": StartupTracker.get_uptime_seconds()}
        )

    @router.get("/metrics", response_model=None)
    def metrics_endpoint() -> JSONResponse:
        return JSONResponse(content=asdict(metrics.get_snapshot()))

    return router

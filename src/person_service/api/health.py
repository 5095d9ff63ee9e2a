"""Health check endpoints for the Person Service API."""

import asyncio
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import psutil
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from .store import PersonStore

router = APIRouter()


class HealthStatus(str, Enum):
    """Health check status types."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class HealthCheck:
    """Individual health check implementation."""

    def __init__(
        self,
        name: str,
        check_func: Callable[[], bool],
        timeout: int = 5,
        critical: bool = True,
    ):
        self.name = name
        self.critical = critical
        self.check_func = check_func
        self.timeout = timeout
        self.last_check: Optional[datetime] = None
        self.last_status: HealthStatus = HealthStatus.UNHEALTHY
        self.last_error: Optional[str] = None

    async def run(self) -> Dict[str, Any]:
        """Execute the health check in a worker thread."""
        start_time = datetime.now(timezone.utc)

        try:
            await asyncio.wait_for(asyncio.to_thread(self.check_func), timeout=self.timeout)
            self.last_status = HealthStatus.HEALTHY
            self.last_error = None
            status_detail = "OK"

        except asyncio.TimeoutError:
            self.last_status = HealthStatus.UNHEALTHY
            self.last_error = f"Health check timed out after {self.timeout}s"
            status_detail = self.last_error

        except Exception as e:
            self.last_status = HealthStatus.UNHEALTHY
            self.last_error = str(e)
            status_detail = f"Check failed: {e}"

        self.last_check = start_time
        duration_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000

        return {
            "name": self.name,
            "status": self.last_status,
            "critical": self.critical,
            "last_check": start_time.isoformat(),
            "duration_ms": duration_ms,
            "details": status_detail,
        }


class HealthCheckManager:
    """Runs the health checks of one application instance."""

    def __init__(self, store: PersonStore, memory_limit_percent: float = 90.0):
        self.store = store
        self.memory_limit_percent = memory_limit_percent
        self.checks: List[HealthCheck] = [
            HealthCheck("person_store", self._check_person_store),
            HealthCheck("resource_usage", self._check_resource_usage, critical=False),
        ]

    def _check_person_store(self) -> bool:
        """The store lock is not poisoned and a shared read succeeds."""
        if not self.store.is_available():
            raise RuntimeError("Person store lock is poisoned")
        self.store.count()
        return True

    def _check_resource_usage(self) -> bool:
        memory = psutil.virtual_memory()
        if memory.percent > self.memory_limit_percent:
            raise RuntimeError(f"High memory usage: {memory.percent:.1f}%")
        return True

    async def run_all_checks(self) -> Dict[str, Any]:
        """Run all health checks and return comprehensive status."""
        check_results = await asyncio.gather(*(check.run() for check in self.checks))

        failed = [
            check
            for check, result in zip(self.checks, check_results)
            if result["status"] != HealthStatus.HEALTHY
        ]
        total_checks = len(self.checks)
        healthy_count = total_checks - len(failed)

        # A failed critical check makes the service unusable; the rest only degrade it
        if not failed:
            overall_status = HealthStatus.HEALTHY
        elif any(check.critical for check in failed):
            overall_status = HealthStatus.UNHEALTHY
        else:
            overall_status = HealthStatus.DEGRADED

        return {
            "status": overall_status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": list(check_results),
            "summary": {
                "total_checks": total_checks,
                "healthy_checks": healthy_count,
                "failed_checks": total_checks - healthy_count,
            },
        }


def format_uptime(start_time: float) -> str:
    """Format uptime as human readable string."""
    uptime_seconds = int(time.time() - start_time)
    days = uptime_seconds // 86400
    hours = (uptime_seconds % 86400) // 3600
    minutes = (uptime_seconds % 3600) // 60
    seconds = uptime_seconds % 60

    return f"{days}d {hours}h {minutes}m {seconds}s"


@router.get("/health", response_class=PlainTextResponse)
def health() -> str:
    """Liveness probe. Always answers ``OK`` while the process serves requests."""
    return "OK"


@router.get("/health/detailed")
async def detailed_health_check(request: Request) -> Dict[str, Any]:
    """
    Comprehensive health check with detailed status information.

    Reports the person store state and host resource usage along with
    the service version and uptime.
    """
    from .. import __version__

    report = await request.app.state.health_manager.run_all_checks()
    report["version"] = __version__
    report["uptime"] = format_uptime(request.app.state.start_time)
    return report

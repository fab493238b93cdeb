"""/health payload for the alerts job and its store, cache and quote feed."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

DependencyState = Literal["healthy", "degraded", "down"]
ServiceState = Literal["healthy", "degraded", "unhealthy"]

SLOW_DEPENDENCY_MS = 1000.0


class DependencyHealth(BaseModel):
    """Result of checking one dependency (db, redis, finnhub)."""

    status: DependencyState
    latency_ms: float | None = None
    message: str | None = None

    @classmethod
    def measured(cls, latency_ms: float) -> "DependencyHealth":
        """Reachable; degraded when slower than SLOW_DEPENDENCY_MS."""
        status: DependencyState = "healthy" if latency_ms < SLOW_DEPENDENCY_MS else "degraded"
        return cls(status=status, latency_ms=round(latency_ms, 1))

    @classmethod
    def down(cls, latency_ms: float, message: str) -> "DependencyHealth":
        return cls(status="down", latency_ms=round(latency_ms, 1), message=message[:200])


class HealthStatus(BaseModel):
    service: str
    status: ServiceState
    uptime_seconds: float
    version: str = "1.0.0"
    dependencies: dict[str, DependencyHealth] = {}
    timestamp: datetime

    @staticmethod
    def overall(dependencies: dict[str, DependencyHealth]) -> ServiceState:
        """Any dependency down makes the service unhealthy; any slow one degrades it."""
        states = {d.status for d in dependencies.values()}
        if "down" in states:
            return "unhealthy"
        if "degraded" in states:
            return "degraded"
        return "healthy"

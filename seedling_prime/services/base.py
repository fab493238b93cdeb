"""FastAPI app factory — shared health check and error handlers.

Usage:
    from seedling_prime.services.base import create_app

    app = create_app("alerts-job", version="1.0.0", dependencies=["redis", "db"])
"""

import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from seedling_prime.domain.health import DependencyHealth, HealthStatus

logger = logging.getLogger(__name__)

_start_time: float = 0.0


def create_app(
    service_name: str,
    *,
    version: str = "1.0.0",
    lifespan: Callable | None = None,
    dependencies: list[str] | None = None,
) -> FastAPI:
    """Build a FastAPI app with /health and the common error handlers.

    Args:
        service_name: service identifier, e.g. "alerts-job"
        version: reported by /health
        lifespan: optional startup/shutdown context manager, nested inside the default one
        dependencies: names checked by /health ("redis", "db", "finnhub")
    """
    deps = dependencies or []

    @asynccontextmanager
    async def wrapped_lifespan(app: FastAPI) -> AsyncIterator[None]:
        global _start_time
        _start_time = time.monotonic()
        logger.info("[%s] Starting v%s", service_name, version)
        if lifespan:
            async with lifespan(app):
                yield
        else:
            yield
        logger.info("[%s] Shutting down", service_name)

    app = FastAPI(
        title=f"seedling-prime {service_name}",
        version=version,
        lifespan=wrapped_lifespan,
    )

    # --- Error Handlers ---

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": exc.errors(include_url=False), "message": "Validation error"},
        )

    @app.exception_handler(httpx.HTTPStatusError)
    async def http_status_error_handler(request: Request, exc: httpx.HTTPStatusError) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={
                "detail": str(exc),
                "message": f"Upstream error: {exc.response.status_code}",
            },
        )

    # --- Health Check ---

    @app.get("/health")
    async def health() -> HealthStatus:
        dep_health = {dep: _check_dependency(dep) for dep in deps}

        return HealthStatus(
            service=service_name,
            status=HealthStatus.overall(dep_health),
            uptime_seconds=time.monotonic() - _start_time,
            version=version,
            dependencies=dep_health,
            timestamp=datetime.now(UTC),
        )

    return app


def _check_dependency(name: str) -> DependencyHealth:
    start = time.monotonic()
    try:
        if name == "redis":
            from seedling_prime.infra.redis.client import get_redis

            get_redis().ping()
        elif name == "db":
            from sqlalchemy import text

            from seedling_prime.infra.database.engine import get_engine

            with get_engine().connect() as conn:
                conn.execute(text("SELECT 1"))
        elif name == "finnhub":
            from seedling_prime.infra.finnhub.client import FinnhubClient

            with FinnhubClient() as client:
                if not client.health():
                    return DependencyHealth.down(
                        (time.monotonic() - start) * 1000, "Finnhub unreachable or API key rejected"
                    )
        else:
            return DependencyHealth(status="healthy", message=f"Unknown dep: {name}")

        return DependencyHealth.measured((time.monotonic() - start) * 1000)

    except Exception as e:
        return DependencyHealth.down((time.monotonic() - start) * 1000, str(e))

"""Admin API endpoints - health, metrics, system info."""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from assetsig.api.dependencies import AppSettings
from assetsig.common.exceptions import ServiceUnavailableError
from assetsig.common.health import HealthChecker, HealthStatus

router = APIRouter(prefix="/admin", tags=["admin"])


def get_health_checker(request: Request) -> HealthChecker:
    """Get the health checker created at startup."""
    checker = getattr(request.app.state, "health_checker", None)
    if checker is None:
        raise ServiceUnavailableError("Health checker not initialized")
    return checker


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    """Complete health check endpoint.

    Returns detailed health status of all components.
    """
    result = await get_health_checker(request).readiness()
    return result.to_dict()


@router.get("/health/live")
async def liveness() -> dict[str, str]:
    """Kubernetes liveness probe.

    Returns 200 if the process is alive.
    """
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness(request: Request) -> Any:
    """Kubernetes readiness probe.

    Returns 503 when the database cannot be reached.
    """
    result = await get_health_checker(request).readiness()

    if result.status == HealthStatus.UNHEALTHY:
        return JSONResponse(content=result.to_dict(), status_code=503)

    return result.to_dict()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


@router.get("/info")
async def info(settings: AppSettings) -> dict[str, Any]:
    """Application info endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "debug": settings.debug,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "features": {
            "preserve_empty_token": settings.inventory.preserve_empty_token,
        },
    }

"""Health check contract for AssetSig.

Provides standardized health check responses for Kubernetes probes
and monitoring systems.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from assetsig.common.database import Database


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    """Health status of a single component."""

    name: str
    status: HealthStatus
    message: str | None = None
    latency_ms: float | None = None


@dataclass
class HealthResponse:
    """Complete health check response."""

    status: HealthStatus
    timestamp: datetime
    service: str
    version: str
    components: list[ComponentHealth] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
            "service": self.service,
            "version": self.version,
            "components": [
                {
                    "name": c.name,
                    "status": c.status.value,
                    "message": c.message,
                    "latency_ms": c.latency_ms,
                }
                for c in self.components
            ],
        }


class HealthChecker:
    """Health check manager for the API service."""

    def __init__(self, service_name: str, version: str, database: Database) -> None:
        self.service_name = service_name
        self.version = version
        self.database = database

    async def check_database(self) -> ComponentHealth:
        """Check database connectivity."""
        start = time.perf_counter()
        is_healthy = await self.database.check_connection()
        latency = round((time.perf_counter() - start) * 1000, 2)

        if is_healthy:
            return ComponentHealth(
                name="database",
                status=HealthStatus.HEALTHY,
                message="Database connection successful",
                latency_ms=latency,
            )
        return ComponentHealth(
            name="database",
            status=HealthStatus.UNHEALTHY,
            message="Database connection failed",
            latency_ms=latency,
        )

    async def readiness(self) -> HealthResponse:
        """Kubernetes readiness probe - can the service handle requests?"""
        db_health = await self.check_database()

        return HealthResponse(
            status=db_health.status,
            timestamp=datetime.now(timezone.utc),
            service=self.service_name,
            version=self.version,
            components=[db_health],
        )

"""
Health check endpoints for monitoring and readiness probes.

- Liveness probe: /health (basic "is the server running" check)
- Readiness probe: /health/ready (checks the storage backend)
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Response, status

from navsite.core.probes import check_storage
from navsite.schemas.health import (
    HealthResponse,
    ReadinessChecks,
    ReadinessResponse,
    StorageCheck,
)


router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
)
async def health_check() -> HealthResponse:
    """
    Basic liveness probe.

    Always returns 200 while the application is running.
    """
    return HealthResponse(timestamp=datetime.now(timezone.utc))


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
)
async def readiness_check(response: Response) -> ReadinessResponse:
    """
    Readiness probe.

    Returns 200 when the storage backend answers, 503 otherwise.

    Example response (unhealthy):
        {
            "status": "not_ready",
            "checks": {
                "storage": {"healthy": false, "latency_ms": 2000.0, "error": "..."}
            },
            "timestamp": "2025-11-24T10:30:00.123456Z"
        }
    """
    start = time.perf_counter()
    storage_healthy = await check_storage()
    latency_ms = (time.perf_counter() - start) * 1000

    storage = StorageCheck(
        healthy=storage_healthy,
        latency_ms=round(latency_ms, 2),
        error=None if storage_healthy else "Storage unreachable or timed out",
    )

    if not storage_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status="ready" if storage_healthy else "not_ready",
        checks=ReadinessChecks(storage=storage),
        timestamp=datetime.now(timezone.utc),
    )

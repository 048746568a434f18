"""
Response bodies of the liveness and readiness endpoints.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """``GET /health``: the process is up."""

    status: Literal["ok"] = "ok"
    timestamp: datetime


class StorageCheck(BaseModel):
    """Outcome of the ``SELECT 1`` probe against the key-value database."""

    healthy: bool
    latency_ms: float
    error: Optional[str] = None


class ReadinessChecks(BaseModel):
    storage: StorageCheck


class ReadinessResponse(BaseModel):
    """``GET /health/ready``: 200 when ``ready``, 503 when ``not_ready``."""

    status: Literal["ready", "not_ready"]
    checks: ReadinessChecks
    timestamp: datetime

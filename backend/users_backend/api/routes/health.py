"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns the store health report; 503 when status is down

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from users_backend.core.domain_types import HealthStatus
from users_backend.core.repository_protocols import UserStore
from users_backend.infrastructure.database import get_db_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "users-backend",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(store: UserStore = Depends(get_db_service)):
    """Readiness probe — store ping plus pool statistics."""
    report = await store.health()
    if report.status is HealthStatus.DOWN:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=report.model_dump(mode="json", exclude_none=True),
        )
    return report.model_dump(mode="json")

"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health/ always returns 200 if the process is up (liveness)
    - GET /api/health/ready returns 503 if either datastore is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from the
      load balancer (ADR: production readiness)
    - Managers read through the module at request time: they are created in the lifespan
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pvs_api.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "pvs-api",
        "version": "1.0.0",
    }


async def _check(manager) -> bool:
    return await manager.health_check() if manager else False


@router.get("/ready")
async def readiness_check():
    """Readiness probe — both datastores must answer."""
    checks = {
        "database": await _check(database.db_manager),
        "domani_database": await _check(database.domani_manager),
    }
    if not all(checks.values()):
        unavailable = [name for name, ok in checks.items() if not ok]
        logger.warning(f"Readiness failed: {', '.join(unavailable)}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": f"{unavailable[0]}_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {name: "healthy" for name in checks},
    }

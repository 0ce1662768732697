"""Health & Readiness Probes — is the process up, can it answer filter queries.

Invariants:
    - GET /api/v1/health/ is 200 whenever the process runs (liveness)
    - GET /api/v1/health/ready is 503 until the database answers (readiness)
    - db_manager is read at call time: it is assigned by the lifespan, after import
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import filterscope.infrastructure.database as database
from filterscope.services.resource_registry import resource_registry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "filterscope-api"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "resources": resource_registry.names(),
    }


@router.get("/ready")
async def readiness():
    """503 with a reason while the database is unreachable."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        logger.warning("Readiness probe failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}

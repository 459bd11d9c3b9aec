"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /ping always returns 200 "pong" (text/plain) if the process is up
    - GET /health/ready returns 503 if the document store is unreachable

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from the
      load balancer
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from perspective.api.dependencies import get_database
from perspective.infrastructure.database import MongoDatabase

router = APIRouter(tags=["health"])


@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    """Liveness probe."""
    return PlainTextResponse("pong")


@router.get("/health/ready")
async def readiness_check(database: MongoDatabase | None = Depends(get_database)):
    """Readiness probe — includes document store connectivity."""
    db_ok = await database.health_check() if database else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}

"""Health Probe — liveness plus store connectivity.

Invariants:
    - GET /health returns 200 {status: "ok"} whenever the store answers SELECT 1
    - Unreachable store → 503 SERVICE_UNAVAILABLE in the failure envelope
    - Bypasses validation and the stores; idempotent

Design Decisions:
    - Always verify the store: a health check that ignores its only dependency
      reports healthy while every write fails
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from app.api.deps import get_database
from app.core.errors import ApiError, ErrorKind
from app.infrastructure.database import Database
from app.schemas.envelope import HealthStatus, SuccessEnvelope

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "", response_model=SuccessEnvelope[HealthStatus],
    status_code=status.HTTP_200_OK,
)
@router.get("/", include_in_schema=False)
async def health_check(database: Database = Depends(get_database)):
    """Liveness probe that also checks database connectivity."""
    if not await database.health_check():
        raise ApiError(
            ErrorKind.SERVICE_UNAVAILABLE, "Database connection unavailable",
        )
    return SuccessEnvelope(
        data=HealthStatus(timestamp=datetime.now(timezone.utc)),
    )

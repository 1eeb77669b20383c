"""Liveness plus a check that the calendar schema is in place."""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION
from core.database import database_ready

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check():
    """
    503 until init_db has created the events table.

    The check opens the database read-write without creating it, so polling
    a fresh deployment does not leave an empty file behind.
    """
    ready = database_ready()
    report = HealthResponse(
        status="healthy" if ready else "unhealthy",
        version=API_VERSION,
        database_available=ready,
        timestamp=datetime.now(timezone.utc).isoformat(),
        error=None if ready else "Database not initialized",
    )
    if not ready:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=report.model_dump(),
        )
    return report

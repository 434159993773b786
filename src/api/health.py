"""Health check endpoint."""

from typing import Literal

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from src.infrastructure.database import Database

logger = structlog.get_logger()
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["healthy", "unhealthy"]
    version: str


@router.get("", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Report healthy when the database answers a trivial query.

    Raises:
        HTTPException: 503 if the database is unavailable.
    """
    database: Database = request.app.state.database
    try:
        await database.execute("SELECT 1")
    except Exception as e:
        logger.error("health_check_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(
            status_code=503,
            detail=f"Service unhealthy: {type(e).__name__}",
        ) from e

    return HealthResponse(status="healthy", version=request.app.version)

"""
Health Check API Routes

Reports whether the service and its database are reachable.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from weighbridge.api.deps import SessionDep
from weighbridge.core.config import settings
from weighbridge.core.observability import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/health", summary="Service health")
def get_health_status(session: SessionDep) -> JSONResponse:
    """Check the database connection and report overall status."""
    try:
        session.connection().execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "unreachable"},
        )

    return JSONResponse(
        content={
            "status": "healthy",
            "database": "ok",
            "environment": settings.ENVIRONMENT,
        }
    )

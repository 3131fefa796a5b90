import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from housing.core.config import settings
from housing.db import SessionDep
from housing.schemas import ApiResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=ApiResponse[dict], summary="Liveness probe", tags=["health"])
def read_health() -> ApiResponse[dict]:
    return ApiResponse.create({"status": "ok", "service": settings.PROJECT_NAME})


@router.get("/ready", summary="Readiness probe", tags=["health"])
def read_ready(session: SessionDep):
    """Report whether the housing database answers queries."""
    try:
        session.connection().execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        message = str(e) if settings.ENVIRONMENT == "development" else "Database unavailable"
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"code": status.HTTP_503_SERVICE_UNAVAILABLE, "message": message},
        )
    return ApiResponse.create({"status": "ready", "database": "connected"})

"""Health check endpoint with database connectivity check. No token required."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from postboard.core.config import settings
from postboard.core.database import check_db_connected, get_db
from postboard.core.responses import success
from postboard.schemas.health import HealthStatus

router = APIRouter()


@router.get("")
def get_health(db: Annotated[Session, Depends(get_db)]) -> JSONResponse:
    """
    Report environment and database reachability.
    Used by load balancers and monitoring; always 200, the payload carries the status.
    """
    health = HealthStatus(
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
    return success({"health": health}, "Service is running")

# api/health.py
# Liveness endpoint reporting whether the database is usable.

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import schemas
from app.core.state import ServiceState, get_service_state
from app.db.session import get_db

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/health", response_model=schemas.HealthStatus, responses={503: {"model": schemas.HealthStatus}})
def health(request: Request, db: Session = Depends(get_db)):
    """
    Report service and database status.
    """
    if get_service_state(request) is not ServiceState.READY:
        return JSONResponse(status_code=503, content={"status": "Database not initialized"})

    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check query failed: {e}")
        return JSONResponse(status_code=503, content={"status": "Database unavailable"})

    return {"status": "OK", "database": "Connected"}

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sensordata import __version__
from sensordata.database import get_db

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

@router.get("/healthz")
def liveness():
    """Process is up; does not touch the database"""
    return {"status": "ok", "version": __version__}

@router.get("/api/v1/health")
def readiness(db: Session = Depends(get_db)):
    """Process is up and the database answers a trivial query"""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {str(e)}")
        return JSONResponse(status_code=503, content={"status": "unavailable", "database": "error"})
    return {"status": "ok", "database": "ok"}

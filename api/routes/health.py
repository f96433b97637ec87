"""Health check routes"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db

router = APIRouter(tags=["Health"])
logger = logging.getLogger("diettrack.api.health")


@router.get("/health-check")
def health_check(request: Request, db: Session = Depends(get_db)):
    """Basic health check endpoint, including a database round trip"""
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.exception("Database health check failed")
        database = f"error: {type(e).__name__}"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "service": request.app.title,
        "database": database,
    }

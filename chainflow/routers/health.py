"""
Health Router — liveness and readiness probes
"""
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from chainflow.config import settings
from chainflow.database import engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


def _database_check() -> dict:
    if not settings.READINESS_CHECK_DATABASE:
        return {"enabled": False, "ok": True, "error": None}
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("readiness_database_check_failed error=%s", exc)
        error = str(exc) if settings.expose_error_details else "database unavailable"
        return {"enabled": True, "ok": False, "error": error}
    return {"enabled": True, "ok": True, "error": None}


@router.get("/")
def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "status": "running",
    }


@router.get("/health")
def health_check():
    return {"status": "healthy", "app": settings.APP_NAME}


@router.get("/ready")
def readiness_check(request: Request):
    """Returns 503 until the database answers, so orchestrators hold traffic."""
    database = _database_check()
    ready = database["ok"]
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "request_id": getattr(request.state, "request_id", None),
            "checks": {"database": database},
        },
    )

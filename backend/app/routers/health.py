import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.config import settings
from app.services.storage import default_client_provider

logger = logging.getLogger("app.health")

router = APIRouter(prefix="/api/health", tags=["health"])


def _database_ok(db: Session) -> bool:
    try:
        db.execute(text("select 1"))
        return True
    except SQLAlchemyError:
        logger.warning("health.database_unavailable", exc_info=True)
        return False


def _storage_state() -> str:
    if not settings.storage_configured:
        return "not_configured"
    # Only report on an existing client; a probe must not build one
    if not default_client_provider.initialized:
        return "configured"
    return "connected" if default_client_provider.is_connected() else "disconnected"


@router.get("")
def health(db: Session = Depends(get_db)):
    db_ok = _database_ok(db)
    return {
        "status": "healthy" if db_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {
            "database": "connected" if db_ok else "disconnected",
            "storage": _storage_state(),
        },
        "version": settings.version,
        "environment": settings.env,
    }


@router.get("/live")
def live():
    return {"status": "alive"}


@router.get("/ready")
def ready(db: Session = Depends(get_db)):
    if not _database_ok(db):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database"},
        )
    return {"status": "ready"}

# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db.session import init_db
from app.middleware.request_logging import RequestLoggingMiddleware
from app.routers.health import router as health_router
from app.routers.evidence import router as evidence_router
from app.routers.root import router as root_router
from app.routers.users import router as users_router
from app.core.exception_handlers import (
    app_error_handler,
    request_validation_handler,
    storage_error_handler,
    unhandled_exception_handler,
)
from app.core import AppError, StorageError

configure_logging()

logger = logging.getLogger("app.main")


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # SQLite has no migration step; create tables on boot
    if settings.DATABASE_URL.startswith("sqlite"):
        init_db()
    if not settings.storage_configured:
        logger.warning("storage.not_configured", extra={"network": settings.FILECOIN_NETWORK})
    yield


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

    app.add_middleware(RequestLoggingMiddleware)

    # ---- CORS (env-driven) ----
    # CORS_ALLOW_ORIGINS="http://localhost:3000,https://witnesschain.example"
    allow_origins = _split_csv(settings.CORS_ALLOW_ORIGINS)

    # If you use cookies/credentials, do NOT use "*"
    # If allow_origins is empty, default to localhost only.
    if not allow_origins:
        allow_origins = ["http://localhost:3000"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routers
    app.include_router(root_router)
    app.include_router(health_router)
    app.include_router(evidence_router)
    app.include_router(users_router)

    return app


app = create_app()

"""
exception_handlers.py
- Purpose: Convert AppError, StorageError (and generic exceptions) into consistent API responses.

Also logs errors with request context so failures are diagnosable.
Technical messages stay server-side; clients get the user-facing text.
"""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.core import AppError, ErrorCode, ErrorReason, StorageError, StorageErrorCode
from app.core.config import settings

logger = logging.getLogger("app.exceptions")

STORAGE_STATUS = {
    StorageErrorCode.EMPTY_FILE: status.HTTP_400_BAD_REQUEST,
    StorageErrorCode.INVALID_DATA: status.HTTP_400_BAD_REQUEST,
    StorageErrorCode.FILE_TOO_LARGE: 413,
    StorageErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def storage_status_code(code: StorageErrorCode) -> int:
    return STORAGE_STATUS.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    status_code = storage_status_code(exc.code)
    logger.warning(
        "storage_error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": status_code,
            "code": exc.code.value,
            "technical_message": exc.technical_message,
            "details": exc.details,
        },
    )
    body = exc.to_dict()
    if settings.is_development and exc.details:
        body["details"] = exc.details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "app_error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
            "code": exc.code,
            "reason": exc.reason,
            "technical_message": exc.message,
        },
    )
    body = exc.to_dict()
    if settings.is_development and exc.details:
        body["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(body))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(
        "request_validation_failed",
        extra={"path": request.url.path, "method": request.method, "error_count": len(exc.errors())},
    )
    code = ErrorCode.VALIDATION_ERROR.value
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": code,
            "code": code,
            "message": ErrorReason.INVALID_INPUT.value,
            "details": jsonable_encoder(exc.errors(), exclude={"input", "ctx", "url"}),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_exception",
        extra={"path": request.url.path, "method": request.method},
    )
    code = ErrorCode.INTERNAL_ERROR.value
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": code, "code": code, "message": "Internal server error"},
    )

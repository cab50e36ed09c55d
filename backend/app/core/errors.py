"""
errors.py
- Purpose: AppError used across services/repos/routers for consistent API errors.
- Pattern: raise AppError(...) in service/repo, handler converts to JSON response.
- Storage failures use StorageError (app.core.storage_errors) instead.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi import status as http_status
from app.core.error_codes import ErrorCode
from app.core.error_reasons import ErrorReason


@dataclass(eq=False)
class AppError(Exception):
    code: ErrorCode
    reason: str
    status_code: int = http_status.HTTP_400_BAD_REQUEST
    details: dict[str, Any] | None = None
    message: str | None = None  # Optional technical message, logged only

    def __post_init__(self) -> None:
        super().__init__(self.message or _text(self.reason))

    def to_dict(self) -> dict[str, Any]:
        code = _text(self.code)
        return {"error": code, "code": code, "message": _text(self.reason)}


def _text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


# Convenience constructors (keeps services/routers terse)
def bad_request(reason: str = ErrorReason.BAD_REQUEST, *, code: ErrorCode = ErrorCode.BAD_REQUEST, details: dict | None = None) -> AppError:
    return AppError(code=code, reason=reason, status_code=http_status.HTTP_400_BAD_REQUEST, details=details)


def unauthorized(reason: str = ErrorReason.AUTH_REQUIRED, *, message: str | None = None) -> AppError:
    return AppError(code=ErrorCode.UNAUTHORIZED, reason=reason, status_code=http_status.HTTP_401_UNAUTHORIZED, message=message)


def forbidden(reason: str = ErrorReason.AUTH_FORBIDDEN) -> AppError:
    return AppError(code=ErrorCode.FORBIDDEN, reason=reason, status_code=http_status.HTTP_403_FORBIDDEN)


def not_found(reason: str = ErrorReason.RESOURCE_NOT_FOUND, *, details: dict | None = None) -> AppError:
    return AppError(code=ErrorCode.NOT_FOUND, reason=reason, status_code=http_status.HTTP_404_NOT_FOUND, details=details)


def internal_error(reason: str = ErrorReason.UNKNOWN, *, code: ErrorCode = ErrorCode.INTERNAL_ERROR, message: str | None = None) -> AppError:
    return AppError(code=code, reason=reason, status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR, message=message)


def conflict(reason: str = ErrorReason.ALREADY_EXISTS, *, details: dict | None = None) -> AppError:
    return AppError(code=ErrorCode.CONFLICT, reason=reason, status_code=http_status.HTTP_409_CONFLICT, details=details)

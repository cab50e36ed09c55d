# app/core/__init__.py
from app.core.errors import AppError
from app.core.error_codes import ErrorCode
from app.core.error_reasons import ErrorReason
from app.core.storage_errors import StorageError, StorageErrorCode

__all__ = ["AppError", "ErrorCode", "ErrorReason", "StorageError", "StorageErrorCode"]

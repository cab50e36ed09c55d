"""
storage_errors.py
- Purpose: Closed error taxonomy for the Filecoin storage boundary.
- Pattern: every failure leaving app.services.storage is a StorageError whose
  user_message comes from STORAGE_USER_MESSAGES (or an explicit override).
- technical_message and details are for server-side logs only; the HTTP layer
  renders to_dict(), which carries neither.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class StorageErrorCode(str, Enum):
    # Client configuration
    CLIENT_NOT_CONFIGURED = "STORAGE_CLIENT_NOT_CONFIGURED"
    INSUFFICIENT_FUNDS = "STORAGE_INSUFFICIENT_FUNDS"

    # Upload
    UPLOAD_FAILED = "STORAGE_UPLOAD_FAILED"
    UPLOAD_TIMEOUT = "STORAGE_UPLOAD_TIMEOUT"
    FILE_TOO_LARGE = "STORAGE_FILE_TOO_LARGE"
    EMPTY_FILE = "STORAGE_EMPTY_FILE"

    # Retrieval
    RETRIEVAL_FAILED = "STORAGE_RETRIEVAL_FAILED"
    NOT_FOUND = "STORAGE_NOT_FOUND"
    RETRIEVAL_TIMEOUT = "STORAGE_RETRIEVAL_TIMEOUT"

    # Deals
    DEAL_FAILED = "STORAGE_DEAL_FAILED"
    DEAL_TIMEOUT = "STORAGE_DEAL_TIMEOUT"

    # Validation
    INVALID_CID = "STORAGE_INVALID_CID"
    MISSING_CID = "STORAGE_MISSING_CID"
    INVALID_DATA = "STORAGE_INVALID_DATA"

    # Network
    NETWORK_ERROR = "STORAGE_NETWORK_ERROR"
    PROVIDER_UNAVAILABLE = "STORAGE_PROVIDER_UNAVAILABLE"

    UNKNOWN = "STORAGE_UNKNOWN_ERROR"


STORAGE_USER_MESSAGES: Mapping[StorageErrorCode, str] = MappingProxyType(
    {
        StorageErrorCode.CLIENT_NOT_CONFIGURED: "Storage service is not properly configured. Please contact support.",
        StorageErrorCode.INSUFFICIENT_FUNDS: "Insufficient funds for storage. Please try again later.",
        StorageErrorCode.UPLOAD_FAILED: "Failed to upload evidence. Please try again.",
        StorageErrorCode.UPLOAD_TIMEOUT: "Upload timed out. Please check your connection and try again.",
        StorageErrorCode.FILE_TOO_LARGE: "File is too large. Maximum size is 200MB.",
        StorageErrorCode.EMPTY_FILE: "Cannot store empty file.",
        StorageErrorCode.RETRIEVAL_FAILED: "Failed to retrieve evidence. Please try again.",
        StorageErrorCode.NOT_FOUND: "Evidence not found in storage.",
        StorageErrorCode.RETRIEVAL_TIMEOUT: "Retrieval timed out. Please try again.",
        StorageErrorCode.DEAL_FAILED: "Storage deal failed. Please try again later.",
        StorageErrorCode.DEAL_TIMEOUT: "Storage deal timed out. Please try again.",
        StorageErrorCode.INVALID_CID: "Invalid storage identifier.",
        StorageErrorCode.MISSING_CID: "Storage provider did not return an identifier. Please try again.",
        StorageErrorCode.INVALID_DATA: "Invalid data format.",
        StorageErrorCode.NETWORK_ERROR: "Network error. Please check your connection.",
        StorageErrorCode.PROVIDER_UNAVAILABLE: "Storage provider unavailable. Please try again later.",
        StorageErrorCode.UNKNOWN: "An unexpected storage error occurred. Please try again.",
    }
)


@dataclass(eq=False)
class StorageError(Exception):
    code: StorageErrorCode
    technical_message: str
    user_message: str | None = None
    details: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.user_message is None:
            self.user_message = STORAGE_USER_MESSAGES[self.code]
        super().__init__(self.technical_message)
        self._sealed = True

    def __setattr__(self, name: str, value: Any) -> None:
        # Fields are fixed once built; exception dunders (__cause__, __traceback__) stay writable
        if getattr(self, "_sealed", False) and name in _STORAGE_ERROR_FIELDS:
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        super().__setattr__(name, value)

    def __str__(self) -> str:
        return self.technical_message

    def to_dict(self) -> dict[str, str]:
        """Client-facing payload. Never includes technical_message or details."""
        return {
            "error": self.code.value,
            "code": self.code.value,
            "message": self.user_message,
        }


_STORAGE_ERROR_FIELDS = frozenset(f.name for f in fields(StorageError))


def is_storage_error(value: object) -> bool:
    return isinstance(value, StorageError)


# Factories for failures detected inside the storage boundary


def client_not_configured_error(reason: str) -> StorageError:
    return StorageError(
        code=StorageErrorCode.CLIENT_NOT_CONFIGURED,
        technical_message=reason,
    )


def empty_file_error() -> StorageError:
    return StorageError(
        code=StorageErrorCode.EMPTY_FILE,
        technical_message="Attempted to store empty file",
    )


def file_too_large_error(actual_size: int, max_size: int) -> StorageError:
    return StorageError(
        code=StorageErrorCode.FILE_TOO_LARGE,
        technical_message=f"File size {actual_size} exceeds maximum {max_size}",
        details={"actual_size": actual_size, "max_size": max_size},
    )


def invalid_cid_error(cid: str) -> StorageError:
    prefix = (cid or "")[:20]
    return StorageError(
        code=StorageErrorCode.INVALID_CID,
        technical_message=f"Invalid CID format: {prefix}...",
        details={"cid_prefix": prefix},
    )


def missing_cid_error(evidence_id: str) -> StorageError:
    prefix = (evidence_id or "")[:8]
    return StorageError(
        code=StorageErrorCode.MISSING_CID,
        technical_message=f"SDK returned no pieceCid for evidence: {prefix}...",
        details={"evidence_id_prefix": prefix},
    )

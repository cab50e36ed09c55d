# app/core/error_codes.py
from enum import Enum

class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Auth
    UNAUTHORIZED = "AUTH_001"
    FORBIDDEN = "AUTH_002"

    # Evidence upload
    INVALID_ENCRYPTED_DATA = "INVALID_ENCRYPTED_DATA"
    EVIDENCE_NOT_STORED = "EVIDENCE_NOT_STORED"

    # Storage identifiers persisted or returned that fail validation
    STORAGE_ERROR = "STORAGE_ERROR"

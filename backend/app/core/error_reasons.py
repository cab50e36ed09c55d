"""
error_reasons.py
- Purpose: Human-friendly "reason" strings.
- Keep these stable; they may be surfaced in UI.
"""

from enum import Enum


class ErrorReason(str, Enum):
    UNKNOWN = "An unexpected error occurred. Please try again."

    INVALID_INPUT = "Invalid request data. Please check your input."
    BAD_REQUEST = "Invalid request."
    RESOURCE_NOT_FOUND = "Resource not found."
    EVIDENCE_NOT_FOUND = "Evidence not found."
    ALREADY_EXISTS = "Resource already exists."

    AUTH_REQUIRED = "Authentication required."
    AUTH_INVALID = "Invalid or expired token."
    AUTH_FORBIDDEN = "You do not have permission to perform this action."
    EVIDENCE_FORBIDDEN = "You do not have access to this evidence."

    USER_NOT_FOUND = "User not found."
    INVALID_DID = "Invalid DID format."
    INVALID_WALLET_ADDRESS = "Invalid wallet address format."

    INVALID_ENCRYPTED_DATA = "Invalid encrypted data format."
    EVIDENCE_NOT_STORED = "Evidence has not been stored yet."
    STORED_CID_INVALID = "Evidence storage identifier is invalid."
    STORE_FAILED = "Failed to store evidence. Please try again."

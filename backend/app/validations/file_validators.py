"""
file_validators.py
- Purpose: Centralized validation for encrypted evidence payloads.
- Design: Raise AppError with stable error codes for UI + logs.
"""

import base64
import binascii
import logging

from app.core.errors import bad_request
from app.core.error_codes import ErrorCode
from app.core.error_reasons import ErrorReason

logger = logging.getLogger("app.validations.files")

# Poly1305 tag + nonce added by client-side encryption
ENCRYPTION_OVERHEAD = 16 + 24
SIZE_TOLERANCE = 100


def decode_encrypted_payload(encoded: str) -> bytes:
    """Decode the base64 body field carrying the client-encrypted file."""
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise bad_request(ErrorReason.INVALID_ENCRYPTED_DATA, code=ErrorCode.INVALID_ENCRYPTED_DATA) from e


def check_encrypted_size(encrypted_size: int, declared_size: int) -> bool:
    """
    Compare ciphertext size with the plaintext size the client declared.

    Overhead varies with the client's cipher, so a mismatch is logged, not rejected.
    """
    expected = declared_size + ENCRYPTION_OVERHEAD
    ok = expected - SIZE_TOLERANCE <= encrypted_size <= expected + SIZE_TOLERANCE
    if not ok:
        logger.warning(
            "evidence.size_mismatch",
            extra={"encrypted_size": encrypted_size, "declared_size": declared_size},
        )
    return ok

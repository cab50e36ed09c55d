"""
cid_validators.py
- Purpose: Format validation for Filecoin/IPFS content identifiers (CIDs).
- Design: CIDs returned by the storage SDK or read back from the database are
  untrusted input. Validate before persisting, retrieving or displaying them.

Supported formats:
- CIDv0:    Qm... (46 chars, base58btc)
- CIDv1:    b...  (base32 lowercase, typically 59 chars)
- PieceCID: baga... (Filecoin piece commitment, base32)

Format only; no multihash / cryptographic checks.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

MIN_CID_LENGTH = 46
MAX_CID_LENGTH = 100

# base58btc excludes 0, O, I and l
CID_V0_PATTERN = re.compile(r"^Qm[1-9A-HJ-NP-Za-km-z]{44}$")
CID_V1_PATTERN = re.compile(r"^b[a-z2-7]{58,}$")
PIECE_CID_PATTERN = re.compile(r"^baga[a-z2-7]{56,}$")

_LOG_EDGE = 10


class CidFormat(str, Enum):
    V0 = "v0"
    V1 = "v1"
    PIECE = "piece"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CidValidationResult:
    is_valid: bool
    format: CidFormat
    error: str | None = None


class InvalidCidError(ValueError):
    def __init__(self, reason: str):
        super().__init__(f"Invalid CID: {reason}")
        self.reason = reason


def _invalid(fmt: CidFormat, error: str) -> CidValidationResult:
    return CidValidationResult(is_valid=False, format=fmt, error=error)


def validate_cid(candidate: object) -> CidValidationResult:
    if not candidate or not isinstance(candidate, str):
        return _invalid(CidFormat.UNKNOWN, "CID must be a non-empty string")

    cid = candidate.strip()

    if len(cid) < MIN_CID_LENGTH:
        return _invalid(CidFormat.UNKNOWN, "CID is too short")
    if len(cid) > MAX_CID_LENGTH:
        return _invalid(CidFormat.UNKNOWN, "CID is too long")

    if cid.startswith("Qm"):
        if CID_V0_PATTERN.match(cid):
            return CidValidationResult(is_valid=True, format=CidFormat.V0)
        return _invalid(CidFormat.V0, "Invalid CIDv0 format")

    # PieceCIDs also start with "b", so this must run before the CIDv1 branch
    if cid.startswith("baga"):
        if PIECE_CID_PATTERN.match(cid):
            return CidValidationResult(is_valid=True, format=CidFormat.PIECE)
        return _invalid(CidFormat.PIECE, "Invalid PieceCID format")

    if cid.startswith("b"):
        if CID_V1_PATTERN.match(cid):
            return CidValidationResult(is_valid=True, format=CidFormat.V1)
        return _invalid(CidFormat.V1, "Invalid CIDv1 format")

    return _invalid(CidFormat.UNKNOWN, "Unrecognized CID format")


def is_valid_cid(candidate: object) -> bool:
    return validate_cid(candidate).is_valid


def is_piece_cid(candidate: object) -> bool:
    """Narrow PieceCID check; skips the length and prefix dispatch."""
    if not candidate or not isinstance(candidate, str):
        return False
    return PIECE_CID_PATTERN.match(candidate.strip()) is not None


def sanitize_cid_for_log(candidate: object) -> str:
    """Truncate to first10...last10 so CIDs never flood the logs."""
    if not candidate or not isinstance(candidate, str):
        return "[invalid]"

    cid = candidate.strip()
    if len(cid) <= 2 * _LOG_EDGE:
        return cid
    return f"{cid[:_LOG_EDGE]}...{cid[-_LOG_EDGE:]}"


def assert_valid_cid(candidate: object) -> None:
    result = validate_cid(candidate)
    if not result.is_valid:
        raise InvalidCidError(result.error or "unknown error")


def require_valid_cid(candidate: object) -> str:
    assert_valid_cid(candidate)
    return candidate.strip()  # type: ignore[union-attr]

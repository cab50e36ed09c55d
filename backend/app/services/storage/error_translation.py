"""
error_translation.py
- Purpose: Single translation point from opaque SDK/runtime failures to StorageError.
- Design: Ordered rule chain over the lower-cased error message. The order is
  significant (first match wins); e.g. "insufficient funds ... timeout" must
  classify as INSUFFICIENT_FUNDS.
"""

from __future__ import annotations

import logging
from typing import Callable

from app.core.storage_errors import StorageError, StorageErrorCode

logger = logging.getLogger("app.storage.errors")

Rule = tuple[Callable[[str], bool], StorageErrorCode]


def _any_of(*needles: str) -> Callable[[str], bool]:
    return lambda msg: any(n in msg for n in needles)


def _all_of(*needles: str) -> Callable[[str], bool]:
    return lambda msg: all(n in msg for n in needles)


def _mentions_bad_cid(msg: str) -> bool:
    # "piececid" is the lower-cased SDK field name pieceCid
    return (
        _any_of("piececid", "piece cid", "invalid cid")(msg)
        or _all_of("cid", "invalid")(msg)
    )


TRANSLATION_RULES: tuple[Rule, ...] = (
    (_any_of("insufficient", "balance", "funds"), StorageErrorCode.INSUFFICIENT_FUNDS),
    (_any_of("timeout", "timed out"), StorageErrorCode.UPLOAD_TIMEOUT),
    (_any_of("network", "connection", "econnrefused", "enotfound"), StorageErrorCode.NETWORK_ERROR),
    (_any_of("not found", "404"), StorageErrorCode.NOT_FOUND),
    (_any_of("provider", "unavailable", "503"), StorageErrorCode.PROVIDER_UNAVAILABLE),
    (_any_of("deal"), StorageErrorCode.DEAL_FAILED),
    (_mentions_bad_cid, StorageErrorCode.INVALID_CID),
    (_all_of("upload", "fail"), StorageErrorCode.UPLOAD_FAILED),
)


def classify_message(message: str) -> StorageErrorCode:
    msg = message.lower()
    for matches, code in TRANSLATION_RULES:
        if matches(msg):
            return code
    return StorageErrorCode.UNKNOWN


def translate_storage_error(err: object) -> StorageError:
    """
    Map any raised value to a StorageError.

    Already-translated errors pass through untouched. Everything else is
    logged in full here, since only the user-safe message survives past
    this point.
    """
    if isinstance(err, StorageError):
        return err

    if not isinstance(err, BaseException):
        logger.error("storage.error.untyped", extra={"raw_error": repr(err)})
        return StorageError(code=StorageErrorCode.UNKNOWN, technical_message="Unknown error")

    message = str(err) or type(err).__name__
    code = classify_message(str(err))

    logger.error(
        "storage.error.translated",
        exc_info=(type(err), err, err.__traceback__),
        extra={"code": code.value, "error_type": type(err).__name__},
    )

    translated = StorageError(code=code, technical_message=message)
    translated.__cause__ = err
    return translated

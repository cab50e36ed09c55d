"""
filecoin_storage.py
- Purpose: Storage boundary between the API and the Synapse/Filecoin SDK.
- Owns: size guards, staged upload progress, CID validation of everything the
  SDK returns, error translation.
- Design: Treat as an infrastructure adapter. Payloads are opaque bytes,
  already encrypted client-side; nothing here inspects or transforms them.

Every error leaving this module is a StorageError.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from app.core.config import settings
from app.core.storage_errors import (
    StorageError,
    StorageErrorCode,
    empty_file_error,
    file_too_large_error,
    invalid_cid_error,
    missing_cid_error,
)
from app.services.storage.error_translation import translate_storage_error
from app.services.storage.synapse_client import SynapseClientProvider, default_client_provider
from app.services.storage.types import (
    ProgressCallback,
    StoredFileInfo,
    UploadProgressInfo,
    UploadResult,
    UploadStage,
)
from app.validations.cid_validators import sanitize_cid_for_log, validate_cid

logger = logging.getLogger("app.storage")

PLATFORM = "witnesschain"

# Progress bands (percent)
PROGRESS_PREPARING = 0
PROGRESS_UPLOAD_START = 10
PROGRESS_UPLOAD_END = 80
PROGRESS_COMPLETE = 100

_MISSING = object()


def _field(obj: Any, *names: str, default: Any = None) -> Any:
    """
    Read a field from an SDK result.

    Some SDK builds return objects, others plain dicts, and field names
    may be snake_case or camelCase; try every spelling given.
    """
    if obj is None:
        return default
    for name in names:
        if isinstance(obj, Mapping):
            value = obj.get(name, _MISSING)
        else:
            value = getattr(obj, name, _MISSING)
        if value is not _MISSING and value is not None:
            return value
    return default


def upload_progress_percent(bytes_uploaded: int, total_bytes: int) -> int:
    """Map acknowledged bytes into the 10..80 upload band."""
    span = PROGRESS_UPLOAD_END - PROGRESS_UPLOAD_START
    pct = PROGRESS_UPLOAD_START + (bytes_uploaded * span) // total_bytes
    return max(PROGRESS_UPLOAD_START, min(PROGRESS_UPLOAD_END, pct))


class _ProgressReporter:
    """Emits UploadProgressInfo, dropping uploading ticks that do not advance."""

    def __init__(self, callback: Optional[ProgressCallback], total_bytes: int):
        self._callback = callback
        self._total = total_bytes
        self._last_upload_pct = PROGRESS_UPLOAD_START

    def emit(self, stage: UploadStage, progress: int, message: str, bytes_uploaded: Optional[int] = None) -> None:
        if self._callback is None:
            return
        self._callback(
            UploadProgressInfo(
                stage=stage,
                progress=progress,
                message=message,
                bytes_uploaded=bytes_uploaded,
                total_bytes=self._total,
            )
        )

    def on_bytes(self, bytes_uploaded: int) -> None:
        pct = upload_progress_percent(bytes_uploaded, self._total)
        if pct <= self._last_upload_pct:
            return
        self._last_upload_pct = pct
        self.emit(UploadStage.UPLOADING, pct, "Uploading to Filecoin...", bytes_uploaded)


class FilecoinStorage:
    """
    Filecoin storage via the Synapse SDK.

    Assumptions:
    - One SDK client per provider, shared by all callers
    - Upload/retrieve raise StorageError; exists/get_info never raise
    - Timeouts are enforced by the SDK; we only classify timeout-shaped errors
    """

    def __init__(
        self,
        client_provider: SynapseClientProvider | None = None,
        *,
        max_file_bytes: int | None = None,
    ):
        self._clients = client_provider or default_client_provider
        self._max_file_bytes = max_file_bytes if max_file_bytes is not None else settings.STORAGE_MAX_FILE_BYTES

    @property
    def max_file_bytes(self) -> int:
        return self._max_file_bytes

    # ---- upload ----

    def upload(
        self,
        data: bytes,
        *,
        evidence_id: str,
        content_hash: str,
        on_progress: ProgressCallback | None = None,
        timeout: float | None = None,
    ) -> UploadResult:
        """
        Upload encrypted bytes: preparing -> uploading -> confirming -> complete.

        Raises:
            StorageError: EMPTY_FILE / FILE_TOO_LARGE before any SDK call,
                MISSING_CID / INVALID_CID when the SDK result is unusable,
                or the translated SDK failure.
        """
        size = len(data) if data is not None else 0
        if size == 0:
            raise empty_file_error()
        if size > self._max_file_bytes:
            raise file_too_large_error(size, self._max_file_bytes)

        progress = _ProgressReporter(on_progress, size)
        progress.emit(UploadStage.PREPARING, PROGRESS_PREPARING, "Preparing upload...")

        logger.info(
            "storage.upload.start",
            extra={
                "evidence_id": evidence_id,
                "size_bytes": size,
                "content_hash_prefix": (content_hash or "")[:20],
                "timeout_s": timeout if timeout is not None else settings.STORAGE_UPLOAD_TIMEOUT_SECONDS,
            },
        )

        try:
            client = self._clients.get()
            context = client.storage.create_context(
                metadata={
                    "evidence_id": evidence_id,
                    "content_hash": content_hash,
                    "uploaded_at": datetime.now(timezone.utc).isoformat(),
                    "platform": PLATFORM,
                }
            )

            progress.emit(UploadStage.UPLOADING, PROGRESS_UPLOAD_START, "Uploading to Filecoin...", 0)

            result = context.upload(
                data,
                metadata={"evidence_id": evidence_id, "content_hash": content_hash},
                on_progress=progress.on_bytes,
            )

            raw_cid = _field(result, "piece_cid", "pieceCid")
            if raw_cid is None:
                raise missing_cid_error(evidence_id)

            piece_cid = str(raw_cid).strip()
            check = validate_cid(piece_cid)
            if not check.is_valid:
                safe = sanitize_cid_for_log(piece_cid)
                logger.error("storage.upload.invalid_cid", extra={"evidence_id": evidence_id, "cid": safe})
                raise StorageError(
                    code=StorageErrorCode.INVALID_CID,
                    user_message="Storage returned invalid identifier. Please try again.",
                    technical_message=f"SDK returned invalid CID: {check.error}",
                    details={"cid": safe},
                )

            progress.emit(UploadStage.CONFIRMING, PROGRESS_UPLOAD_END, "Confirming storage deal...", size)

            provider_address = str(_field(context, "service_provider", "serviceProvider", default=""))
            data_set_id = str(_field(context, "data_set_id", "dataSetId", default=""))
            uploaded_bytes = int(_field(result, "size", default=size))

            progress.emit(UploadStage.COMPLETE, PROGRESS_COMPLETE, "Upload complete", size)

        except StorageError:
            raise
        except Exception as e:
            raise translate_storage_error(e) from e

        logger.info(
            "storage.upload.complete",
            extra={
                "evidence_id": evidence_id,
                "cid": sanitize_cid_for_log(piece_cid),
                "format": check.format.value,
                "provider_address": provider_address,
                "data_set_id": data_set_id,
                "uploaded_bytes": uploaded_bytes,
            },
        )

        return UploadResult(
            piece_cid=piece_cid,
            data_set_id=data_set_id,
            provider_address=provider_address,
            uploaded_bytes=uploaded_bytes,
            fil_paid=None,
        )

    # ---- retrieval ----

    def retrieve(self, cid: str, *, timeout: float | None = None) -> bytes:
        """Download the stored bytes for a CID, unchanged."""
        if not validate_cid(cid).is_valid:
            raise invalid_cid_error(cid if isinstance(cid, str) else "")

        piece_cid = cid.strip()
        safe = sanitize_cid_for_log(piece_cid)
        logger.info(
            "storage.retrieve.start",
            extra={
                "cid": safe,
                "timeout_s": timeout if timeout is not None else settings.STORAGE_RETRIEVE_TIMEOUT_SECONDS,
            },
        )

        try:
            client = self._clients.get()
            data = client.download(piece_cid)
        except StorageError:
            raise
        except Exception as e:
            raise translate_storage_error(e) from e

        if not data:
            raise StorageError(
                code=StorageErrorCode.NOT_FOUND,
                technical_message=f"Empty response for CID: {safe}",
            )

        logger.info("storage.retrieve.complete", extra={"cid": safe, "size_bytes": len(data)})
        return data

    # ---- status lookups (fail-soft) ----

    def _piece_status(self, piece_cid: str) -> Any:
        client = self._clients.get()
        context = client.storage.get_default_context()
        return context.piece_status(piece_cid)

    def exists(self, cid: str) -> bool:
        """False for invalid CIDs and for any failure, misconfiguration included."""
        if not validate_cid(cid).is_valid:
            return False
        try:
            status = self._piece_status(cid.strip())
        except Exception:
            logger.debug("storage.exists.failed", extra={"cid": sanitize_cid_for_log(cid)}, exc_info=True)
            return False
        return bool(_field(status, "exists", default=False))

    def get_info(self, cid: str) -> StoredFileInfo | None:
        """None for invalid CIDs and for any failure, misconfiguration included."""
        if not validate_cid(cid).is_valid:
            return None
        piece_cid = cid.strip()
        try:
            status = self._piece_status(piece_cid)
        except Exception:
            logger.debug("storage.info.failed", extra={"cid": sanitize_cid_for_log(cid)}, exc_info=True)
            return None
        return StoredFileInfo(
            piece_cid=piece_cid,
            exists=bool(_field(status, "exists", default=False)),
            retrieval_url=_field(status, "retrieval_url", "retrievalUrl"),
        )


# ---- module-level API ----


def _storage(storage: FilecoinStorage | None) -> FilecoinStorage:
    return storage or FilecoinStorage()


def upload_to_filecoin(
    data: bytes,
    *,
    evidence_id: str,
    content_hash: str,
    on_progress: ProgressCallback | None = None,
    timeout: float | None = None,
    storage: FilecoinStorage | None = None,
) -> UploadResult:
    return _storage(storage).upload(
        data,
        evidence_id=evidence_id,
        content_hash=content_hash,
        on_progress=on_progress,
        timeout=timeout,
    )


def retrieve_from_filecoin(cid: str, *, timeout: float | None = None, storage: FilecoinStorage | None = None) -> bytes:
    return _storage(storage).retrieve(cid, timeout=timeout)


def exists_in_filecoin(cid: str, *, storage: FilecoinStorage | None = None) -> bool:
    return _storage(storage).exists(cid)


def get_stored_file_info(cid: str, *, storage: FilecoinStorage | None = None) -> StoredFileInfo | None:
    return _storage(storage).get_info(cid)

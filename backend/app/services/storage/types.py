# app/services/storage/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Protocol


class UploadStage(str, Enum):
    PREPARING = "preparing"
    UPLOADING = "uploading"
    CONFIRMING = "confirming"
    COMPLETE = "complete"


@dataclass(frozen=True)
class UploadProgressInfo:
    stage: UploadStage
    progress: int                       # 0..100, non-decreasing within one upload
    message: str
    bytes_uploaded: Optional[int] = None
    total_bytes: Optional[int] = None


ProgressCallback = Callable[[UploadProgressInfo], None]


@dataclass(frozen=True)
class UploadResult:
    piece_cid: str                      # validated
    data_set_id: str                    # "" when the SDK does not report one
    provider_address: str               # "" when the SDK does not report one
    uploaded_bytes: int
    # The SDK upload call does not expose the payment amount; None means
    # "unknown", not "free".
    fil_paid: Optional[str] = None


@dataclass(frozen=True)
class StoredFileInfo:
    piece_cid: str
    exists: bool
    retrieval_url: Optional[str] = None


# ---- Synapse SDK surface consumed by FilecoinStorage ----
# Results may be objects or mappings; field access goes through
# filecoin_storage._field, which accepts both naming styles.


class StorageContext(Protocol):
    def upload(
        self,
        data: bytes,
        *,
        metadata: Mapping[str, str],
        on_progress: Callable[[int], None],
    ) -> Any: ...

    def piece_status(self, piece_cid: str) -> Any: ...


class StorageManager(Protocol):
    def create_context(self, *, metadata: Mapping[str, str]) -> StorageContext: ...

    def get_default_context(self) -> StorageContext: ...


class SynapseClient(Protocol):
    storage: StorageManager

    def download(self, piece_cid: str) -> Optional[bytes]: ...

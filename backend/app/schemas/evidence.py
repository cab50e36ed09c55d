"""
evidence.py (schemas)
- Purpose: Request/response DTOs for the evidence domain.
- Design: Keep API DTOs stable; include helper constructors for DRY mapping.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from app.constants.statuses import EvidenceCategory, EvidenceStatus, SourceType
from app.core.config import settings


class FileInfo(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    size: int = Field(ge=settings.STORAGE_MIN_FILE_BYTES, le=settings.STORAGE_MAX_FILE_BYTES)
    type: str = Field(min_length=1, max_length=255)


class EvidenceSource(BaseModel):
    type: SourceType
    name: Optional[str] = Field(default=None, max_length=200)


class EvidenceMetadata(BaseModel):
    title: str = Field(min_length=5, max_length=200, pattern=r"^[^<>{}]*$")
    description: Optional[str] = Field(default=None, min_length=20, max_length=5000)
    category: EvidenceCategory
    source: EvidenceSource
    location: Optional[dict[str, Any]] = None
    date: Optional[dict[str, Any]] = None
    content_warnings: Optional[list[str]] = None
    tags: Optional[list[str]] = Field(default=None, max_length=10)


class EncryptionInfo(BaseModel):
    encrypted_key: str = Field(min_length=1)
    ephemeral_public_key: Optional[str] = None
    file_nonce: Optional[str] = None
    key_nonce: Optional[str] = None
    content_hash: str = Field(pattern=r"^0x[a-f0-9]{64}$")


class EvidenceUploadRequest(BaseModel):
    file: FileInfo
    metadata: EvidenceMetadata
    encryption: EncryptionInfo
    encrypted_data: str = Field(min_length=1)  # base64


class EvidenceUploadData(BaseModel):
    evidence_id: str
    user_id: str
    piece_cid: str
    content_hash: str
    fil_paid: Optional[str]
    status: EvidenceStatus


class EvidenceSummary(BaseModel):
    id: str
    title: str
    category: str
    piece_cid: Optional[str]
    content_hash: str
    file_size: int
    mime_type: str
    status: str
    fil_paid: Optional[str]
    created_at: datetime

    @classmethod
    def from_evidence(cls, ev) -> "EvidenceSummary":
        return cls(
            id=ev.id,
            title=ev.title,
            category=ev.category,
            piece_cid=ev.piece_cid,
            content_hash=ev.content_hash,
            file_size=ev.file_size,
            mime_type=ev.mime_type,
            status=ev.status,
            fil_paid=ev.fil_paid,
            created_at=ev.created_at,
        )


class EncryptionParams(BaseModel):
    encrypted_key: str
    ephemeral_public_key: Optional[str]
    file_nonce: Optional[str]
    key_nonce: Optional[str]


class EvidenceDetail(EvidenceSummary):
    description: Optional[str]
    data_set_id: Optional[str]
    provider_address: Optional[str]
    metadata: Optional[dict[str, Any]]
    updated_at: datetime
    encryption: EncryptionParams

    @classmethod
    def from_evidence(cls, ev) -> "EvidenceDetail":
        summary = EvidenceSummary.from_evidence(ev).model_dump()
        return cls(
            **summary,
            description=ev.description,
            data_set_id=ev.data_set_id,
            provider_address=ev.provider_address,
            metadata=ev.extra,
            updated_at=ev.updated_at,
            encryption=EncryptionParams(
                encrypted_key=ev.encrypted_key,
                ephemeral_public_key=ev.ephemeral_public_key,
                file_nonce=ev.file_nonce,
                key_nonce=ev.key_nonce,
            ),
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class EvidenceList(BaseModel):
    items: list[EvidenceSummary]
    pagination: Pagination


class EvidenceStatusData(BaseModel):
    evidence_id: str
    status: str
    piece_cid: Optional[str]
    created_at: datetime
    updated_at: datetime


class DownloadFile(BaseModel):
    name: str
    size: int
    mime_type: str


class DownloadEncryption(EncryptionParams):
    content_hash: str


class EvidenceDownloadData(BaseModel):
    evidence_id: str
    encrypted_data: str  # base64
    encryption: DownloadEncryption
    file: DownloadFile

# app/services/evidence_service.py
"""
evidence_service.py
- Purpose: Orchestrates the evidence workflows end-to-end.
- Owns: payload decoding, DB writes via repos, Filecoin upload/retrieval,
  status updates, access logging.
- Design: Thick service; routers remain thin and easy to reason about.
"""

import base64
import logging
import math
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth.deps import AuthUser
from app.constants.statuses import AccessAction, EvidenceStatus
from app.core import ErrorCode, ErrorReason, StorageError
from app.core.errors import bad_request, conflict, forbidden, internal_error, not_found
from app.core.request_context import set_context
from app.models.evidence import Evidence
from app.repos.access_log.write import AccessLogWriteRepo
from app.repos.evidence.read import EvidenceReadRepo
from app.repos.evidence.write import EvidenceWriteRepo
from app.repos.user.write import UserWriteRepo
from app.schemas.evidence import (
    DownloadEncryption,
    DownloadFile,
    EvidenceDownloadData,
    EvidenceList,
    EvidenceStatusData,
    EvidenceSummary,
    EvidenceUploadData,
    EvidenceUploadRequest,
    Pagination,
)
from app.services.storage import FilecoinStorage, UploadResult
from app.validations.cid_validators import sanitize_cid_for_log, validate_cid
from app.validations.file_validators import check_encrypted_size, decode_encrypted_payload

logger = logging.getLogger("app.evidence_service")


class EvidenceService:
    def __init__(self, db: Session, storage: FilecoinStorage):
        self.db = db
        self.storage = storage

        self.user_write = UserWriteRepo(db)
        self.evidence_read = EvidenceReadRepo(db)
        self.evidence_write = EvidenceWriteRepo(db)
        self.access_log = AccessLogWriteRepo(db)

    # ---- upload ----

    def create_from_upload(self, user: AuthUser, req: EvidenceUploadRequest) -> EvidenceUploadData:
        encrypted = decode_encrypted_payload(req.encrypted_data)
        check_encrypted_size(len(encrypted), req.file.size)

        if self.evidence_read.get_by_content_hash(req.encryption.content_hash):
            raise conflict(details={"content_hash": req.encryption.content_hash})

        evidence_id = str(uuid.uuid4())
        set_context(evidence_id=evidence_id)

        self.user_write.ensure_exists(user.did, wallet_address=user.wallet_address)
        meta = req.metadata
        self.evidence_write.create_evidence(
            evidence_id=evidence_id,
            user_id=user.did,
            title=meta.title,
            description=meta.description,
            category=meta.category.value,
            encrypted_key=req.encryption.encrypted_key,
            ephemeral_public_key=req.encryption.ephemeral_public_key,
            file_nonce=req.encryption.file_nonce,
            key_nonce=req.encryption.key_nonce,
            file_size=req.file.size,
            mime_type=req.file.type,
            content_hash=req.encryption.content_hash,
            status=EvidenceStatus.UPLOADING,
            extra=meta.model_dump(
                mode="json",
                include={"source", "location", "date", "content_warnings", "tags"},
                exclude_none=True,
            ),
        )

        logger.info(
            "evidence.created",
            extra={"file_name": req.file.name, "file_size": req.file.size, "category": meta.category.value},
        )

        try:
            result: UploadResult = self.storage.upload(
                encrypted,
                evidence_id=evidence_id,
                content_hash=req.encryption.content_hash,
            )
        except StorageError as e:
            logger.warning(
                "evidence.upload_failed",
                extra={"code": e.code.value, "technical_message": e.technical_message},
            )
            self._mark_rejected(evidence_id)
            raise

        # The storage boundary validates too; this guards what we persist
        if not validate_cid(result.piece_cid).is_valid:
            logger.error("evidence.invalid_cid", extra={"cid": sanitize_cid_for_log(result.piece_cid)})
            self._mark_rejected(evidence_id)
            raise internal_error(
                ErrorReason.STORE_FAILED,
                code=ErrorCode.STORAGE_ERROR,
                message="Invalid CID returned from storage",
            )

        self.evidence_write.mark_stored(
            evidence_id,
            piece_cid=result.piece_cid,
            data_set_id=result.data_set_id,
            provider_address=result.provider_address,
            fil_paid=result.fil_paid,
        )

        logger.info("evidence.stored", extra={"cid": sanitize_cid_for_log(result.piece_cid)})

        return EvidenceUploadData(
            evidence_id=evidence_id,
            user_id=user.did,
            piece_cid=result.piece_cid,
            content_hash=req.encryption.content_hash,
            fil_paid=result.fil_paid,
            status=EvidenceStatus.STORED,
        )

    def _mark_rejected(self, evidence_id: str) -> None:
        try:
            self.evidence_write.update_status(evidence_id, EvidenceStatus.REJECTED)
        except SQLAlchemyError:
            # The original failure is what the caller needs to see
            self.db.rollback()
            logger.exception("evidence.mark_rejected_failed")

    # ---- reads ----

    def list_for_user(
        self,
        user: AuthUser,
        *,
        page: int,
        limit: int,
        category: str | None = None,
        status: str | None = None,
    ) -> EvidenceList:
        items, total = self.evidence_read.list_for_user(
            user.did, page=page, limit=limit, category=category, status=status
        )
        return EvidenceList(
            items=[EvidenceSummary.from_evidence(ev) for ev in items],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit) if limit else 0,
            ),
        )

    def _get_owned(self, user: AuthUser, evidence_id: str) -> Evidence:
        evidence = self.evidence_read.get_by_id(evidence_id)
        if not evidence:
            raise not_found(ErrorReason.EVIDENCE_NOT_FOUND)
        if evidence.user_id != user.did:
            raise forbidden(ErrorReason.EVIDENCE_FORBIDDEN)
        set_context(evidence_id=evidence.id)
        return evidence

    def get_for_user(
        self,
        user: AuthUser,
        evidence_id: str,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Evidence:
        evidence = self._get_owned(user, evidence_id)
        self.access_log.record(
            evidence_id=evidence.id,
            user_id=user.did,
            action=AccessAction.VIEW,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        return evidence

    def get_status(self, user: AuthUser, evidence_id: str) -> EvidenceStatusData:
        evidence = self._get_owned(user, evidence_id)
        return EvidenceStatusData(
            evidence_id=evidence.id,
            status=evidence.status,
            piece_cid=evidence.piece_cid,
            created_at=evidence.created_at,
            updated_at=evidence.updated_at,
        )

    # ---- download ----

    def download(
        self,
        user: AuthUser,
        evidence_id: str,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> EvidenceDownloadData:
        evidence = self._get_owned(user, evidence_id)

        if not evidence.piece_cid:
            raise bad_request(ErrorReason.EVIDENCE_NOT_STORED, code=ErrorCode.EVIDENCE_NOT_STORED)

        if not validate_cid(evidence.piece_cid).is_valid:
            logger.error("evidence.stored_cid_invalid", extra={"cid": sanitize_cid_for_log(evidence.piece_cid)})
            raise internal_error(
                ErrorReason.STORED_CID_INVALID,
                code=ErrorCode.STORAGE_ERROR,
                message="Invalid CID in database",
            )

        data = self.storage.retrieve(evidence.piece_cid)

        self.access_log.record(
            evidence_id=evidence.id,
            user_id=user.did,
            action=AccessAction.DOWNLOAD,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        logger.info("evidence.downloaded", extra={"size_bytes": len(data)})

        return EvidenceDownloadData(
            evidence_id=evidence.id,
            encrypted_data=base64.b64encode(data).decode("ascii"),
            encryption=DownloadEncryption(
                encrypted_key=evidence.encrypted_key,
                ephemeral_public_key=evidence.ephemeral_public_key,
                file_nonce=evidence.file_nonce,
                key_nonce=evidence.key_nonce,
                content_hash=evidence.content_hash,
            ),
            # Original filename is not stored; the title stands in for it
            file=DownloadFile(name=evidence.title, size=evidence.file_size, mime_type=evidence.mime_type),
        )

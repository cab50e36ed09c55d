"""
evidence/write.py
- Purpose: Write-side DB operations for Evidence.
- Design: No business logic; persistence only.
"""

from typing import Any

from sqlalchemy.orm import Session
from app.constants.statuses import EvidenceStatus
from app.models.evidence import Evidence


class EvidenceWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_evidence(
        self,
        *,
        evidence_id: str,
        user_id: str,
        title: str,
        description: str | None,
        category: str,
        encrypted_key: str,
        ephemeral_public_key: str | None,
        file_nonce: str | None,
        key_nonce: str | None,
        file_size: int,
        mime_type: str,
        content_hash: str,
        status: EvidenceStatus,
        extra: dict[str, Any] | None = None,
    ) -> Evidence:
        evidence = Evidence(
            id=evidence_id,
            user_id=user_id,
            title=title,
            description=description,
            category=category,
            encrypted_key=encrypted_key,
            ephemeral_public_key=ephemeral_public_key,
            file_nonce=file_nonce,
            key_nonce=key_nonce,
            file_size=file_size,
            mime_type=mime_type,
            content_hash=content_hash,
            status=status.value,
            extra=extra,
        )
        self.db.add(evidence)
        self.db.commit()
        self.db.refresh(evidence)
        return evidence

    def mark_stored(
        self,
        evidence_id: str,
        *,
        piece_cid: str,
        data_set_id: str,
        provider_address: str,
        fil_paid: str | None,
    ) -> Evidence | None:
        evidence = self.db.query(Evidence).filter(Evidence.id == evidence_id).first()
        if not evidence:
            return None
        evidence.piece_cid = piece_cid
        evidence.data_set_id = data_set_id or None
        evidence.provider_address = provider_address or None
        evidence.fil_paid = fil_paid
        evidence.status = EvidenceStatus.STORED.value
        self.db.commit()
        self.db.refresh(evidence)
        return evidence

    def update_status(self, evidence_id: str, status: EvidenceStatus) -> Evidence | None:
        evidence = self.db.query(Evidence).filter(Evidence.id == evidence_id).first()
        if not evidence:
            return None
        evidence.status = status.value
        self.db.commit()
        self.db.refresh(evidence)
        return evidence

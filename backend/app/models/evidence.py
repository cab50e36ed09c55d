"""
evidence.py
- Purpose: Evidence submission metadata, encryption params and storage status.
- The encrypted payload itself lives on Filecoin; only its PieceCID is kept here.
"""

import uuid
from datetime import datetime
from typing import Any
from sqlalchemy import String, Text, Integer, DateTime, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.constants.statuses import EvidenceStatus
from app.models.base import Base, utcnow


def new_id() -> str:
    return str(uuid.uuid4())


class Evidence(Base):
    __tablename__ = "evidence"

    __table_args__ = (
        Index("ix_evidence_user_id", "user_id"),
        Index("ix_evidence_status", "status"),
        Index("ix_evidence_category", "category"),
        Index("ix_evidence_piece_cid", "piece_cid"),
        Index("ux_evidence_content_hash", "content_hash", unique=True),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(Text, ForeignKey("users.id"), nullable=False)

    # Content info
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(64), nullable=False)

    # Filecoin storage (set once the upload completes)
    piece_cid: Mapped[str | None] = mapped_column(Text, nullable=True)
    data_set_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    provider_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    fil_paid: Mapped[str | None] = mapped_column(Text, nullable=True)  # NULL = unknown

    # Encryption params (client needs these to decrypt)
    encrypted_key: Mapped[str] = mapped_column(Text, nullable=False)
    ephemeral_public_key: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_nonce: Mapped[str | None] = mapped_column(Text, nullable=True)
    key_nonce: Mapped[str | None] = mapped_column(Text, nullable=True)

    # File info
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    mime_type: Mapped[str] = mapped_column(Text, nullable=False)
    content_hash: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[str] = mapped_column(String(32), nullable=False, default=EvidenceStatus.PENDING.value)
    extra: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    user: Mapped["User"] = relationship(back_populates="evidence")
    access_logs: Mapped[list["AccessLog"]] = relationship(
        back_populates="evidence",
        cascade="all, delete-orphan",
    )

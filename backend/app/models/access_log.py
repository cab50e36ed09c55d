"""
access_log.py
- Purpose: Audit trail of evidence views and downloads.
"""

from datetime import datetime
from sqlalchemy import String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.models.base import Base, utcnow
from app.models.evidence import new_id


class AccessLog(Base):
    __tablename__ = "access_logs"

    __table_args__ = (
        Index("ix_access_logs_evidence_id", "evidence_id"),
        Index("ix_access_logs_user_id", "user_id"),
        Index("ix_access_logs_action", "action"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    evidence_id: Mapped[str] = mapped_column(String(36), ForeignKey("evidence.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    ip_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)

    evidence: Mapped["Evidence"] = relationship(back_populates="access_logs")

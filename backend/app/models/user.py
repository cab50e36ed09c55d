"""
user.py
- Purpose: DID-based user identity owning evidence.
"""

from datetime import datetime
from sqlalchemy import Text, DateTime
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.models.base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(Text, primary_key=True)  # did:key:...
    wallet_address: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    evidence: Mapped[list["Evidence"]] = relationship(back_populates="user")

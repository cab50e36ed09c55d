"""
evidence/read.py
- Purpose: Read-side DB operations for Evidence.
- Design: Keeps query access patterns centralized.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from app.models.evidence import Evidence


class EvidenceReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, evidence_id: str) -> Evidence | None:
        return self.db.query(Evidence).filter(Evidence.id == evidence_id).first()

    def get_by_content_hash(self, content_hash: str) -> Evidence | None:
        return self.db.query(Evidence).filter(Evidence.content_hash == content_hash).first()

    def list_for_user(
        self,
        user_id: str,
        *,
        page: int = 1,
        limit: int = 20,
        category: str | None = None,
        status: str | None = None,
    ) -> tuple[list[Evidence], int]:
        """Newest first. Returns (page items, total matching rows)."""
        q = self.db.query(Evidence).filter(Evidence.user_id == user_id)
        if category:
            q = q.filter(Evidence.category == category)
        if status:
            q = q.filter(Evidence.status == status)

        total = self.db.scalar(select(func.count()).select_from(q.subquery())) or 0
        items = (
            q.order_by(Evidence.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return items, total

"""
access_log/write.py
- Purpose: Append-only audit writes for evidence access.
"""

from sqlalchemy.orm import Session
from app.constants.statuses import AccessAction
from app.models.access_log import AccessLog


class AccessLogWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        *,
        evidence_id: str,
        user_id: str,
        action: AccessAction,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AccessLog:
        entry = AccessLog(
            evidence_id=evidence_id,
            user_id=user_id,
            action=action.value,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.db.add(entry)
        self.db.commit()
        return entry

"""
user/write.py
- Purpose: Write-side DB operations for User.
- Design: No business logic. Only persistence and minimal mapping.
"""

from sqlalchemy.orm import Session
from app.models.user import User


class UserWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def ensure_exists(self, did: str, *, wallet_address: str | None = None) -> User:
        wallet_address = wallet_address.lower() if wallet_address else None
        existing = self.db.query(User).filter(User.id == did).first()
        if existing:
            if wallet_address and wallet_address != existing.wallet_address:
                existing.wallet_address = wallet_address
                self.db.commit()
                self.db.refresh(existing)
            return existing

        user = User(id=did, wallet_address=wallet_address)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

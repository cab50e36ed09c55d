"""
user/read.py
- Purpose: Read-side DB operations for User.
"""

from sqlalchemy.orm import Session
from app.models.user import User


class UserReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, did: str) -> User | None:
        return self.db.query(User).filter(User.id == did).first()

    def get_by_wallet(self, wallet_address: str) -> User | None:
        """Addresses are stored lower-cased."""
        return self.db.query(User).filter(User.wallet_address == wallet_address).first()

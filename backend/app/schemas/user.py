"""
user.py (schemas)
- Purpose: Public profile DTOs for DID-identified users.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserProfile(BaseModel):
    id: str
    wallet_address: Optional[str]
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user, *, include_updated: bool = False) -> "UserProfile":
        return cls(
            id=user.id,
            wallet_address=user.wallet_address,
            created_at=user.created_at,
            updated_at=user.updated_at if include_updated else None,
        )


class WalletLookup(BaseModel):
    exists: bool
    did: Optional[str] = None

# app/services/user_service.py
"""
user_service.py
- Purpose: Profile lookups for DID users.
- Registration (wallet signature linking) happens elsewhere; this is read-only.
"""

import re

from sqlalchemy.orm import Session

from app.auth.deps import AuthUser
from app.core import ErrorReason
from app.core.errors import bad_request, not_found
from app.repos.user.read import UserReadRepo
from app.schemas.user import UserProfile, WalletLookup

DID_PREFIX = "did:key:z"
WALLET_ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


class UserService:
    def __init__(self, db: Session):
        self.user_read = UserReadRepo(db)

    def get_me(self, user: AuthUser) -> UserProfile:
        found = self.user_read.get_by_id(user.did)
        if not found:
            raise not_found(ErrorReason.USER_NOT_FOUND)
        return UserProfile.from_user(found, include_updated=True)

    def get_by_did(self, did: str) -> UserProfile:
        if not did.startswith(DID_PREFIX):
            raise bad_request(ErrorReason.INVALID_DID)
        found = self.user_read.get_by_id(did)
        if not found:
            raise not_found(ErrorReason.USER_NOT_FOUND)
        return UserProfile.from_user(found)

    def lookup_wallet(self, address: str) -> WalletLookup:
        address = address.lower()
        if not WALLET_ADDRESS_PATTERN.match(address):
            raise bad_request(ErrorReason.INVALID_WALLET_ADDRESS)
        found = self.user_read.get_by_wallet(address)
        if not found:
            return WalletLookup(exists=False)
        return WalletLookup(exists=True, did=found.id)

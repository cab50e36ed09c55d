"""
users.py
- Purpose: Read-only profile routes for DID users.
- Design: Keep router thin. Delegate business logic to services.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_user_service
from app.auth.deps import AuthUser, require_user
from app.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


# Literal paths are registered before /{did} so they are not captured by it
@router.get("/me")
def get_me(
    user: AuthUser = Depends(require_user),
    svc: UserService = Depends(get_user_service),
):
    return {"success": True, "data": svc.get_me(user)}


@router.get("/wallet/{address}")
def lookup_wallet(address: str, svc: UserService = Depends(get_user_service)):
    return {"success": True, "data": svc.lookup_wallet(address).model_dump(exclude_none=True)}


@router.get("/{did}")
def get_user(did: str, svc: UserService = Depends(get_user_service)):
    profile = svc.get_by_did(did)
    return {"success": True, "data": profile.model_dump(mode="json", exclude={"updated_at"})}

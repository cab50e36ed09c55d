# app/auth/deps.py
from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.jwt import decode_access_token
from app.core.errors import unauthorized
from app.core.error_reasons import ErrorReason
from app.core.request_context import set_context

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthUser:
    did: str
    wallet_address: str | None = None


async def require_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> AuthUser:
    if not creds or creds.scheme.lower() != "bearer" or not creds.credentials:
        raise unauthorized(message="Missing Authorization: Bearer token")

    payload = decode_access_token(creds.credentials)

    did = payload.get("sub")
    if not isinstance(did, str) or not did.startswith("did:"):
        raise unauthorized(ErrorReason.AUTH_INVALID, message="Token subject is not a DID")

    set_context(user_id=did)
    return AuthUser(did=did, wallet_address=payload.get("wallet"))

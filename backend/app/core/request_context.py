"""
Request context helpers.

We keep a small context (request_id, user_id, evidence_id) in ContextVars.
The HTTP middleware and the evidence service set these values so logs from
the storage boundary are correlatable with the request that caused them.

No external dependencies.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Dict, Optional


_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_user_id: ContextVar[Optional[str]] = ContextVar("user_id", default=None)
_evidence_id: ContextVar[Optional[str]] = ContextVar("evidence_id", default=None)


def set_context(
    *,
    request_id: Optional[str] = None,
    user_id: Optional[str] = None,
    evidence_id: Optional[str] = None,
) -> None:
    if request_id is not None:
        _request_id.set(request_id)
    if user_id is not None:
        _user_id.set(user_id)
    if evidence_id is not None:
        _evidence_id.set(evidence_id)


def clear_context() -> None:
    _request_id.set(None)
    _user_id.set(None)
    _evidence_id.set(None)


def get_context() -> Dict[str, Any]:
    ctx: Dict[str, Any] = {}
    rid = _request_id.get()
    uid = _user_id.get()
    eid = _evidence_id.get()

    if rid:
        ctx["request_id"] = rid
    if uid:
        ctx["user_id"] = uid
    if eid:
        ctx["evidence_id"] = eid
    return ctx

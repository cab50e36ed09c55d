"""
evidence.py
- Purpose: API routes for submitting and retrieving encrypted evidence.
- Design: Keep router thin. Delegate business logic to services.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from app.api.deps import get_evidence_service
from app.auth.deps import AuthUser, require_user
from app.constants.statuses import EvidenceCategory, EvidenceStatus
from app.schemas.evidence import EvidenceDetail, EvidenceUploadRequest
from app.services.evidence_service import EvidenceService

router = APIRouter(prefix="/api/evidence", tags=["Evidence"])


def _client_info(request: Request) -> dict:
    return {
        "ip_address": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def upload_evidence(
    body: EvidenceUploadRequest,
    user: AuthUser = Depends(require_user),
    svc: EvidenceService = Depends(get_evidence_service),
):
    data = svc.create_from_upload(user, body)
    return {"success": True, "data": data}


@router.get("")
def list_evidence(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: Optional[EvidenceCategory] = None,
    status: Optional[EvidenceStatus] = None,
    user: AuthUser = Depends(require_user),
    svc: EvidenceService = Depends(get_evidence_service),
):
    data = svc.list_for_user(
        user,
        page=page,
        limit=limit,
        category=category.value if category else None,
        status=status.value if status else None,
    )
    return {"success": True, "data": data}


@router.get("/{evidence_id}")
def get_evidence(
    evidence_id: str,
    request: Request,
    user: AuthUser = Depends(require_user),
    svc: EvidenceService = Depends(get_evidence_service),
):
    evidence = svc.get_for_user(user, evidence_id, **_client_info(request))
    return {"success": True, "data": EvidenceDetail.from_evidence(evidence)}


@router.get("/{evidence_id}/download")
def download_evidence(
    evidence_id: str,
    request: Request,
    user: AuthUser = Depends(require_user),
    svc: EvidenceService = Depends(get_evidence_service),
):
    return {"success": True, "data": svc.download(user, evidence_id, **_client_info(request))}


@router.get("/{evidence_id}/status")
def get_evidence_status(
    evidence_id: str,
    user: AuthUser = Depends(require_user),
    svc: EvidenceService = Depends(get_evidence_service),
):
    return {"success": True, "data": svc.get_status(user, evidence_id)}

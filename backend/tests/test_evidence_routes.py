import base64

import pytest

from app.core.config import settings
from app.models.access_log import AccessLog
from app.models.evidence import Evidence
from conftest import OTHER_DID, PIECE_CID, USER_DID, auth_headers

CONTENT_HASH = "0x" + "a" * 64


def _upload_body(payload: bytes = b"\x07" * 240, *, content_hash: str = CONTENT_HASH, size: int = 200) -> dict:
    return {
        "file": {"name": "checkpoint.mp4", "size": size, "type": "video/mp4"},
        "metadata": {
            "title": "Checkpoint incident",
            "description": "Footage recorded at the northern checkpoint at dawn.",
            "category": "human_rights_violation",
            "source": {"type": "witness"},
            "tags": ["checkpoint", "video"],
        },
        "encryption": {
            "encrypted_key": "ZW5jcnlwdGVkLWtleQ==",
            "ephemeral_public_key": "ZXBoZW1lcmFs",
            "file_nonce": "bm9uY2Ux",
            "key_nonce": "bm9uY2Uy",
            "content_hash": content_hash,
        },
        "encrypted_data": base64.b64encode(payload).decode("ascii"),
    }


def _create(client, **kwargs) -> str:
    resp = client.post("/api/evidence", json=_upload_body(**kwargs), headers=auth_headers())
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["evidence_id"]


def test_upload_requires_auth(client):
    resp = client.post("/api/evidence", json=_upload_body())
    assert resp.status_code == 401
    assert resp.json()["code"] == "AUTH_001"


def test_token_subject_must_be_a_did(client):
    resp = client.get("/api/evidence", headers=auth_headers("user-123"))
    assert resp.status_code == 401


def test_upload_stores_evidence(client, fake_client, session_factory):
    resp = client.post("/api/evidence", json=_upload_body(), headers=auth_headers())
    assert resp.status_code == 201, resp.text

    body = resp.json()
    assert body["success"] is True
    data = body["data"]
    assert data["piece_cid"] == PIECE_CID
    assert data["status"] == "stored"
    assert data["user_id"] == USER_DID
    assert data["fil_paid"] is None

    uploaded, _ = fake_client.context.uploads[0]
    assert uploaded == b"\x07" * 240

    with session_factory() as db:
        row = db.get(Evidence, data["evidence_id"])
        assert row.status == "stored"
        assert row.piece_cid == PIECE_CID
        assert row.provider_address == "0xProvider"
        assert row.data_set_id == "42"
        assert row.fil_paid is None
        assert row.extra["tags"] == ["checkpoint", "video"]


def test_duplicate_content_hash_conflicts(client):
    _create(client)
    resp = client.post("/api/evidence", json=_upload_body(), headers=auth_headers())
    assert resp.status_code == 409
    assert resp.json()["code"] == "CONFLICT"


def test_invalid_base64_is_rejected(client, fake_client):
    body = _upload_body()
    body["encrypted_data"] = "not base64!!"

    resp = client.post("/api/evidence", json=body, headers=auth_headers())
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_ENCRYPTED_DATA"
    assert fake_client.context.uploads == []


def test_schema_validation_error_shape(client):
    body = _upload_body()
    body["metadata"]["title"] = "<b>"

    resp = client.post("/api/evidence", json=body, headers=auth_headers())
    assert resp.status_code == 422
    assert resp.json()["error"] == "VALIDATION_ERROR"


def test_storage_failure_marks_row_rejected(client, fake_client, session_factory):
    fake_client.context.upload_error = RuntimeError("insufficient balance")

    resp = client.post("/api/evidence", json=_upload_body(), headers=auth_headers())
    assert resp.status_code == 500
    assert resp.json() == {
        "error": "STORAGE_INSUFFICIENT_FUNDS",
        "code": "STORAGE_INSUFFICIENT_FUNDS",
        "message": "Insufficient funds for storage. Please try again later.",
    }

    with session_factory() as db:
        rows = db.query(Evidence).all()
        assert [r.status for r in rows] == ["rejected"]
        assert rows[0].piece_cid is None


def test_storage_rejects_oversized_payload_with_413(client, storage, monkeypatch):
    monkeypatch.setattr(storage, "_max_file_bytes", 100)

    resp = client.post("/api/evidence", json=_upload_body(), headers=auth_headers())
    assert resp.status_code == 413
    assert resp.json()["code"] == "STORAGE_FILE_TOO_LARGE"


def test_details_only_in_development(client, storage, monkeypatch):
    monkeypatch.setattr(storage, "_max_file_bytes", 100)

    monkeypatch.setattr(settings, "env", "local")
    resp = client.post("/api/evidence", json=_upload_body(content_hash="0x" + "1" * 64), headers=auth_headers())
    assert resp.json()["details"] == {"actual_size": 240, "max_size": 100}

    monkeypatch.setattr(settings, "env", "production")
    resp = client.post("/api/evidence", json=_upload_body(content_hash="0x" + "2" * 64), headers=auth_headers())
    assert "details" not in resp.json()


def test_list_is_scoped_to_owner_and_paginated(client):
    for i in range(3):
        _create(client, content_hash="0x" + str(i) * 64)
    client.post(
        "/api/evidence",
        json=_upload_body(content_hash="0x" + "9" * 64),
        headers=auth_headers(OTHER_DID),
    )

    resp = client.get("/api/evidence?page=1&limit=2", headers=auth_headers())
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert len(data["items"]) == 2
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}


def test_list_filters(client):
    _create(client)

    resp = client.get("/api/evidence?status=stored&category=human_rights_violation", headers=auth_headers())
    assert resp.json()["data"]["pagination"]["total"] == 1

    resp = client.get("/api/evidence?category=corruption", headers=auth_headers())
    assert resp.json()["data"]["pagination"]["total"] == 0

    resp = client.get("/api/evidence?status=bogus", headers=auth_headers())
    assert resp.status_code == 422


def test_get_detail_logs_view(client, session_factory):
    evidence_id = _create(client)

    resp = client.get(f"/api/evidence/{evidence_id}", headers=auth_headers())
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] == evidence_id
    assert data["encryption"]["key_nonce"] == "bm9uY2Uy"
    assert data["metadata"]["source"] == {"type": "witness"}

    with session_factory() as db:
        logs = db.query(AccessLog).filter(AccessLog.evidence_id == evidence_id).all()
        assert [log.action for log in logs] == ["view"]


@pytest.mark.parametrize("suffix", ["", "/download", "/status"])
def test_other_users_are_forbidden(client, suffix):
    evidence_id = _create(client)
    resp = client.get(f"/api/evidence/{evidence_id}{suffix}", headers=auth_headers(OTHER_DID))
    assert resp.status_code == 403
    assert resp.json()["code"] == "AUTH_002"


def test_unknown_evidence_is_404(client):
    resp = client.get("/api/evidence/does-not-exist", headers=auth_headers())
    assert resp.status_code == 404
    assert resp.json()["code"] == "NOT_FOUND"


def test_status(client):
    evidence_id = _create(client)
    resp = client.get(f"/api/evidence/{evidence_id}/status", headers=auth_headers())
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "stored"
    assert data["piece_cid"] == PIECE_CID


def test_download_round_trip(client, fake_client, session_factory):
    payload = b"\x07" * 240
    evidence_id = _create(client, payload=payload)
    fake_client.blobs[PIECE_CID] = payload

    resp = client.get(f"/api/evidence/{evidence_id}/download", headers=auth_headers())
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert base64.b64decode(data["encrypted_data"]) == payload
    assert data["encryption"]["content_hash"] == CONTENT_HASH
    assert data["file"]["mime_type"] == "video/mp4"

    with session_factory() as db:
        actions = [log.action for log in db.query(AccessLog).all()]
        assert actions == ["download"]


def test_download_missing_from_storage_is_404(client, fake_client):
    evidence_id = _create(client)

    resp = client.get(f"/api/evidence/{evidence_id}/download", headers=auth_headers())
    assert resp.status_code == 404
    assert resp.json()["code"] == "STORAGE_NOT_FOUND"


def test_download_before_storage_completes(client, fake_client, session_factory):
    fake_client.context.upload_error = RuntimeError("upload failed")
    client.post("/api/evidence", json=_upload_body(), headers=auth_headers())

    with session_factory() as db:
        evidence_id = db.query(Evidence).one().id

    resp = client.get(f"/api/evidence/{evidence_id}/download", headers=auth_headers())
    assert resp.status_code == 400
    assert resp.json()["code"] == "EVIDENCE_NOT_STORED"


def test_download_with_corrupted_cid(client, fake_client, session_factory):
    evidence_id = _create(client)
    with session_factory() as db:
        row = db.get(Evidence, evidence_id)
        row.piece_cid = "Qm" + "0" * 44
        db.commit()

    resp = client.get(f"/api/evidence/{evidence_id}/download", headers=auth_headers())
    assert resp.status_code == 500
    assert resp.json()["code"] == "STORAGE_ERROR"
    assert fake_client.download_calls == []

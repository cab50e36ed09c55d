import pytest

from app.models.user import User
from app.repos.user.write import UserWriteRepo
from conftest import OTHER_DID, USER_DID, auth_headers

WALLET = "0x" + "AbCd" * 10


@pytest.fixture
def seeded(session_factory):
    with session_factory() as db:
        db.add(User(id=USER_DID, wallet_address=WALLET.lower()))
        db.commit()


def test_me_requires_auth(client):
    resp = client.get("/api/users/me")
    assert resp.status_code == 401


def test_me_returns_profile(client, seeded):
    resp = client.get("/api/users/me", headers=auth_headers())
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] == USER_DID
    assert data["wallet_address"] == WALLET.lower()
    assert data["updated_at"] is not None


def test_me_unknown_user_is_404(client):
    resp = client.get("/api/users/me", headers=auth_headers(OTHER_DID))
    assert resp.status_code == 404
    assert resp.json()["message"] == "User not found."


def test_get_by_did(client, seeded):
    resp = client.get(f"/api/users/{USER_DID}")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] == USER_DID
    assert "updated_at" not in data


def test_get_by_did_rejects_other_formats(client):
    resp = client.get("/api/users/did:web:example.com")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid DID format."


def test_get_by_unknown_did_is_404(client):
    resp = client.get(f"/api/users/{OTHER_DID}")
    assert resp.status_code == 404


def test_wallet_lookup_is_case_insensitive(client, seeded):
    resp = client.get(f"/api/users/wallet/{WALLET}")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"exists": True, "did": USER_DID}


def test_wallet_lookup_unknown_address(client):
    resp = client.get("/api/users/wallet/0x" + "1" * 40)
    assert resp.status_code == 200
    assert resp.json()["data"] == {"exists": False}


@pytest.mark.parametrize("address", ["0x123", "1234567890123456789012345678901234567890ab", "0x" + "g" * 40])
def test_wallet_lookup_rejects_malformed_address(client, address):
    resp = client.get(f"/api/users/wallet/{address}")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid wallet address format."


def test_ensure_exists_stores_lowercase_wallet(session_factory):
    with session_factory() as db:
        user = UserWriteRepo(db).ensure_exists(USER_DID, wallet_address=WALLET)
        assert user.wallet_address == WALLET.lower()

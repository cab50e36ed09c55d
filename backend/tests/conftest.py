"""Shared fixtures: an in-memory Synapse SDK double and an in-memory database."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db, get_storage
from app.auth.jwt import create_access_token
from app.db.session import init_db
from app.main import app
from app.services.storage import FilecoinStorage, SynapseClientProvider

PIECE_CID = "baga6ea4seaq" + "a" * 52
V0_CID = "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG"
V1_CID = "bafybei" + "a" * 52

USER_DID = "did:key:z6MkhaXgBZDvotDkL5257faiztiGiC2QtKLGpbnnEGta2doK"
OTHER_DID = "did:key:z6MkpTHR8VNsBxYAAWHut2Geadd9jSwuBV8xRoAnwWsdvktH"


class FakeContext:
    """Stands in for a Synapse storage context."""

    def __init__(self):
        self.service_provider = "0xProvider"
        self.data_set_id = 42
        self.result = {"pieceCid": PIECE_CID}
        self.ticks = ()
        self.upload_error = None
        self.status = {"exists": True, "retrievalUrl": "https://sp.example/piece/" + PIECE_CID}
        self.status_error = None
        self.uploads = []

    def upload(self, data, *, metadata, on_progress):
        self.uploads.append((data, dict(metadata)))
        for n in self.ticks:
            on_progress(n)
        if self.upload_error:
            raise self.upload_error
        return self.result

    def piece_status(self, piece_cid):
        if self.status_error:
            raise self.status_error
        return self.status


class FakeStorageManager:
    def __init__(self, context):
        self.context = context
        self.created_with = []

    def create_context(self, *, metadata):
        self.created_with.append(dict(metadata))
        return self.context

    def get_default_context(self):
        return self.context


class FakeSynapseClient:
    def __init__(self):
        self.context = FakeContext()
        self.storage = FakeStorageManager(self.context)
        self.blobs = {}
        self.download_error = None
        self.download_calls = []

    def download(self, piece_cid):
        self.download_calls.append(piece_cid)
        if self.download_error:
            raise self.download_error
        return self.blobs.get(piece_cid)


@pytest.fixture
def fake_client():
    return FakeSynapseClient()


@pytest.fixture
def storage(fake_client):
    return FilecoinStorage(SynapseClientProvider(factory=lambda: fake_client))


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def client(session_factory, storage):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(did: str = USER_DID) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject=did)}"}

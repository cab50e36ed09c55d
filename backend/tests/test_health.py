from sqlalchemy.exc import OperationalError

from app.api.deps import get_db
from app.core.config import settings
from app.main import app


def test_live(client):
    resp = client.get("/api/health/live")
    assert resp.status_code == 200
    assert resp.json() == {"status": "alive"}


def test_health_reports_services(client, monkeypatch):
    monkeypatch.setattr(settings, "BACKEND_PRIVATE_KEY", None)

    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["services"] == {"database": "connected", "storage": "not_configured"}
    assert body["version"] == settings.version
    assert body["environment"] == settings.env


def test_ready(client):
    resp = client.get("/api/health/ready")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ready"}


class _BrokenSession:
    def execute(self, *args, **kwargs):
        raise OperationalError("select 1", {}, Exception("database is locked"))


def test_ready_fails_without_database(client):
    app.dependency_overrides[get_db] = lambda: _BrokenSession()

    resp = client.get("/api/health/ready")
    assert resp.status_code == 503

    resp = client.get("/api/health")
    assert resp.json()["status"] == "degraded"
    assert resp.json()["services"]["database"] == "disconnected"


def test_request_id_is_echoed(client):
    resp = client.get("/api/health/live", headers={"x-request-id": "req-123"})
    assert resp.headers["x-request-id"] == "req-123"


def test_root(client):
    resp = client.get("/api/")
    assert resp.status_code == 200
    assert resp.json()["docs"] == "/docs"

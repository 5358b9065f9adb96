# File: tests/test_app.py

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_storage
from app.core.config import Settings, get_settings
from app.core.errors import StorageError
from app.core.security import create_session_token
from app.main import app, create_application
from conftest import register


def test_health_endpoint(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_startup_requires_session_secret():
    with pytest.raises(RuntimeError, match="SESSION_SECRET"):
        create_application(Settings(session_secret=None))


def test_production_cookie_is_secure(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "environment", "production")

    resp = register(client)
    assert resp.status_code == 201
    assert "Secure" in resp.headers["set-cookie"]


def test_token_for_deleted_user_rejected(client):
    resp = client.get(
        "/api/auth/me",
        headers={"Cookie": f"token={create_session_token('gone')}"},
    )
    assert resp.status_code == 401
    assert resp.json() == {"error": "User not found"}


class BrokenStorage:
    def get_all_posts(self):
        raise StorageError("Failed to fetch posts")

    def get_post(self, post_id):
        raise RuntimeError("boom: connection string user:pass@db")


@pytest.fixture
def broken_client():
    app.dependency_overrides[get_storage] = lambda: BrokenStorage()
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def test_storage_failure_is_generic_500(broken_client):
    resp = broken_client.get("/api/posts")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch posts"}


def test_unexpected_error_does_not_leak_details(broken_client):
    resp = broken_client.get("/api/posts/abc")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_settings_environment_read_at_import(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")

    assert Settings().environment == "test"
    assert Settings(environment="production").is_production

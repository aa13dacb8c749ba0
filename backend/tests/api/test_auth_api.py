"""API tests: admin login, session and logout."""
import pytest

pytestmark = pytest.mark.api


def test_login_success(client):
    """Valid credentials return a bearer token and expiry."""
    r = client.post("/api/auth/login", json={"username": "admin", "password": "password"})
    assert r.status_code == 200
    data = r.json()
    assert data["token"] and data["username"] == "admin" and data["expiresAt"]


def test_login_invalid(client):
    """Wrong password returns 401."""
    r = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid username or password"


def test_session_requires_token(client):
    """GET /api/auth/session without a token returns 401."""
    assert client.get("/api/auth/session").status_code == 401
    r = client.get("/api/auth/session", headers={"Authorization": "Bearer bogus"})
    assert r.status_code == 401


def test_session_and_logout(client, admin_headers):
    """Current session is visible until logout revokes it."""
    r = client.get("/api/auth/session", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["username"] == "admin" and r.json()["token"] is None
    assert client.post("/api/auth/logout", headers=admin_headers).status_code == 204
    assert client.get("/api/auth/session", headers=admin_headers).status_code == 401

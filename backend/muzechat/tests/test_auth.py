"""
Tests for authentication endpoints.
"""
from datetime import timedelta
from muzechat.core.config import settings
from muzechat.core.security import create_session_token
from muzechat.models.user import User


def test_login_creates_user(client, db):
    """Test first login provisions a user with a derived avatar."""
    response = client.post(
        "/api/auth/login",
        json={"username": "alice", "email": "alice@x.com"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"]["id"] == 1
    assert data["user"]["username"] == "alice"
    assert data["user"]["avatar_url"] == "https://api.dicebear.com/7.x/avataaars/svg?seed=alice"
    assert db.query(User).count() == 1
    assert settings.SESSION_COOKIE_NAME in response.cookies


def test_login_sets_http_only_cookie(client):
    """Test session cookie attributes."""
    response = client.post(
        "/api/auth/login",
        json={"username": "alice", "email": "alice@x.com"}
    )
    cookie_header = response.headers["set-cookie"].lower()
    assert "httponly" in cookie_header
    assert f"max-age={7 * 24 * 60 * 60}" in cookie_header
    assert "secure" not in cookie_header


def test_login_existing_user_by_either_field(client, db):
    """Test login matching username or email returns the same user."""
    first = client.post("/api/auth/login", json={"username": "alice", "email": "alice@x.com"}).json()
    by_username = client.post("/api/auth/login", json={"username": "alice", "email": "other@x.com"}).json()
    by_email = client.post("/api/auth/login", json={"username": "someone", "email": "alice@x.com"}).json()
    
    assert by_username["user"]["id"] == first["user"]["id"]
    assert by_email["user"]["id"] == first["user"]["id"]
    assert by_username["user"]["email"] == "alice@x.com"
    assert db.query(User).count() == 1


def test_login_missing_fields(client, db):
    """Test login without username or email."""
    for payload in ({"username": "alice"}, {"email": "alice@x.com"}, {"username": "  ", "email": "a@x.com"}, {}):
        response = client.post("/api/auth/login", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": "Username and email are required"}
    assert db.query(User).count() == 0


def test_login_store_failure(client, broken_db):
    """Test store errors collapse into a generic message."""
    response = client.post("/api/auth/login", json={"username": "alice", "email": "alice@x.com"})
    assert response.status_code == 500
    assert response.json() == {"error": "Login failed, please try again"}


def test_current_user(client, login):
    """Test /me after login."""
    user = login()
    response = client.get("/api/auth/me")
    assert response.status_code == 200
    assert response.json()["id"] == user["id"]


def test_current_user_without_session(client):
    """Test /me without a session returns null."""
    response = client.get("/api/auth/me")
    assert response.status_code == 200
    assert response.json() is None


def test_logout_clears_session(client, login):
    """Test logout then /me returns null."""
    login()
    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"success": True}
    
    assert client.get("/api/auth/me").json() is None


def test_tampered_token_is_anonymous(client, login):
    """Test a token not signed by us is ignored."""
    login()
    client.cookies.clear()
    client.cookies.set(settings.SESSION_COOKIE_NAME, "1")
    assert client.get("/api/auth/me").json() is None


def test_expired_token_is_anonymous(client, login):
    """Test an expired token is ignored."""
    user = login()
    client.cookies.clear()
    client.cookies.set(
        settings.SESSION_COOKIE_NAME,
        create_session_token(user["id"], expires_delta=timedelta(seconds=-10))
    )
    assert client.get("/api/auth/me").json() is None


def test_token_for_unknown_user_is_anonymous(client):
    """Test a valid token for a missing user is treated as logged out."""
    client.cookies.set(settings.SESSION_COOKIE_NAME, create_session_token(999))
    assert client.get("/api/auth/me").json() is None

# File: tests/test_auth.py

from conftest import register


def test_register_returns_user_and_sets_cookie(client):
    resp = register(client)
    assert resp.status_code == 201

    user = resp.json()["user"]
    assert user["username"] == "alice"
    assert user["email"] == "a@x.com"
    assert user["id"]
    assert "password" not in user

    cookie = resp.headers["set-cookie"]
    assert cookie.startswith("token=")
    assert "HttpOnly" in cookie
    assert "samesite=strict" in cookie.lower()
    assert "Max-Age=604800" in cookie
    assert "Secure" not in cookie


def test_me_after_register(client):
    created = register(client).json()["user"]

    resp = client.get("/api/auth/me")
    assert resp.status_code == 200
    assert resp.json() == {
        "user": {"id": created["id"], "username": "alice", "email": "a@x.com"}
    }


def test_me_without_cookie(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Authentication required"}


def test_me_with_garbage_token(client):
    resp = client.get("/api/auth/me", headers={"Cookie": "token=not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid or expired token"


def test_duplicate_email_rejected(client):
    assert register(client).status_code == 201
    resp = register(client, username="alice2")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Email already registered"


def test_duplicate_username_rejected(client):
    assert register(client).status_code == 201
    resp = register(client, email="other@x.com")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Username already taken"


def test_uniqueness_is_case_sensitive(client):
    assert register(client).status_code == 201
    resp = register(client, username="Alice", email="A@x.com")
    assert resp.status_code == 201


def test_short_password_rejected(client):
    resp = register(client, password="12345")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Password must be at least 6 characters"


def test_username_length_bounds(client):
    resp = register(client, username="al")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Username must be at least 3 characters"

    resp = register(client, username="a" * 21)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Username must be at most 20 characters"

    assert register(client, username="a" * 20).status_code == 201


def test_invalid_email_rejected(client):
    resp = register(client, email="not-an-email")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid email address"


def test_missing_field_reported(client):
    resp = client.post("/api/auth/register", json={"username": "alice", "email": "a@x.com"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "password is required"


def test_malformed_json_body(client):
    resp = client.post(
        "/api/auth/register",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request body"


def test_login_success_sets_cookie(make_client):
    register(make_client())

    client = make_client()
    resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "alice"
    assert "token=" in resp.headers["set-cookie"]

    assert client.get("/api/auth/me").status_code == 200


def test_wrong_password_and_unknown_email_look_the_same(make_client):
    register(make_client())

    wrong_password = make_client().post(
        "/api/auth/login", json={"email": "a@x.com", "password": "nope-nope"}
    )
    unknown_email = make_client().post(
        "/api/auth/login", json={"email": "ghost@x.com", "password": "secret1"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}
    assert "set-cookie" not in wrong_password.headers


def test_login_requires_password(client):
    resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": ""})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Password is required"


def test_logout_clears_cookie(client):
    register(client)

    resp = client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logged out successfully"}
    assert 'token=""' in resp.headers["set-cookie"] or "token=;" in resp.headers["set-cookie"]

    assert client.get("/api/auth/me").status_code == 401


def test_logout_without_session(client):
    assert client.post("/api/auth/logout").status_code == 200

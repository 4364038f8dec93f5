"""Authentication API tests."""

import pytest


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test that registration returns the public projection only."""
    response = client.post("/auth/register", json={"email": "a@x.com", "password": "pw1"})
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "a@x.com"
    assert data["role"] == "user"
    assert isinstance(data["id"], int)
    assert "password" not in data
    assert "passwordHash" not in data


def test_register_then_login(client):
    """Test that a registered user can log in and gets a token and the user role."""
    client.post("/auth/register", json={"email": "a@x.com", "password": "pw1"})

    response = client.post("/auth/login", json={"email": "a@x.com", "password": "pw1"})
    assert response.status_code == 200
    data = response.json()
    assert data["accessToken"]
    assert data["tokenType"] == "bearer"
    assert data["user"]["email"] == "a@x.com"
    assert data["user"]["role"] == "user"


def test_register_duplicate_email(client, auth_headers):
    """Test registration with duplicate email fails with a conflict."""
    response = client.post(
        "/auth/register", json={"email": auth_headers.email, "password": "password123"}
    )
    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["statusCode"] == 409
    assert "already registered" in body["message"]


def test_register_invalid_email(client):
    """Test that a malformed email is a bad request."""
    response = client.post("/auth/register", json={"email": "not-an-email", "password": "pw1"})
    assert response.status_code == 400
    assert response.json()["path"] == "/auth/register"


def test_login_failures_are_indistinguishable(client, auth_headers):
    """Test that unknown email and wrong password give the same response."""
    wrong_password = client.post(
        "/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    unknown_user = client.post(
        "/auth/login", json={"email": "nobody@example.com", "password": "testpass123"}
    )

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json()["message"] == unknown_user.json()["message"]
    assert wrong_password.headers["WWW-Authenticate"] == "Bearer"


def test_get_current_user(client, auth_headers):
    """Test getting current user information."""
    response = client.get("/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "id": auth_headers.user_id,
        "email": auth_headers.email,
        "role": "user",
    }


def test_me_requires_token(client):
    """Test that identity introspection requires a bearer token."""
    response = client.get("/auth/me")
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["path"] == "/auth/me"
    assert "timestamp" in body


def test_me_rejects_garbage_token(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer nonsense"})
    assert response.status_code == 401


def test_admin_route_forbidden_for_user(client, auth_headers):
    """Test that the role gate rejects plain users."""
    response = client.get("/auth/admin-test", headers=auth_headers)
    assert response.status_code == 403
    assert response.json()["statusCode"] == 403


def test_admin_route_allows_admin(client, admin_headers):
    """Test that the role gate admits admins."""
    response = client.get("/auth/admin-test", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "You are admin!"


def test_admin_route_requires_authentication(client):
    """Test that authentication runs before the role check."""
    response = client.get("/auth/admin-test")
    assert response.status_code == 401


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_register_keeps_email_exactly_as_given(client):
    """Test that emails differing only in case are distinct accounts."""
    first = client.post("/auth/register", json={"email": "a@X.com", "password": "pw1"})
    assert first.status_code == 201
    assert first.json()["email"] == "a@X.com"

    second = client.post("/auth/register", json={"email": "a@x.com", "password": "pw2"})
    assert second.status_code == 201
    assert second.json()["id"] != first.json()["id"]


def test_login_email_is_case_sensitive(client):
    client.post("/auth/register", json={"email": "a@X.com", "password": "pw1"})

    response = client.post("/auth/login", json={"email": "a@X.COM", "password": "pw1"})
    assert response.status_code == 401

    response = client.post("/auth/login", json={"email": "a@X.com", "password": "pw1"})
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "a@X.com"


@pytest.mark.parametrize(
    "credentials",
    [
        {"email": "nobody", "password": "testpass123"},
        {"email": "test@example.com", "password": "x" * 80},
        {"email": "test@example.com", "password": ""},
        {"email": "", "password": ""},
    ],
)
def test_login_with_odd_credentials_is_unauthorized(client, auth_headers, credentials):
    """Test that any well-formed body with bad credentials gets the same 401."""
    response = client.post("/auth/login", json=credentials)
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"

"""
HTTP tests for /api/auth/* and /api/users/profile.

Full app (routers + middleware + handlers) over in-memory repositories.
"""

import pytest

from catalog_api import container

pytestmark = pytest.mark.unit


class TestRegister:
    def test_register_returns_201_with_token(self, client):
        res = client.post(
            "/api/auth/register",
            json={"email": "Ada@Example.com", "password": "password123", "name": "Ada"},
        )

        assert res.status_code == 201
        body = res.json()
        assert body["token"]
        assert body["expires_in"] == 86400
        assert body["email"] == "ada@example.com"
        assert body["name"] == "Ada"
        assert body["is_admin"] is False
        assert "password" not in body
        assert "password_hash" not in body

    def test_duplicate_email_is_409(self, client, register_user):
        register_user(email="ada@example.com")
        res = client.post(
            "/api/auth/register",
            json={"email": "ada@example.com", "password": "password123", "name": "Ada"},
        )

        assert res.status_code == 409
        assert res.json()["error"] == "Email already registered"

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "", "password": "password123", "name": "Ada"},
            {"email": "ada@example.com", "password": "", "name": "Ada"},
            {"email": "ada@example.com", "password": "password123"},
            {},
        ],
    )
    def test_missing_fields_are_400(self, client, payload):
        res = client.post("/api/auth/register", json=payload)

        assert res.status_code == 400
        assert res.json()["error"] == "Email, password, and name are required"

    def test_short_password_is_400(self, client):
        res = client.post(
            "/api/auth/register",
            json={"email": "ada@example.com", "password": "short", "name": "Ada"},
        )
        assert res.status_code == 400

    def test_non_object_body_is_400(self, client):
        res = client.post("/api/auth/register", json=["not", "an", "object"])
        assert res.status_code == 400


class TestLogin:
    def test_login_succeeds(self, client, register_user):
        registered = register_user(email="ada@example.com", password="password123")

        res = client.post(
            "/api/auth/login", json={"email": "ada@example.com", "password": "password123"}
        )

        assert res.status_code == 200
        assert res.json()["user_id"] == registered["user_id"]

    def test_failures_are_indistinguishable(self, client, register_user):
        register_user(email="ada@example.com", password="password123")

        unknown = client.post(
            "/api/auth/login", json={"email": "nobody@example.com", "password": "password123"}
        )
        wrong = client.post(
            "/api/auth/login", json={"email": "ada@example.com", "password": "wrong-pass"}
        )

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json()["error"] == wrong.json()["error"] == "Invalid email or password"

    def test_empty_credentials_are_400(self, client):
        res = client.post("/api/auth/login", json={"email": " ", "password": ""})

        assert res.status_code == 400
        assert res.json()["error"] == "Email and password are required"


class TestRefresh:
    def test_refresh_reflects_promotion(self, client, register_user):
        registered = register_user()
        container.get_user_repository().set_admin(registered["user_id"], True)

        res = client.post(
            "/api/auth/refresh",
            headers={"Authorization": f"Bearer {registered['token']}"},
        )

        assert res.status_code == 200
        assert res.json()["is_admin"] is True

    def test_refresh_without_header_is_401(self, client):
        res = client.post("/api/auth/refresh")

        assert res.status_code == 401
        assert res.headers["WWW-Authenticate"] == "Bearer"

    def test_refresh_with_garbage_is_401(self, client):
        res = client.post("/api/auth/refresh", headers={"Authorization": "Bearer nope"})

        assert res.status_code == 401
        assert res.json()["error"] == "Invalid or expired token"

    def test_refresh_for_unknown_user_is_401(self, client, codec):
        from catalog_api.identity.token_codec import Identity

        token = codec.issue(Identity(user_id=999, email="ghost@example.com", is_admin=False))
        res = client.post("/api/auth/refresh", headers={"Authorization": f"Bearer {token}"})

        assert res.status_code == 401


class TestProfile:
    def test_get_profile(self, client, user_headers):
        res = client.get("/api/users/profile", headers=user_headers)

        assert res.status_code == 200
        body = res.json()
        assert body["email"] == "user@example.com"
        assert "password_hash" not in body

    def test_profile_requires_token(self, client):
        assert client.get("/api/users/profile").status_code == 401

    def test_update_profile_name(self, client, user_headers):
        res = client.put(
            "/api/users/profile", json={"name": "  New Name "}, headers=user_headers
        )

        assert res.status_code == 200
        assert res.json()["name"] == "New Name"
        assert client.get("/api/users/profile", headers=user_headers).json()["name"] == "New Name"

    def test_update_profile_requires_name(self, client, user_headers):
        res = client.put("/api/users/profile", json={"name": ""}, headers=user_headers)

        assert res.status_code == 400
        assert res.json()["error"] == "Name is required"

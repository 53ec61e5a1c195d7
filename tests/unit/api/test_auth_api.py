"""
Name: Authentication Endpoint Tests

Responsibilities:
  - POST /api/v1/users/login outcomes and rate limiting
  - Token validation on protected routes (missing, invalid, disabled, role-less)
  - GET /api/v1/me and PATCH /api/v1/me/update

Collaborators:
  - fastapi.testclient.TestClient (client fixture)
  - conftest factories (users, auth)
"""

from uuid import uuid4

import pytest

from divelog.identity.credentials import create_access_token
from divelog.identity.roles import Role

pytestmark = pytest.mark.unit

API = "/api/v1"
PASSWORD = "a-long-enough-password"


class TestLogin:
    def test_login_returns_usable_token(self, client, users):
        user = users.create(email="diver@example.com", password=PASSWORD)
        res = client.post(
            f"{API}/users/login",
            json={"email": " Diver@Example.com ", "password": PASSWORD},
        )
        assert res.status_code == 200
        token = res.json()["token"]

        me = client.get(f"{API}/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["data"]["id"] == str(user.id)

    def test_unknown_email(self, client):
        res = client.post(
            f"{API}/users/login",
            json={"email": "nobody@example.com", "password": PASSWORD},
        )
        assert res.status_code == 404
        assert res.json()["detail"] == "User not found!"

    def test_wrong_password(self, client, users):
        user = users.create()
        res = client.post(
            f"{API}/users/login", json={"email": user.email, "password": "wrong-password!"}
        )
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid credentials!"
        assert res.headers["content-type"].startswith("application/problem+json")

    def test_disabled_account(self, client, users):
        user = users.create(enabled=False, password=PASSWORD)
        res = client.post(
            f"{API}/users/login", json={"email": user.email, "password": PASSWORD}
        )
        assert res.status_code == 403
        assert res.json()["detail"] == "The account has been disabled!"

    def test_rate_limited_after_burst(self, client):
        body = {"email": "nobody@example.com", "password": "whatever-password"}
        statuses = [client.post(f"{API}/users/login", json=body).status_code for _ in range(5)]
        assert statuses == [404] * 5

        res = client.post(f"{API}/users/login", json=body)
        assert res.status_code == 429
        assert int(res.headers["Retry-After"]) >= 1
        assert res.json()["detail"] == (
            "Too many login attempts from this IP, please try again after 5 minutes."
        )

    def test_rate_limit_is_per_client(self, client):
        body = {"email": "nobody@example.com", "password": "whatever-password"}
        for _ in range(6):
            client.post(f"{API}/users/login", json=body)
        res = client.post(
            f"{API}/users/login", json=body, headers={"X-Forwarded-For": "10.1.2.3"}
        )
        assert res.status_code == 404


class TestTokenValidation:
    def test_missing_token(self, client):
        res = client.get(f"{API}/me")
        assert res.status_code == 401
        assert res.json()["detail"] == "Token is missing!"
        assert res.headers["WWW-Authenticate"] == "Bearer"

    def test_garbage_token(self, client):
        res = client.get(f"{API}/me", headers={"Authorization": "Bearer not.a.jwt"})
        assert res.status_code == 403
        assert res.json()["detail"] == "Token is invalid or expired!"

    def test_token_for_deleted_user(self, client):
        token = create_access_token(uuid4())
        res = client.get(f"{API}/me", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 401
        assert res.json()["detail"] == "User not found!"

    def test_disabled_user_token_rejected(self, client, users, auth, user_repo):
        user = users.create()
        headers = auth(user)
        user_repo.update_user(user.id, enabled=False)
        res = client.get(f"{API}/me", headers=headers)
        assert res.status_code == 403
        assert res.json()["detail"] == "The account has been disabled!"

    def test_user_whose_role_was_deleted(self, client, users, auth, role_repo):
        user = users.with_custom_role("guide")
        role_repo.delete_role(user.role.id)
        res = client.get(f"{API}/me", headers=auth(user))
        assert res.status_code == 401


class TestMe:
    def test_me_renders_without_password(self, client, users, auth):
        user = users.create(Role.ADMIN)
        body = client.get(f"{API}/me", headers=auth(user)).json()["data"]

        assert body["email"] == user.email
        assert body["fullName"] == user.full_name
        assert body["role"]["name"] == "admin"
        assert body["enabled"] is True
        assert "password" not in body and "passwordHash" not in body

    def test_update_me(self, client, users, auth):
        user = users.create()
        res = client.patch(
            f"{API}/me/update",
            headers=auth(user),
            json={"fullName": "Jacques", "email": "jacques@example.com"},
        )
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["fullName"] == "Jacques"
        assert data["email"] == "jacques@example.com"

    def test_update_me_password_allows_new_login(self, client, users, auth):
        user = users.create()
        client.patch(
            f"{API}/me/update", headers=auth(user), json={"password": "brand-new-password"}
        )
        res = client.post(
            f"{API}/users/login",
            json={"email": user.email, "password": "brand-new-password"},
        )
        assert res.status_code == 200

    def test_update_me_nothing_changed(self, client, users, auth):
        res = client.patch(f"{API}/me/update", headers=auth(users.create()), json={})
        assert res.status_code == 200
        assert res.json() == {"message": "Nothing changed!"}

    def test_update_me_duplicate_email(self, client, users, auth):
        other = users.create()
        res = client.patch(
            f"{API}/me/update", headers=auth(users.create()), json={"email": other.email}
        )
        assert res.status_code == 400
        assert res.json()["detail"] == "User with this email already exists!"

    def test_update_me_invalid_email(self, client, users, auth):
        res = client.patch(
            f"{API}/me/update", headers=auth(users.create()), json={"email": "bad"}
        )
        assert res.status_code == 422
        assert res.json()["detail"] == "Please include a valid email"

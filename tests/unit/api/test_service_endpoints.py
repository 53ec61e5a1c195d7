"""
Name: Service Endpoint and Error Shape Tests

Responsibilities:
  - Welcome, status and /healthz endpoints
  - X-Request-Id propagation
  - RFC 7807 bodies for database failures and unhandled exceptions
"""

from unittest.mock import Mock

import pytest
from fastapi import FastAPI

from divelog.crosscutting.exceptions import DatabaseError
from divelog.identity.roles import Role
from divelog.main import app as asgi_app

pytestmark = pytest.mark.unit

API = "/api/v1"


def test_root(client):
    res = client.get("/")
    assert res.json() == {"message": "Hello from Scuba dive log app!"}


def test_status(client):
    res = client.get(f"{API}/status")
    assert res.status_code == 200
    assert res.json() == {"status": "Up and running!"}


def test_healthz_ok(client):
    res = client.get("/healthz", headers={"X-Request-Id": "health-1"})
    assert res.status_code == 200
    body = res.json()
    assert body["ok"] is True
    assert body["db"] == "connected"
    assert body["request_id"] == "health-1"


def test_healthz_db_down(client, user_repo, monkeypatch):
    monkeypatch.setattr(user_repo, "ping", Mock(side_effect=DatabaseError("down")))
    res = client.get("/healthz")
    assert res.status_code == 503
    assert res.json()["db"] == "disconnected"


def test_request_id_generated(client):
    res = client.get(f"{API}/status")
    assert len(res.headers["X-Request-Id"]) == 36


def test_unknown_route_is_404(client):
    assert client.get(f"{API}/nowhere").status_code == 404


def test_database_error_maps_to_503(client, users, auth, user_repo, monkeypatch):
    headers = auth(users.create(Role.SUPER_ADMIN))
    monkeypatch.setattr(
        user_repo, "list_users", Mock(side_effect=DatabaseError("relation missing"))
    )
    res = client.get(f"{API}/users", headers=headers)

    assert res.status_code == 503
    body = res.json()
    assert body["code"] == "DATABASE_ERROR"
    assert body["detail"] == "Database operation failed."
    assert "relation missing" not in res.text
    assert any("error_id" in e for e in body["errors"])


def test_unhandled_error_is_generic_500(client, users, auth, log_repo, monkeypatch):
    headers = auth(users.create())
    monkeypatch.setattr(log_repo, "list_logs", Mock(side_effect=RuntimeError("secret")))
    res = client.get(f"{API}/logbooks", headers=headers)

    assert res.status_code == 500
    assert res.json()["detail"] == "Something went wrong. Please try again later."
    assert "secret" not in res.text


def test_problem_details_shape(client):
    res = client.get(f"{API}/me", headers={"X-Request-Id": "abc"})
    body = res.json()
    assert set(body) >= {"type", "title", "status", "detail", "code", "instance"}
    assert body["status"] == 401
    assert {"request_id": "abc"} in body["errors"]


def test_openapi_lists_routes(client):
    paths = client.get("/openapi.json").json()["paths"]
    for path in (
        f"{API}/users/login",
        f"{API}/me",
        f"{API}/me/update",
        f"{API}/users",
        f"{API}/users/{{user_id}}",
        f"{API}/roles",
        f"{API}/logbooks",
        f"{API}/logbooks/{{log_id}}",
    ):
        assert path in paths


def test_uvicorn_entry_point_exposes_app():
    assert isinstance(asgi_app, FastAPI)
    assert any(getattr(r, "path", None) == f"{API}/logbooks" for r in asgi_app.routes)


def test_openapi_documents_rate_limit_and_db_errors(client):
    login = client.get("/openapi.json").json()["paths"][f"{API}/users/login"]["post"]
    assert {"429", "503"} <= set(login["responses"])

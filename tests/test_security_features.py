"""Tests covering security and hardening features."""

from __future__ import annotations

from sqlalchemy.exc import OperationalError

from conftest import build_app
from helpers import register
from models import db


def test_cors_allows_configured_origin():
    app = build_app(CORS_ORIGINS=["https://client.example"])
    client = app.test_client()

    response = client.get(
        "/api/health", headers={"Origin": "https://client.example"}
    )

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == "https://client.example"
    assert response.headers.get("X-Request-ID")


def test_request_id_is_echoed():
    client = build_app().test_client()

    response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"


def test_rate_limit_exceeded_returns_json():
    app = build_app(RATE_LIMIT="2 per minute")
    client = app.test_client()

    client.get("/api/health")
    client.get("/api/health")
    response = client.get("/api/health")

    assert response.status_code == 429
    payload = response.get_json()
    assert payload["error"] == "Too Many Requests"
    assert "request_id" in payload


def test_json_error_shape_for_invalid_request():
    client = build_app().test_client()

    response = client.post(
        "/api/register",
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "Bad Request"
    assert "Request content type" in payload["detail"]
    assert payload["request_id"]


def test_non_object_json_is_rejected():
    client = build_app().test_client()

    response = client.post("/api/login", json=["ann@x.com", "secret"])

    assert response.status_code == 400
    assert "must be an object" in response.get_json()["detail"]


def test_database_failure_is_redacted(app, client, monkeypatch):
    def _fail_commit():
        raise OperationalError("INSERT INTO users", {}, Exception("db password=hunter2"))

    monkeypatch.setattr(db.session, "commit", _fail_commit)

    response = register(client)

    assert response.status_code == 500
    payload = response.get_json()
    assert payload["error"] == "Internal Server Error"
    assert payload["detail"] == "An unexpected error occurred."
    assert "hunter2" not in response.get_data(as_text=True)


def test_unauthorized_response_carries_request_id(client):
    response = client.get("/api/my-reviews", headers={"X-Request-ID": "req-7"})

    assert response.status_code == 401
    assert response.get_json()["request_id"] == "req-7"

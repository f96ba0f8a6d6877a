"""
Tests for the error envelope, health endpoints and middleware.
"""

import json
import re

from fastapi.testclient import TestClient

from core.errors import UnavailableError
from core.models import UserProfile
from core.services import ProfileLifecycleService


def test_unhandled_exception_returns_error_code(test_app_client):
    client, _ = test_app_client
    app = client.app

    @app.get("/boom")
    def boom():
        raise RuntimeError("database password is hunter2")

    resp = TestClient(app, raise_server_exceptions=False).get("/boom")

    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "Internal server error"
    assert re.fullmatch(r"ERR_[0-9A-F]{10}", body["errorCode"])
    assert "hunter2" not in resp.text


def test_store_outage_is_retryable_500(test_app_client, monkeypatch):
    client, _ = test_app_client

    def unavailable(self, filters, page_request):
        raise UnavailableError()

    monkeypatch.setattr(ProfileLifecycleService, "search", unavailable)

    resp = client.get("/api/profiles")

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Internal server error"
    assert body["retryable"] is True
    assert body["errorCode"].startswith("ERR_")


def test_unknown_route_uses_envelope(test_app_client):
    client, _ = test_app_client

    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.json()["success"] is False


def test_path_parameter_validation(test_app_client):
    client, _ = test_app_client

    resp = client.get("/api/profiles/not-a-number")

    assert resp.status_code == 400
    assert resp.json()["data"][0]["field"] == "profileId"


def test_request_id_is_echoed_or_generated(test_app_client):
    client, _ = test_app_client

    echoed = client.get("/health", headers={"X-Request-ID": "abc-123"})
    generated = client.get("/health", headers={"X-Request-ID": "bad id with spaces"})

    assert echoed.headers["x-request-id"] == "abc-123"
    assert generated.headers["x-request-id"] != "bad id with spaces"
    assert len(generated.headers["x-request-id"]) == 36


def test_security_headers(test_app_client):
    client, _ = test_app_client

    resp = client.get("/health")

    assert resp.json() == {"status": "ok"}
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert "Content-Security-Policy" in resp.headers
    # HSTS is production only
    assert "Strict-Transport-Security" not in resp.headers


def test_oversized_request_rejected(test_app_client, auth_headers):
    client, _ = test_app_client
    big = "x" * (2 * 1024 * 1024)

    resp = client.post(
        "/api/profiles",
        content=big,
        headers={**auth_headers(), "Content-Type": "application/json"},
    )

    assert resp.status_code == 413
    assert resp.json()["success"] is False


def test_oversized_chunked_request_rejected(test_app_client, auth_headers):
    client, session_factory = test_app_client

    def chunks():
        for _ in range(40):
            yield b"x" * (64 * 1024)

    resp = client.post(
        "/api/profiles",
        content=chunks(),
        headers={**auth_headers(), "Content-Type": "application/json"},
    )

    assert resp.status_code == 413
    body = resp.json()
    assert body["success"] is False
    assert body["error"].startswith("Request too large")

    session = session_factory()
    assert session.query(UserProfile).count() == 0
    session.close()


def test_small_chunked_request_passes_size_limit(test_app_client, auth_headers, profile_payload):
    client, _ = test_app_client
    raw = json.dumps(profile_payload).encode()

    def chunks():
        yield raw[:10]
        yield raw[10:]

    resp = client.post(
        "/api/profiles",
        content=chunks(),
        headers={**auth_headers(), "Content-Type": "application/json"},
    )

    assert resp.status_code == 201


def test_readiness_reports_database(test_app_client, monkeypatch):
    client, _ = test_app_client
    from backend.app import main

    monkeypatch.setattr(main.db, "health_check", lambda: {"healthy": False, "latency_ms": 0, "error": "down"})
    resp = client.get("/health/ready")
    assert resp.status_code == 503
    assert resp.json()["status"] == "not_ready"

    monkeypatch.setattr(main.db, "health_check", lambda: {"healthy": True, "latency_ms": 1.0, "error": None})
    resp = client.get("/health/ready")
    assert resp.status_code == 200
    assert resp.json()["checks"] == {"database": True, "cache": False}

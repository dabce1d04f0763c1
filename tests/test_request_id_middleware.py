from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ladybug_api.core.middleware import SECURITY_HEADERS


@pytest.fixture
def client(make_app) -> TestClient:
    return TestClient(make_app())


def test_preserves_incoming_request_id_header(client: TestClient):
    incoming_id = "test-request-id-123"
    resp = client.get("/health", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing(client: TestClient):
    resp = client.get("/health")

    assert resp.status_code == 200
    generated = resp.headers.get("X-Request-ID")
    assert generated
    assert isinstance(generated, str)

    duration = resp.headers.get("X-Request-Duration-ms")
    assert duration is not None


def test_request_id_appears_in_error_body(client: TestClient):
    resp = client.get("/tools/hash", headers={"X-Request-ID": "req-err-1"})

    assert resp.status_code == 400
    assert resp.json()["error"]["request_id"] == "req-err-1"


def test_unhandled_error_keeps_request_id_and_headers(make_app):
    app = make_app()

    @app.get("/crash")
    async def crash():
        raise RuntimeError("database connection failed")

    resp = TestClient(app).get("/crash", headers={"X-Request-ID": "req-500"})

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"]["code"] == "internal_server_error"
    assert body["error"]["request_id"] == "req-500"
    assert "database connection" not in resp.text
    assert resp.headers["X-Request-ID"] == "req-500"
    for name, value in SECURITY_HEADERS.items():
        assert resp.headers[name] == value


def test_generated_request_id_matches_500_body(make_app):
    app = make_app()

    @app.get("/crash")
    async def crash():
        raise ValueError("boom")

    resp = TestClient(app).get("/crash")

    assert resp.status_code == 500
    assert resp.json()["error"]["request_id"] == resp.headers["X-Request-ID"]


def test_security_headers_on_every_response(client: TestClient):
    for path in ("/health", "/tools/hash?text=x", "/does-not-exist"):
        resp = client.get(path)
        for name, value in SECURITY_HEADERS.items():
            assert resp.headers[name] == value

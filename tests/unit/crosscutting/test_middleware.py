"""Unit tests for request context, body limit, timeout and security headers."""

import asyncio

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from catalog_api.crosscutting.middleware import (
    BodyLimitMiddleware,
    RequestContextMiddleware,
    RequestTimeoutMiddleware,
)
from catalog_api.crosscutting.security import SecurityHeadersMiddleware

pytestmark = pytest.mark.unit


def _echo_app() -> FastAPI:
    app = FastAPI()

    @app.get("/ping")
    def _ping(request: Request):
        return {"request_id": getattr(request.state, "request_id", None)}

    @app.post("/upload")
    async def _upload(request: Request):
        body = await request.body()
        return {"size": len(body)}

    @app.get("/slow")
    async def _slow():
        await asyncio.sleep(1)
        return {"ok": True}

    return app


class TestRequestContext:
    def test_generates_request_id(self):
        app = _echo_app()
        app.add_middleware(RequestContextMiddleware)

        res = TestClient(app).get("/ping")

        assert res.headers["X-Request-Id"]
        assert res.json()["request_id"] == res.headers["X-Request-Id"]

    def test_propagates_incoming_request_id(self):
        app = _echo_app()
        app.add_middleware(RequestContextMiddleware)

        res = TestClient(app).get("/ping", headers={"X-Request-Id": "abc-123"})
        assert res.headers["X-Request-Id"] == "abc-123"

    def test_oversized_request_id_is_replaced(self):
        app = _echo_app()
        app.add_middleware(RequestContextMiddleware)

        res = TestClient(app).get("/ping", headers={"X-Request-Id": "x" * 500})
        assert res.headers["X-Request-Id"] != "x" * 500


class TestBodyLimit:
    def test_small_body_passes(self):
        app = _echo_app()
        app.add_middleware(BodyLimitMiddleware, max_bytes=64)

        res = TestClient(app).post("/upload", content=b"x" * 10)
        assert res.json() == {"size": 10}

    def test_large_body_is_413(self):
        app = _echo_app()
        app.add_middleware(BodyLimitMiddleware, max_bytes=64)

        res = TestClient(app).post("/upload", content=b"x" * 1000)

        assert res.status_code == 413
        assert res.json()["code"] == "PAYLOAD_TOO_LARGE"


class TestRequestTimeout:
    def test_slow_handler_is_cut_off(self):
        app = _echo_app()
        app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=0.05)

        res = TestClient(app).get("/slow")

        assert res.status_code == 503
        assert res.json()["error"] == "Request timed out"

    def test_fast_handler_is_untouched(self):
        app = _echo_app()
        app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=5)
        app.add_middleware(RequestContextMiddleware)

        assert TestClient(app).get("/ping").status_code == 200


class TestSecurityHeaders:
    def test_headers_present_outside_production(self):
        app = _echo_app()
        app.add_middleware(SecurityHeadersMiddleware, is_production=False)

        res = TestClient(app).get("/ping", headers={"X-Forwarded-Proto": "https"})

        assert res.headers["X-Content-Type-Options"] == "nosniff"
        assert res.headers["X-Frame-Options"] == "DENY"
        assert res.headers["Content-Security-Policy"].startswith("default-src 'none'")
        assert "Strict-Transport-Security" not in res.headers

    def test_docs_are_exempt_from_api_csp(self):
        app = _echo_app()
        app.add_middleware(SecurityHeadersMiddleware, is_production=False)

        res = TestClient(app).get("/docs")

        assert res.status_code == 200
        assert "Content-Security-Policy" not in res.headers

    def test_production_sets_hsts_behind_https_proxy(self):
        app = _echo_app()
        app.add_middleware(SecurityHeadersMiddleware, is_production=True)
        client = TestClient(app)

        https = client.get("/ping", headers={"X-Forwarded-Proto": "https"})
        plain = client.get("/ping")

        assert https.headers["Strict-Transport-Security"].startswith("max-age=")
        assert "Strict-Transport-Security" not in plain.headers

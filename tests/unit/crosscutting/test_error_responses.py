"""Unit tests for error factories and the {"error": ...} envelope."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from catalog_api.api.exception_handlers import register_exception_handlers
from catalog_api.crosscutting.error_responses import (
    ErrorCode,
    conflict,
    forbidden,
    internal_error,
    not_found,
    payload_too_large,
    service_unavailable,
    unauthorized,
    validation_error,
)
from catalog_api.crosscutting.exceptions import DatabaseError
from catalog_api.infrastructure.db.errors import PoolNotInitializedError

pytestmark = pytest.mark.unit


class TestErrorFactories:
    @pytest.mark.parametrize(
        "factory,status,code",
        [
            (lambda: validation_error("bad"), 400, ErrorCode.VALIDATION_ERROR),
            (lambda: unauthorized(), 401, ErrorCode.UNAUTHORIZED),
            (lambda: forbidden("Admin only"), 403, ErrorCode.FORBIDDEN),
            (lambda: not_found("Movie not found"), 404, ErrorCode.NOT_FOUND),
            (lambda: conflict("dup"), 409, ErrorCode.CONFLICT),
            (lambda: payload_too_large(10), 413, ErrorCode.PAYLOAD_TOO_LARGE),
            (lambda: internal_error(), 500, ErrorCode.INTERNAL_ERROR),
            (lambda: service_unavailable("database"), 503, ErrorCode.SERVICE_UNAVAILABLE),
        ],
    )
    def test_status_and_code(self, factory, status, code):
        exc = factory()
        assert exc.status_code == status
        assert exc.code == code

    def test_validation_error_carries_field_errors(self):
        exc = validation_error("Invalid input", [{"field": "name", "msg": "required"}])
        assert exc.errors == [{"field": "name", "msg": "required"}]


class _Payload(BaseModel):
    name: str
    year: int


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/conflict")
    def _conflict():
        raise conflict("Category is being used by movies")

    @app.post("/payload")
    def _payload(body: _Payload):
        return body

    @app.get("/db")
    def _db():
        raise DatabaseError("relation movies does not exist: SELECT * FROM movies")

    @app.get("/pool")
    def _pool():
        raise PoolNotInitializedError("pool not ready")

    @app.get("/boom")
    def _boom():
        raise RuntimeError("secret stacktrace detail")

    return app


@pytest.fixture
def error_client():
    return TestClient(_build_app(), raise_server_exceptions=False)


def test_app_exception_envelope(error_client):
    res = error_client.get("/conflict")

    assert res.status_code == 409
    assert res.json() == {
        "error": "Category is being used by movies",
        "code": "CONFLICT",
        "status": 409,
    }


def test_request_validation_is_400_without_echoing_input(error_client):
    res = error_client.post("/payload", json={"name": "x", "year": "not-a-number"})

    assert res.status_code == 400
    body = res.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["errors"][0]["field"] == "year"
    assert "not-a-number" not in res.text


def test_malformed_json_is_400(error_client):
    res = error_client.post(
        "/payload", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert res.status_code == 400


def test_unknown_route_uses_envelope(error_client):
    res = error_client.get("/nope")

    assert res.status_code == 404
    assert res.json()["code"] == "NOT_FOUND"


def test_database_error_is_sanitized(error_client):
    res = error_client.get("/db")

    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Internal server error"
    assert body["errors"][0]["error_id"]
    assert "SELECT" not in res.text


def test_pool_error_is_503(error_client):
    res = error_client.get("/pool")

    assert res.status_code == 503
    assert res.json()["code"] == "SERVICE_UNAVAILABLE"


def test_unhandled_exception_is_sanitized(error_client):
    res = error_client.get("/boom")

    assert res.status_code == 500
    assert res.json()["error"] == "Internal server error"
    assert "secret stacktrace detail" not in res.text

"""Tests for request id propagation and the unhandled-error JSON envelope."""

import logging

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from linen.middleware.error_handler import ErrorHandlerMiddleware, get_error_response
from linen.middleware.request_id import RequestIdMiddleware
from linen.utils.logging import RequestContext, RequestIdFilter


@pytest.fixture
def client():
    app = FastAPI()
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)

    @app.get("/ok")
    async def ok():
        return {"request_id": RequestContext.get_request_id()}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded with secrets")

    @app.get("/missing")
    async def missing():
        raise HTTPException(status_code=404, detail="Nope")

    return TestClient(app)


def test_request_id_generated_and_echoed(client):
    response = client.get("/ok")

    request_id = response.headers["X-Request-ID"]
    assert request_id
    assert response.json()["request_id"] == request_id


def test_incoming_request_id_is_reused(client):
    response = client.get("/ok", headers={"X-Request-ID": "trace-123"})

    assert response.headers["X-Request-ID"] == "trace-123"
    assert response.json()["request_id"] == "trace-123"


def test_context_cleared_after_request(client):
    client.get("/ok", headers={"X-Request-ID": "trace-456"})
    assert RequestContext.get_request_id() is None


def test_unhandled_exception_becomes_json_500(client):
    response = client.get("/boom", headers={"X-Request-ID": "trace-789"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"]["message"] == "Internal server error"
    assert "secrets" not in response.text
    assert body["request_id"] == "trace-789"


def test_http_exceptions_pass_through(client):
    response = client.get("/missing")

    assert response.status_code == 404
    assert response.json() == {"detail": "Nope"}


def test_get_error_response_shape():
    body = get_error_response(ValueError("bad"), request_id="abc")
    assert body == {"error": {"message": "bad"}, "request_id": "abc"}


def test_request_id_filter_stamps_records():
    record = logging.LogRecord("linen", logging.INFO, __file__, 1, "msg", None, None)

    RequestContext.set(request_id="rid-1")
    try:
        RequestIdFilter().filter(record)
    finally:
        RequestContext.clear()

    assert record.request_id == "rid-1"

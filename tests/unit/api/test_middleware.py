"""
Name: HTTP Middleware Tests

Responsibilities:
  - X-Request-Id is echoed or generated
  - HTTP metrics are labelled by route template, never by raw path
  - BodyLimitMiddleware answers 413 problem+json
  - Health endpoints report the store state
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from catait.api import main as api_main
from catait.crosscutting import metrics
from catait.crosscutting.middleware import (
    UNMATCHED_ROUTE,
    BodyLimitMiddleware,
    RequestContextMiddleware,
)

pytestmark = pytest.mark.unit


def _echo_app(max_bytes: int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(BodyLimitMiddleware, max_bytes=max_bytes)
    app.add_middleware(RequestContextMiddleware)

    @app.post("/echo")
    async def echo(payload: dict):
        return payload

    return app


def test_request_id_is_echoed(client):
    response = client.get("/cards", headers={"X-Request-Id": "abc-123"})

    assert response.headers["X-Request-Id"] == "abc-123"


def test_request_id_is_generated_when_absent(client):
    response = client.get("/cards")

    assert len(response.headers["X-Request-Id"]) == 36


def test_overlong_request_id_is_replaced(client):
    response = client.get("/cards", headers={"X-Request-Id": "x" * 200})

    assert response.headers["X-Request-Id"] != "x" * 200


def test_body_over_limit_is_413():
    client = TestClient(_echo_app(max_bytes=16))

    response = client.post("/echo", json={"data": "x" * 64})

    assert response.status_code == 413
    assert response.headers["content-type"] == "application/problem+json"
    body = response.json()
    assert body["code"] == "PAYLOAD_TOO_LARGE"
    assert body["status"] == 413


def test_body_under_limit_passes():
    client = TestClient(_echo_app(max_bytes=1024))

    response = client.post("/echo", json={"ok": True})

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_healthz_reports_disconnected_store(client, monkeypatch):
    monkeypatch.setattr(api_main, "_db_status", lambda: "disconnected")

    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["ok"] is False


def test_readyz_is_503_when_store_is_down(client, monkeypatch):
    monkeypatch.setattr(api_main, "_db_status", lambda: "disconnected")

    assert client.get("/readyz").status_code == 503


def test_readyz_ok_when_store_is_up(client, monkeypatch):
    monkeypatch.setattr(api_main, "_db_status", lambda: "connected")

    response = client.get("/readyz")

    assert response.status_code == 200
    assert response.json()["db"] == "connected"


def _request_endpoint_labels() -> set[str]:
    return {
        sample.labels["endpoint"]
        for metric in metrics._registry.collect()
        for sample in metric.samples
        if sample.name == "catait_requests_total"
    }


def test_request_metrics_use_route_template(client):
    for i in range(50):
        client.get(f"/cards/x{i}")
    client.get("/api/cards/abc")
    client.get("/no/such/path/42")

    endpoints = _request_endpoint_labels()

    assert "/cards/{card_id}" in endpoints
    assert "/api/cards/{card_id}" in endpoints
    assert UNMATCHED_ROUTE in endpoints
    assert not any("x1" in e or "abc" in e or "such" in e for e in endpoints)


def test_request_metrics_series_do_not_grow_with_distinct_ids(client):
    client.get("/cards/first")
    before = len(_request_endpoint_labels())

    for i in range(50):
        client.get(f"/cards/other-{i}")

    assert len(_request_endpoint_labels()) == before

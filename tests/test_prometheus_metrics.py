from fastapi import FastAPI
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from api.app.middlewares import MetricsMiddleware
from api.app.routes_metrics import router as metrics_router


def _make_app():
    app = FastAPI()
    app.add_middleware(MetricsMiddleware)
    app.include_router(metrics_router)

    @app.get("/api/business/{owner_id}")
    async def business(owner_id: int):
        return {"ok": True}

    @app.get("/crash")
    async def crash():
        raise RuntimeError("boom")

    return app


def test_metrics_expose_counters():
    client = TestClient(_make_app())
    client.get("/missing")
    client.get("/api/business/41")
    client.get("/api/business/42")
    text = client.get("/metrics").text
    assert "http_requests_total" in text
    assert 'status="404"' in text
    assert 'path="unmatched"' in text
    assert 'path="/api/business/{owner_id}"' in text
    assert "/api/business/42" not in text
    assert "http_errors_total" in text
    assert "http_request_duration_seconds_bucket" in text
    assert "feedback_submitted_total" in text
    assert "feedback_deleted_total" in text


def _sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_unhandled_errors_are_counted():
    request_labels = {"path": "/crash", "method": "GET", "status": "500"}
    error_labels = {"status": "500", "method": "GET"}
    requests_before = _sample("http_requests_total", request_labels)
    errors_before = _sample("http_errors_total", error_labels)

    client = TestClient(_make_app(), raise_server_exceptions=False)
    assert client.get("/crash").status_code == 500

    assert _sample("http_requests_total", request_labels) == requests_before + 1
    assert _sample("http_errors_total", error_labels) == errors_before + 1

# routes_metrics.py

"""Prometheus metrics and the /metrics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

http_requests_total = Counter(
    "http_requests_total", "Total HTTP requests", ["path", "method", "status"]
)
http_errors_total = Counter(
    "http_errors_total", "HTTP responses with status >= 400", ["status", "method"]
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "Request latency by route template",
    ["path", "method"],
)
feedback_submitted_total = Counter(
    "feedback_submitted_total", "Feedback submissions stored"
)
feedback_deleted_total = Counter(
    "feedback_deleted_total", "Feedback records removed by owner bulk delete"
)
# Export zero-valued series before the first event
for _counter in (feedback_submitted_total, feedback_deleted_total):
    _counter.inc(0)

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "router",
    "http_requests_total",
    "http_errors_total",
    "http_request_duration_seconds",
    "feedback_submitted_total",
    "feedback_deleted_total",
]

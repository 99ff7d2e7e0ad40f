"""Request counters and latency histogram keyed by route template."""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..routes_metrics import (
    http_errors_total,
    http_request_duration_seconds,
    http_requests_total,
)


def _route_label(request: Request) -> str:
    # /api/business/{owner_id} rather than one series per owner
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


def _record(request: Request, status_code: int, start: float) -> None:
    path = _route_label(request)
    status = str(status_code)
    http_requests_total.labels(path=path, method=request.method, status=status).inc()
    http_request_duration_seconds.labels(path=path, method=request.method).observe(
        time.perf_counter() - start
    )
    if status_code >= 400:
        http_errors_total.labels(status=status, method=request.method).inc()


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count every response and every 4xx/5xx, and time the request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Rendered as a 500 by an outer middleware
            _record(request, 500, start)
            raise
        _record(request, response.status_code, start)
        return response

"""HTTP middlewares installed by :mod:`api.app.main`."""

from .logging import LoggingMiddleware
from .metrics import MetricsMiddleware
from .request_id import RequestIdMiddleware, current_request_id, request_id_ctx

__all__ = [
    "LoggingMiddleware",
    "MetricsMiddleware",
    "RequestIdMiddleware",
    "current_request_id",
    "request_id_ctx",
]

"""Structured access log for every request.

One ``inbound`` and one ``outbound`` JSON line are written to the ``api``
logger. Credentials and e-mail addresses are masked before anything is
written. Successful responses are sampled at ``LOG_SAMPLE_2XX``; public
feedback submissions and every error are always logged.
"""

import json
import logging
import os
import random
import time
import uuid
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from ..utils.responses import err
from .request_id import REQUEST_ID_HEADER, request_id_ctx, resolve_request_id

REDACTED = "***"
PII_KEYS = {"password", "newpassword", "token", "email", "username"}
LOG_SAMPLE_2XX = float(os.getenv("LOG_SAMPLE_2XX", "0.1"))
ALWAYS_LOGGED = {("POST", "/api/feedbacks"), ("POST", "/api/feedback")}

logger = logging.getLogger("api")


def redact(obj: Any) -> Any:
    """Mask values under credential-like keys at any depth."""
    if isinstance(obj, dict):
        return {
            k: (REDACTED if k.lower() in PII_KEYS else redact(v))
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [redact(v) for v in obj]
    return obj


def _parse_json(raw: bytes) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _sampled_out(method: str, path: str, status: int) -> bool:
    if not 200 <= status < 300 or (method, path) in ALWAYS_LOGGED:
        return False
    return random.random() >= LOG_SAMPLE_2XX


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log request and response metadata and turn crashes into 500 envelopes."""

    async def dispatch(self, request: Request, call_next):
        req_id = getattr(request.state, "request_id", None)
        ctx_token = None
        if req_id is None:
            # Installed without RequestIdMiddleware
            req_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
            request.state.request_id = req_id
            ctx_token = request_id_ctx.set(req_id)

        raw = await request.body()

        async def replay() -> dict:
            return {"type": "http.request", "body": raw, "more_body": False}

        request._receive = replay

        inbound: dict[str, Any] = {
            "event": "inbound",
            "req_id": req_id,
            "method": request.method,
            "path": request.url.path,
            "ip": request.client.host if request.client else None,
        }
        if request.query_params:
            inbound["query"] = redact(dict(request.query_params))
        body = _parse_json(raw)
        if body is not None:
            inbound["body"] = redact(body)

        started = time.perf_counter()
        error_id = None
        try:
            response = await call_next(request)
        except Exception:
            error_id = uuid.uuid4().hex
            logger.exception("unhandled error %s on %s", error_id, request.url.path)
            payload = err(500, "Internal Server Error")
            payload["error_id"] = error_id
            response = JSONResponse(payload, status_code=500)

        outbound: dict[str, Any] = {
            "event": "outbound",
            "req_id": req_id,
            "route": request.url.path,
            "status": response.status_code,
            "latency_ms": int((time.perf_counter() - started) * 1000),
        }
        if error_id:
            outbound["error_id"] = error_id

        if not _sampled_out(request.method, request.url.path, response.status_code):
            logger.info(json.dumps(inbound))
            if response.status_code >= 500:
                logger.error(json.dumps(outbound))
            else:
                logger.info(json.dumps(outbound))

        response.headers[REQUEST_ID_HEADER] = req_id
        if ctx_token is not None:
            request_id_ctx.reset(ctx_token)
        return response

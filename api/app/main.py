# main.py

"""FastAPI application for collecting and reporting customer feedback."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings

from .errors import register_handlers
from .middlewares import LoggingMiddleware, MetricsMiddleware, RequestIdMiddleware
from .obs.logging import configure_logging
from .routes_auth import router as auth_router
from .routes_feedback import router as feedback_router
from .routes_metrics import router as metrics_router
from .routes_public import router as public_router
from .utils.responses import err, ok

settings = get_settings()
configure_logging(settings.log_level.upper())
logger = logging.getLogger("api")

app = FastAPI(title="Feedback API", version="1.0.0")


def _parse_origins(raw: str) -> list[str]:
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


origins = _parse_origins(settings.allowed_origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    # Browsers reject "*" with credentials
    allow_credentials=bool(origins),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIdMiddleware)

register_handlers(app)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    loc = [str(p) for p in first.get("loc", ())]
    field = ".".join(loc[1:]) or (loc[0] if loc else "body")
    message = first.get("msg", "Invalid request")
    logger.warning(message, extra={"status": 400, "route": request.url.path})
    return JSONResponse(
        err(400, message, {"field": field}),
        status_code=400,
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        exc.detail,
        extra={"status": exc.status_code, "route": request.url.path},
    )
    return JSONResponse(err(exc.status_code, exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    logger.exception(
        "unhandled_error",
        extra={"status": 500, "route": request.url.path},
    )
    return JSONResponse(err(500, "Internal Server Error"), status_code=500)


@app.get("/health")
async def health() -> dict:
    return ok({"status": "ok"})


app.include_router(auth_router)
app.include_router(feedback_router)
app.include_router(public_router)
app.include_router(metrics_router)

"""Typed errors raised by services and repositories.

Every error carries a human readable ``message``; validation errors also name
the offending ``field`` so callers can render field level feedback. The HTTP
layer maps each class to a status code through :func:`register_handlers`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .utils.responses import err

logger = logging.getLogger("api")


class FeedbackAppError(Exception):
    """Base class for domain errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict | None:
        return None


class ValidationError(FeedbackAppError):
    """Malformed or out-of-domain input."""

    status_code = 400

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field

    def details(self) -> dict | None:
        return {"field": self.field}


class NotFound(FeedbackAppError):
    """A referenced owner or token does not exist."""

    status_code = 404


class Unauthorized(FeedbackAppError):
    """Missing or invalid credentials."""

    status_code = 401


class InternalError(FeedbackAppError):
    """Persistence failure during insert, select or delete."""

    status_code = 500


async def app_error_handler(request: Request, exc: FeedbackAppError) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        exc.message,
        extra={"status": exc.status_code, "route": request.url.path},
    )
    return JSONResponse(
        err(exc.status_code, exc.message, exc.details()),
        status_code=exc.status_code,
    )


def register_handlers(app: FastAPI) -> None:
    """Attach the envelope handler for :class:`FeedbackAppError`."""

    app.add_exception_handler(FeedbackAppError, app_error_handler)


__all__ = [
    "FeedbackAppError",
    "ValidationError",
    "NotFound",
    "Unauthorized",
    "InternalError",
    "register_handlers",
]

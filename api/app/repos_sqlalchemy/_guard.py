from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import InternalError

logger = logging.getLogger("api")


@contextmanager
def db_errors(session: Session, action: str) -> Iterator[None]:
    """Roll back and raise :class:`InternalError` on any driver failure."""
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("database error during %s: %s", action, exc)
        raise InternalError(f"Database error during {action}") from exc

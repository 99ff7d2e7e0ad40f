"""Time helpers shared by services and repositories."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC time as a naive ``datetime``.

    Timestamps are stored without timezone information; every stored value is
    UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)

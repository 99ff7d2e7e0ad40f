"""JSON log formatting for the API process.

Every record becomes one JSON object per line. Free-text messages are
scrubbed of e-mail addresses and password reset tokens, which otherwise leak
through account and digest log lines.
"""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any

from ..middlewares.request_id import current_request_id

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+", re.I)
RESET_LINK_RE = re.compile(r"(/reset-password/)[0-9a-f]{16,}", re.I)

# Optional attributes callers attach with ``extra=``
EXTRA_FIELDS = ("owner", "route", "status")


def scrub(text: str) -> str:
    text = EMAIL_RE.sub("***", text)
    return RESET_LINK_RE.sub(lambda m: m.group(1) + "***", text)


class RequestIdFilter(logging.Filter):
    """Stamp each record with the id of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "req_id", None):
            record.req_id = current_request_id()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        data: dict[str, Any] = {
            "ts": ts.strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "logger": record.name,
            "req_id": getattr(record, "req_id", None),
        }
        for field in EXTRA_FIELDS:
            data[field] = getattr(record, field, None)
        data["msg"] = scrub(record.getMessage())
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(level: int | str = logging.INFO) -> None:
    """Send all loggers through a single JSON handler on stderr.

    Uvicorn's access log is silenced because the logging middleware already
    writes one line per request.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

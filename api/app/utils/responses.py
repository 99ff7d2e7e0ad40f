"""JSON envelopes returned by every endpoint.

Success bodies are ``{"ok": true, "data": ...}``. Failures carry the request
id so a user report can be matched to the server log line.
"""

from typing import Any, Dict, Optional


def ok(data: Any) -> Dict[str, Any]:
    return {"ok": True, "data": data}


def err(
    code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Return an error envelope; ``details`` is omitted when empty."""
    from ..middlewares.request_id import current_request_id

    error: Dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"ok": False, "request_id": current_request_id(), "error": error}

"""Routes for collecting customer feedback and reporting on it."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from .auth import get_current_owner
from .deps.services import get_feedback_service
from .routes_metrics import feedback_deleted_total, feedback_submitted_total
from .schemas import OwnerInDB
from .services.feedback import FeedbackService
from .utils.responses import ok

router = APIRouter()


@router.post("/api/feedbacks", status_code=201)
@router.post("/api/feedback", status_code=201)
def submit_feedback(
    payload: Any = Body(...),
    feedback: FeedbackService = Depends(get_feedback_service),
) -> dict:
    """Accept a public, unauthenticated feedback submission."""

    record = feedback.submit(payload)
    feedback_submitted_total.inc()
    return ok(record.model_dump(by_alias=True))


@router.get("/api/feedbacks")
def list_feedbacks(
    days: str | None = Query(None),
    owner: OwnerInDB = Depends(get_current_owner),
    feedback: FeedbackService = Depends(get_feedback_service),
) -> dict:
    """Return the owner's feedback entries, newest first."""

    records = feedback.list_feedbacks(owner.id, days)
    return ok([r.model_dump(by_alias=True) for r in records])


@router.delete("/api/feedbacks")
def delete_feedbacks(
    owner: OwnerInDB = Depends(get_current_owner),
    feedback: FeedbackService = Depends(get_feedback_service),
) -> dict:
    """Remove every feedback record the owner has received."""

    deleted = feedback.delete_all(owner.id)
    feedback_deleted_total.inc(deleted)
    return ok({"message": "All feedbacks deleted", "deleted": deleted})


@router.get("/api/stats")
def stats(
    days: str | None = Query(None),
    owner: OwnerInDB = Depends(get_current_owner),
    feedback: FeedbackService = Depends(get_feedback_service),
) -> dict:
    """Return aggregated NPS metrics, optionally over the last ``days`` days."""

    summary = feedback.stats(owner.id, days)
    return ok(summary.model_dump(by_alias=True))


__all__ = ["router"]

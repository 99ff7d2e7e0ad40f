from __future__ import annotations

"""Feedback ingestion, listing, statistics and bulk deletion.

:class:`FeedbackService` receives its repositories from the caller, so the
same rules run against SQLAlchemy in production and in-memory fakes in tests.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Mapping

from ..errors import NotFound, ValidationError
from ..repos.feedback_repo import FeedbackRepo
from ..repos.owner_repo import OwnerRepo
from ..schemas import FeedbackCandidate, FeedbackRecord, StatsSummary
from ..utils.clock import utcnow
from .stats import parse_days, summarize, window_start

logger = logging.getLogger("api")

NPS_RANGE = (0, 10)
RATING_RANGE = (1, 5)
RATING_FIELDS = ("ratingFood", "ratingService", "ratingWaitTime", "ratingAmbiance")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_int_in(data: Mapping[str, Any], field: str, low: int, high: int) -> int:
    value = data.get(field)
    if value is None:
        raise ValidationError(field, f"{field} is required")
    if not _is_int(value):
        raise ValidationError(field, f"{field} must be an integer")
    if not low <= value <= high:
        raise ValidationError(field, f"{field} must be between {low} and {high}")
    return value


def check_owner_id(data: Mapping[str, Any]) -> int:
    """Return the submitted owner id; ``userId`` is accepted as a legacy alias."""
    value = data.get("ownerId", data.get("userId"))
    if value is None:
        raise ValidationError("ownerId", "ownerId is required")
    if not _is_int(value):
        raise ValidationError("ownerId", "ownerId must be an integer")
    return value


def validate_scores(data: Mapping[str, Any]) -> dict[str, Any]:
    """Validate everything after the owner id, in submission field order."""
    nps_score = _require_int_in(data, "npsScore", *NPS_RANGE)
    ratings = [_require_int_in(data, f, *RATING_RANGE) for f in RATING_FIELDS]
    comment = data.get("comment")
    if comment is not None and not isinstance(comment, str):
        raise ValidationError("comment", "comment must be a string")
    return {
        "nps_score": nps_score,
        "rating_food": ratings[0],
        "rating_service": ratings[1],
        "rating_wait_time": ratings[2],
        "rating_ambiance": ratings[3],
        "comment": comment,
    }


class FeedbackService:
    """Operations on one owner's feedback records."""

    def __init__(
        self,
        feedback_repo: FeedbackRepo,
        owner_repo: OwnerRepo,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.feedback_repo = feedback_repo
        self.owner_repo = owner_repo
        self.clock = clock

    def submit(self, data: Mapping[str, Any]) -> FeedbackRecord:
        """Validate a public submission and store it.

        Checks run in a fixed order and the first failure is raised:
        ``ownerId`` shape, owner existence (:class:`NotFound`), ``npsScore``,
        the four ratings, then ``comment``. Nothing is written unless every
        check passes.
        """

        if not isinstance(data, Mapping):
            raise ValidationError("body", "Submission must be a JSON object")
        owner_id = check_owner_id(data)
        if self.owner_repo.get(owner_id) is None:
            raise NotFound("Business not found")
        candidate = FeedbackCandidate(owner_id=owner_id, **validate_scores(data))
        record = self.feedback_repo.create(candidate)
        logger.info("feedback %s stored for owner %s", record.id, owner_id)
        return record

    def list_feedbacks(
        self, owner_id: int, days: str | int | None = None
    ) -> list[FeedbackRecord]:
        since = window_start(parse_days(days), self.clock())
        return self.feedback_repo.list_for_owner(owner_id, since=since)

    def stats(self, owner_id: int, days: str | int | None = None) -> StatsSummary:
        return summarize(self.list_feedbacks(owner_id, days))

    def delete_all(self, owner_id: int) -> int:
        deleted = self.feedback_repo.delete_for_owner(owner_id)
        logger.info("deleted %d feedback records for owner %s", deleted, owner_id)
        return deleted


__all__ = ["FeedbackService", "check_owner_id", "validate_scores"]

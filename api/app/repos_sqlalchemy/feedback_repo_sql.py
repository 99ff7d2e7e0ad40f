"""SQLAlchemy implementation of the feedback repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..models import Feedback
from ..repos.feedback_repo import FeedbackRepo
from ..schemas import FeedbackCandidate, FeedbackRecord
from ._guard import db_errors


def _to_record(row: Feedback) -> FeedbackRecord:
    return FeedbackRecord(
        id=row.id,
        owner_id=row.user_id,
        nps_score=row.nps_score,
        rating_food=row.rating_food,
        rating_service=row.rating_service,
        rating_wait_time=row.rating_wait_time,
        rating_ambiance=row.rating_ambiance,
        comment=row.comment,
        created_at=row.created_at,
    )


class FeedbackRepoSQL(FeedbackRepo):
    """Concrete FeedbackRepo using a synchronous SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, candidate: FeedbackCandidate) -> FeedbackRecord:
        """Insert ``candidate`` in one transaction and return the stored row."""
        row = Feedback(
            user_id=candidate.owner_id,
            nps_score=candidate.nps_score,
            rating_food=candidate.rating_food,
            rating_service=candidate.rating_service,
            rating_wait_time=candidate.rating_wait_time,
            rating_ambiance=candidate.rating_ambiance,
            comment=candidate.comment,
        )
        with db_errors(self.session, "insert"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        return _to_record(row)

    def list_for_owner(
        self,
        owner_id: int,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[FeedbackRecord]:
        stmt = select(Feedback).where(Feedback.user_id == owner_id)
        if since is not None:
            stmt = stmt.where(Feedback.created_at >= since)
        if until is not None:
            stmt = stmt.where(Feedback.created_at <= until)
        stmt = stmt.order_by(Feedback.created_at.desc(), Feedback.id.desc())
        with db_errors(self.session, "select"):
            rows = self.session.execute(stmt).scalars().all()
        return [_to_record(r) for r in rows]

    def delete_for_owner(self, owner_id: int) -> int:
        """Hard-delete all of the owner's records in a single statement."""
        with db_errors(self.session, "delete"):
            result = self.session.execute(
                delete(Feedback).where(Feedback.user_id == owner_id)
            )
            self.session.commit()
        return int(result.rowcount or 0)

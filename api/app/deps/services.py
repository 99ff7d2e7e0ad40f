"""Dependency helpers wiring services to request-scoped repositories."""

from datetime import timedelta

from fastapi import Depends
from sqlalchemy.orm import Session

from config import get_settings

from ..db import get_db
from ..repos_sqlalchemy import FeedbackRepoSQL, OwnerRepoSQL
from ..services.accounts import AccountService
from ..services.feedback import FeedbackService


def get_feedback_service(db: Session = Depends(get_db)) -> FeedbackService:
    """Return a :class:`FeedbackService` bound to the request session."""
    return FeedbackService(FeedbackRepoSQL(db), OwnerRepoSQL(db))


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    """Return an :class:`AccountService` bound to the request session."""
    ttl = timedelta(minutes=get_settings().reset_token_ttl_minutes)
    return AccountService(OwnerRepoSQL(db), reset_ttl=ttl)

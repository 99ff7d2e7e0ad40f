# schemas.py

"""Pydantic models for API payloads and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterIn(CamelModel):
    """Owner registration payload."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    business_name: str = Field(min_length=1)


class LoginIn(BaseModel):
    """Credentials for password login."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ForgotPasswordIn(BaseModel):
    email: str = Field(min_length=1)


class ResetPasswordIn(CamelModel):
    token: str = Field(min_length=1)
    new_password: str = Field(min_length=1)


class OwnerOut(CamelModel):
    """Public view of an owner account; never includes the password hash."""

    id: int
    username: str
    business_name: str


class AuthOut(OwnerOut):
    token: str


class FeedbackCandidate(CamelModel):
    """Submission that passed ingestion validation but is not stored yet."""

    model_config = ConfigDict(frozen=True)

    owner_id: int
    nps_score: int
    rating_food: int
    rating_service: int
    rating_wait_time: int
    rating_ambiance: int
    comment: Optional[str] = None


class FeedbackRecord(FeedbackCandidate):
    """Stored customer submission."""

    id: int
    created_at: datetime


class StatsSummary(CamelModel):
    """Aggregated statistics over a set of feedback records."""

    model_config = ConfigDict(frozen=True)

    total_feedbacks: int = 0
    nps_score: int = 0
    avg_food: float = 0.0
    avg_service: float = 0.0
    avg_wait_time: float = 0.0
    avg_ambiance: float = 0.0
    promoters: int = 0
    passives: int = 0
    detractors: int = 0


class OwnerInDB(OwnerOut):
    """Internal owner model carrying the password hash."""

    password_hash: str
    created_at: Optional[datetime] = None


class ResetToken(BaseModel):
    """Stored password reset token."""

    id: int
    owner_id: int
    token: str
    expires_at: datetime
    used: bool = False

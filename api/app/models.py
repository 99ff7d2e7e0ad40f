from __future__ import annotations

"""Database models for owners, feedback records and password reset tokens."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

from .utils.clock import utcnow

Base = declarative_base()


class Owner(Base):
    """Business account that receives feedback submissions."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, nullable=False, unique=True)  # login e-mail
    password_hash = Column(String, nullable=False)
    business_name = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class Feedback(Base):
    """One customer submission; immutable once stored."""

    __tablename__ = "feedbacks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    nps_score = Column(Integer, nullable=False)
    rating_food = Column(Integer, nullable=False)
    rating_service = Column(Integer, nullable=False)
    rating_wait_time = Column(Integer, nullable=False)
    rating_ambiance = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)


class PasswordResetToken(Base):
    """One-time token backing a password reset link."""

    __tablename__ = "password_reset_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    token = Column(String, nullable=False, unique=True)
    expires_at = Column(DateTime, nullable=False)
    used = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

from __future__ import annotations

"""Owner registration, login and password reset."""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable

from ..auth import hash_password, verify_password
from ..errors import NotFound, Unauthorized, ValidationError
from ..providers import email_stub
from ..repos.owner_repo import OwnerRepo
from ..schemas import LoginIn, OwnerInDB, RegisterIn
from ..utils.clock import utcnow

logger = logging.getLogger("api")

RESET_TOKEN_BYTES = 32


class AccountService:
    """Account lifecycle for business owners."""

    def __init__(
        self,
        owner_repo: OwnerRepo,
        reset_ttl: timedelta = timedelta(minutes=60),
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.owner_repo = owner_repo
        self.reset_ttl = reset_ttl
        self.clock = clock

    def register(self, payload: RegisterIn) -> OwnerInDB:
        if self.owner_repo.get_by_username(payload.username) is not None:
            raise ValidationError("username", "Username already exists")
        owner = self.owner_repo.create(
            payload.username,
            hash_password(payload.password),
            payload.business_name,
        )
        logger.info("registered owner %s", owner.id)
        return owner

    def login(self, payload: LoginIn) -> OwnerInDB:
        owner = self.owner_repo.get_by_username(payload.username)
        if owner is None or not verify_password(
            payload.password, owner.password_hash
        ):
            raise Unauthorized("Invalid credentials")
        return owner

    def request_password_reset(self, email: str, base_url: str) -> str:
        """Create a one-time token for ``email`` and return the reset link.

        The link is also handed to the email provider.
        """

        owner = self.owner_repo.get_by_username(email)
        if owner is None:
            raise NotFound("E-mail not found")
        token = secrets.token_hex(RESET_TOKEN_BYTES)
        expires_at = self.clock() + self.reset_ttl
        self.owner_repo.create_reset_token(owner.id, token, expires_at)
        link = f"{base_url.rstrip('/')}/reset-password/{token}"
        email_stub.send(
            "password_reset",
            {"subject": "Reset your password", "link": link},
            owner.username,
        )
        return link

    def reset_password(self, token: str, new_password: str) -> None:
        record = self.owner_repo.get_reset_token(token)
        if record is None:
            raise NotFound("Invalid or expired token")
        if record.used:
            raise ValidationError("token", "This link has already been used")
        if self.clock() > record.expires_at:
            raise ValidationError("token", "Token expired. Request a new link.")
        self.owner_repo.update_password(record.owner_id, hash_password(new_password))
        self.owner_repo.mark_token_used(record.id)
        logger.info("password reset for owner %s", record.owner_id)


__all__ = ["AccountService"]

"""SQLAlchemy implementation of the owner repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..models import Owner, PasswordResetToken
from ..repos.owner_repo import OwnerRepo
from ..schemas import OwnerInDB, ResetToken
from ._guard import db_errors

# SQLite and PostgreSQL integer keys are signed 64-bit
MAX_ID = 2**63 - 1


def _to_owner(row: Owner) -> OwnerInDB:
    return OwnerInDB(
        id=row.id,
        username=row.username,
        business_name=row.business_name,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


def _to_token(row: PasswordResetToken) -> ResetToken:
    return ResetToken(
        id=row.id,
        owner_id=row.user_id,
        token=row.token,
        expires_at=row.expires_at,
        used=row.used,
    )


class OwnerRepoSQL(OwnerRepo):
    """Concrete OwnerRepo using a synchronous SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, owner_id: int) -> OwnerInDB | None:
        if not -MAX_ID - 1 <= owner_id <= MAX_ID:
            return None
        with db_errors(self.session, "select"):
            row = self.session.get(Owner, owner_id)
        return _to_owner(row) if row else None

    def get_by_username(self, username: str) -> OwnerInDB | None:
        with db_errors(self.session, "select"):
            row = self.session.execute(
                select(Owner).where(Owner.username == username)
            ).scalar_one_or_none()
        return _to_owner(row) if row else None

    def create(self, username: str, password_hash: str, business_name: str) -> OwnerInDB:
        row = Owner(
            username=username,
            password_hash=password_hash,
            business_name=business_name,
        )
        with db_errors(self.session, "insert"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        return _to_owner(row)

    def list_all(self) -> list[OwnerInDB]:
        with db_errors(self.session, "select"):
            rows = self.session.execute(select(Owner).order_by(Owner.id)).scalars()
            return [_to_owner(r) for r in rows]

    def update_password(self, owner_id: int, password_hash: str) -> None:
        with db_errors(self.session, "update"):
            self.session.execute(
                update(Owner)
                .where(Owner.id == owner_id)
                .values(password_hash=password_hash)
            )
            self.session.commit()

    def create_reset_token(
        self, owner_id: int, token: str, expires_at: datetime
    ) -> ResetToken:
        row = PasswordResetToken(user_id=owner_id, token=token, expires_at=expires_at)
        with db_errors(self.session, "insert"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        return _to_token(row)

    def get_reset_token(self, token: str) -> ResetToken | None:
        with db_errors(self.session, "select"):
            row = self.session.execute(
                select(PasswordResetToken).where(PasswordResetToken.token == token)
            ).scalar_one_or_none()
        return _to_token(row) if row else None

    def mark_token_used(self, token_id: int) -> None:
        with db_errors(self.session, "update"):
            self.session.execute(
                update(PasswordResetToken)
                .where(PasswordResetToken.id == token_id)
                .values(used=True)
            )
            self.session.commit()

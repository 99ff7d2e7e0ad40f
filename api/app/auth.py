# auth.py

"""Password hashing, JWT issuance and the current-owner dependency."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from config import get_settings

from .db import get_db
from .errors import NotFound, Unauthorized
from .repos_sqlalchemy import OwnerRepoSQL
from .schemas import OwnerInDB, OwnerOut

logger = logging.getLogger(__name__)

COOKIE_NAME = "token"

ph = PasswordHasher()


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored hash."""

    try:
        return ph.verify(hashed_password, plain_password)
    except (VerifyMismatchError, InvalidHashError):
        return False
    except VerificationError as exc:  # pragma: no cover - unexpected
        logger.error("argon2 verification error: %s", exc)
        raise


def create_access_token(
    owner: OwnerOut, expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed JWT identifying ``owner``."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(days=settings.access_token_expire_days)
    )
    claims = {
        "sub": str(owner.id),
        "username": owner.username,
        "businessName": owner.business_name,
        "exp": expire,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Return the claims of ``token`` or raise :class:`Unauthorized`."""

    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.secret_key, algorithms=[settings.jwt_algorithm]
        )
    except jwt.PyJWTError as exc:
        raise Unauthorized("Unauthorized - Invalid token") from exc
    sub = payload.get("sub")
    if sub is None or not str(sub).isdigit():
        raise Unauthorized("Unauthorized - Invalid token")
    return payload


def set_auth_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        COOKIE_NAME,
        token,
        max_age=settings.access_token_expire_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(COOKIE_NAME, path="/", httponly=True)


def token_from_request(request: Request) -> Optional[str]:
    """Return the bearer token, falling back to the ``token`` cookie."""

    header = request.headers.get("authorization") or ""
    if header.startswith("Bearer "):
        return header[len("Bearer ") :].strip() or None
    return request.cookies.get(COOKIE_NAME) or None


def get_current_owner(request: Request, db: Session = Depends(get_db)) -> OwnerInDB:
    """Resolve the authenticated owner or raise :class:`Unauthorized`."""

    token = token_from_request(request)
    if not token:
        raise Unauthorized("Unauthorized - No token provided")
    payload = decode_token(token)
    owner = OwnerRepoSQL(db).get(int(payload["sub"]))
    if owner is None:
        raise NotFound("User not found")
    return owner

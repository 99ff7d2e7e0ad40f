"""Owner account routes: register, login, logout, profile and password reset."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from config import get_settings

from .auth import (
    clear_auth_cookie,
    create_access_token,
    get_current_owner,
    set_auth_cookie,
)
from .deps.services import get_account_service
from .schemas import (
    AuthOut,
    ForgotPasswordIn,
    LoginIn,
    OwnerInDB,
    OwnerOut,
    RegisterIn,
    ResetPasswordIn,
)
from .services.accounts import AccountService
from .utils.responses import ok

router = APIRouter()


def _issue(owner: OwnerInDB, response: Response) -> dict:
    token = create_access_token(owner)
    set_auth_cookie(response, token)
    out = AuthOut(
        id=owner.id,
        username=owner.username,
        business_name=owner.business_name,
        token=token,
    )
    return out.model_dump(by_alias=True)


@router.post("/api/register", status_code=201)
def register(
    payload: RegisterIn,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
) -> dict:
    """Create an owner account and log it in."""

    owner = accounts.register(payload)
    return ok(_issue(owner, response))


@router.post("/api/login")
def login(
    payload: LoginIn,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
) -> dict:
    owner = accounts.login(payload)
    return ok(_issue(owner, response))


@router.post("/api/logout")
def logout(response: Response) -> dict:
    clear_auth_cookie(response)
    return ok({"message": "Logged out"})


@router.get("/api/user")
def current_user(owner: OwnerInDB = Depends(get_current_owner)) -> dict:
    """Return the authenticated owner without credentials."""

    return ok(OwnerOut.model_validate(owner.model_dump()).model_dump(by_alias=True))


@router.post("/api/forgot-password")
def forgot_password(
    payload: ForgotPasswordIn,
    accounts: AccountService = Depends(get_account_service),
) -> dict:
    """Issue a one-time reset link valid for the configured TTL."""

    link = accounts.request_password_reset(payload.email, get_settings().base_url)
    return ok({"message": "Reset link generated", "resetLink": link})


@router.post("/api/reset-password")
def reset_password(
    payload: ResetPasswordIn,
    accounts: AccountService = Depends(get_account_service),
) -> dict:
    accounts.reset_password(payload.token, payload.new_password)
    return ok({"message": "Password updated"})


__all__ = ["router"]

"""Business lookup for the public form plus the owner's shareable link and QR."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from config import get_settings

from .auth import get_current_owner
from .db import get_db
from .errors import NotFound, ValidationError
from .qr import feedback_url, qr_filename, qr_png
from .repos_sqlalchemy import OwnerRepoSQL
from .schemas import OwnerInDB
from .utils.responses import ok

router = APIRouter()


@router.get("/api/business/{owner_id}")
@router.get("/api/public/business/{owner_id}")
def business_info(owner_id: str, db: Session = Depends(get_db)) -> dict:
    """Return the business name shown on the public feedback form."""

    if not (owner_id.isascii() and owner_id.isdigit()):
        raise ValidationError("id", "Invalid ID")
    # More digits than any 64-bit key can have
    if len(owner_id.lstrip("0")) > 19:
        raise NotFound("Business not found")
    owner = OwnerRepoSQL(db).get(int(owner_id))
    if owner is None:
        raise NotFound("Business not found")
    return ok({"businessName": owner.business_name})


@router.get("/api/feedback-link")
def feedback_link(owner: OwnerInDB = Depends(get_current_owner)) -> dict:
    return ok({"url": feedback_url(owner.id, get_settings().base_url)})


@router.get("/api/qr")
def feedback_qr(owner: OwnerInDB = Depends(get_current_owner)) -> Response:
    """Download the owner's feedback QR code as a PNG."""

    png = qr_png(feedback_url(owner.id, get_settings().base_url))
    headers = {
        "content-disposition": f"attachment; filename={qr_filename(owner.business_name)}"
    }
    return Response(png, media_type="image/png", headers=headers)


__all__ = ["router"]

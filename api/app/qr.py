# qr.py

"""Utility helpers to build an owner's feedback link and its QR code."""

from __future__ import annotations

import re
from io import BytesIO

import qrcode
from qrcode.constants import ERROR_CORRECT_H


def feedback_url(owner_id: int, base_url: str) -> str:
    """Return the public feedback form URL for ``owner_id``."""

    return f"{base_url.rstrip('/')}/feedback/{owner_id}"


def qr_filename(business_name: str) -> str:
    """Return a download filename such as ``joes-diner-qr.png``."""

    slug = re.sub(r"\s+", "-", business_name.strip()).lower()
    slug = re.sub(r"[^a-z0-9-]", "", slug) or "feedback"
    return f"{slug}-qr.png"


def qr_png(url: str, box_size: int = 10, border: int = 4) -> bytes:
    """Render ``url`` as a PNG QR code with high error correction.

    Parameters
    ----------
    url:
        Link encoded in the QR code.
    box_size:
        Pixel size of each module.
    border:
        Quiet zone width in modules.
    """

    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECT_H, box_size=box_size, border=border
    )
    qr.add_data(url)
    qr.make(fit=True)
    img = qr.make_image(fill_color="#0f172a", back_color="white")
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()

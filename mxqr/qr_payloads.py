"""
QR payload handling for matrix.to verification.

This module is intentionally thin.

All URL encoding/decoding rules live in:
    mxqr/uri_scheme.py

QR rendering and camera scanning code only needs these two entry points:
the string from to_url() is what goes into the QR image, and the raw text
read back from a scan goes straight into from_url().
"""

from __future__ import annotations

from typing import Optional

from .models import VerificationPayload
from .uri_scheme import decode_verification_url, encode_verification_url


def to_url(payload: VerificationPayload) -> str:
    return encode_verification_url(payload)


def from_url(url: str) -> Optional[VerificationPayload]:
    """
    None means "invalid QR code" and must be reported as such, not as a crash.
    """
    return decode_verification_url(url)

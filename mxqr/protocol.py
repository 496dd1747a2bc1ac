"""
High-level helpers for QR device verification.

This module provides helpers for:

- Building a payload on the generating device:
    - build_verification_payload(...)
    - validate_verification_payload(...)
    - build_verification_uri(...)

- Reading a payload on the scanning device:
    - parse_verification_uri(...)

The encoder in uri_scheme trusts its input. Code that assembles a payload
from session state should go through build_verification_payload() so a
malformed payload is caught before it is shown as a QR code.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .models import ACTION_VERIFY, VerificationPayload
from .uri_scheme import decode_verification_url, encode_verification_url, is_valid_user_id


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    return value


def validate_verification_payload(payload: Any) -> None:
    """
    Fail-closed validation for a payload about to be encoded.
    Raises ValueError/TypeError on invalid input.
    """
    if not isinstance(payload, VerificationPayload):
        raise TypeError("payload must be a VerificationPayload")

    user_id = _require_str(payload.user_id, "user_id")
    if not is_valid_user_id(user_id):
        raise ValueError("user_id must look like '@localpart:domain'")

    for name in ("request_id", "action", "shared_secret"):
        if not _require_str(getattr(payload, name), name):
            raise ValueError(f"{name} must be non-empty")

    if not isinstance(payload.keys, Mapping):
        raise TypeError("keys must be a mapping")
    for key, value in payload.keys.items():
        if not _require_str(key, "keys entry name"):
            raise ValueError("keys entry names must be non-empty")
        _require_str(value, f"keys[{key!r}]")

    # None means unknown; an empty string would be dropped by the decoder.
    for name in ("other_user_key", "other_device_key"):
        value = getattr(payload, name)
        if value is None:
            continue
        if not _require_str(value, name):
            raise ValueError(f"{name} must be None or non-empty")


def build_verification_payload(
    *,
    user_id: str,
    request_id: str,
    shared_secret: str,
    keys: Optional[Mapping[str, str]] = None,
    action: str = ACTION_VERIFY,
    other_user_key: Optional[str] = None,
    other_device_key: Optional[str] = None,
) -> VerificationPayload:
    payload = VerificationPayload(
        user_id=user_id,
        request_id=request_id,
        action=action,
        shared_secret=shared_secret,
        keys=dict(keys or {}),
        other_user_key=other_user_key,
        other_device_key=other_device_key,
    )
    validate_verification_payload(payload)
    return payload


def build_verification_uri(payload: VerificationPayload) -> str:
    """
    Validate a payload and convert it into the matrix.to URL for the QR code.
    """
    validate_verification_payload(payload)
    return encode_verification_url(payload)


def parse_verification_uri(uri: str) -> Optional[VerificationPayload]:
    """
    Decode a scanned matrix.to URL. Returns None when the QR code is invalid.
    """
    return decode_verification_url(uri)

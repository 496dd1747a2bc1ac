"""
matrix.to verification URL scheme (contract-locked).

This module is the single source of truth for the QR verification URL:

    https://matrix.to/#/<user_id>?request=<id>&action=<action>
        &key_<k>=<v>...&secret=<secret>
        [&other_user_key=<key>][&other_device_key=<key>]

Rules:
- Every path segment, query value and key name goes through
  percent.component_encode.
- Parameters are emitted in the fixed order above, `keys` sorted.
- Fail-closed decoding: malformed input returns None (never raises).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from .models import VerificationPayload
from .percent import component_decode, component_encode


logger = logging.getLogger(__name__)

MATRIX_TO_PREFIX = "https://matrix.to/#/"

PARAM_REQUEST = "request"
PARAM_ACTION = "action"
PARAM_SECRET = "secret"
PARAM_OTHER_USER_KEY = "other_user_key"
PARAM_OTHER_DEVICE_KEY = "other_device_key"
KEY_PARAM_PREFIX = "key_"

_REQUIRED_PARAMS = (PARAM_REQUEST, PARAM_ACTION, PARAM_SECRET)


def is_valid_user_id(user_id: str) -> bool:
    """
    Matrix user id shape: an "@", then later a ":" separating the domain.
    The domain itself is not validated.
    """
    at = user_id.find("@")
    if at < 0:
        return False
    return ":" in user_id[at + 1 :]


def _key_order(name: str) -> Tuple[int, int, str, str]:
    # Decimal indexes first, in numeric order ("2" < "10"); other names lexically.
    if name.isascii() and name.isdigit():
        digits = name.lstrip("0")
        return (0, len(digits), digits, name)
    return (1, 0, "", name)


def _split_query(query: str) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    for raw in query.split("&"):
        name, sep, value = raw.partition("=")
        if not sep:
            continue
        name = component_decode(name)
        if not name:
            continue
        pairs.append((name, component_decode(value)))
    return pairs


def encode_verification_url(payload: VerificationPayload) -> str:
    params = [
        (PARAM_REQUEST, payload.request_id),
        (PARAM_ACTION, payload.action),
    ]
    for name in sorted(payload.keys, key=_key_order):
        params.append((KEY_PARAM_PREFIX + component_encode(name), payload.keys[name]))
    params.append((PARAM_SECRET, payload.shared_secret))
    if payload.other_user_key is not None:
        params.append((PARAM_OTHER_USER_KEY, payload.other_user_key))
    if payload.other_device_key is not None:
        params.append((PARAM_OTHER_DEVICE_KEY, payload.other_device_key))

    query = "&".join(f"{name}={component_encode(value)}" for name, value in params)
    return f"{MATRIX_TO_PREFIX}{component_encode(payload.user_id)}?{query}"


def parse_verification_url(url: str) -> VerificationPayload:
    """
    Strict parser. Raises ValueError describing the first problem found.

    Most callers want decode_verification_url(), which maps every failure
    to None.
    """
    if not isinstance(url, str):
        raise ValueError("Verification URL must be a string.")
    if not url.startswith(MATRIX_TO_PREFIX):
        raise ValueError("Not a matrix.to URL (missing prefix).")

    rest = url[len(MATRIX_TO_PREFIX) :]
    raw_user_id, _, query = rest.partition("?")

    user_id = component_decode(raw_user_id)
    if not is_valid_user_id(user_id):
        raise ValueError("Malformed user id in verification URL.")

    required: Dict[str, List[str]] = {name: [] for name in _REQUIRED_PARAMS}
    keys: Dict[str, str] = {}
    optional: Dict[str, str] = {}

    for name, value in _split_query(query):
        if name in required:
            required[name].append(value)
        elif name.startswith(KEY_PARAM_PREFIX):
            keys[name[len(KEY_PARAM_PREFIX) :]] = value
        elif name in (PARAM_OTHER_USER_KEY, PARAM_OTHER_DEVICE_KEY):
            optional[name] = value

    for name, values in required.items():
        if len(values) != 1:
            raise ValueError(f"Parameter {name!r} must appear exactly once.")
        if not values[0]:
            raise ValueError(f"Parameter {name!r} must not be empty.")

    return VerificationPayload(
        user_id=user_id,
        request_id=required[PARAM_REQUEST][0],
        action=required[PARAM_ACTION][0],
        shared_secret=required[PARAM_SECRET][0],
        keys=keys,
        other_user_key=optional.get(PARAM_OTHER_USER_KEY) or None,
        other_device_key=optional.get(PARAM_OTHER_DEVICE_KEY) or None,
    )


def decode_verification_url(url: str) -> Optional[VerificationPayload]:
    """
    Decode a scanned URL, fail-closed.

    Returns None for anything that is not a complete, well-formed
    verification URL. The reason is logged at DEBUG only.
    """
    try:
        return parse_verification_url(url)
    except ValueError as exc:
        logger.debug("Rejected verification URL: %s", exc)
        return None

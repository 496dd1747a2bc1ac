"""
Core data model for matrix.to QR verification.

A VerificationPayload is what two devices exchange through a scanned QR
code to bootstrap cross-device identity verification. It is built once
(by the QR generator, or by the decoder on the scanning side) and never
mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


# Action emitted by current generators. Decoding accepts any non-empty value.
ACTION_VERIFY = "verify"


@dataclass(frozen=True)
class VerificationPayload:
    """
    Fields carried by a verification QR code.

    `keys` maps a short key index ("1", "2", or a device key id) to the
    associated key material. The optional keys are None when the creator
    does not know them yet, never an empty string.
    """
    user_id: str
    request_id: str
    action: str
    shared_secret: str
    keys: Dict[str, str] = field(default_factory=dict)

    other_user_key: Optional[str] = None
    other_device_key: Optional[str] = None

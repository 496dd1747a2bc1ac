"""
Percent-encoding helpers for matrix.to verification URLs.

One encoder is applied to the path segment, every query value and every
`keys` map key. Literal set: ASCII letters, digits, `- . _ ~` plus `: @`
(Matrix identifiers keep `@user:domain` readable). Everything else is
UTF-8 percent-encoded with uppercase hex.
"""

from __future__ import annotations

from urllib.parse import quote, unquote


_SAFE = ":@"


def component_encode(value: str) -> str:
    # quote() treats "/" as safe by default, so the safe set is always explicit.
    return quote(value, safe=_SAFE)


def component_decode(value: str) -> str:
    """
    Reverse component_encode.

    Malformed escapes are kept verbatim and invalid UTF-8 is replaced, so
    this never raises. "+" stays "+": key material is base64 and the
    encoder never uses "+" for space.
    """
    return unquote(value, encoding="utf-8", errors="replace")

"""Base64URL (RFC 4648 section 5) without padding."""

from __future__ import annotations

import base64
import binascii
import re

_ALPHABET = re.compile(rb"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(value: str | bytes) -> bytes | None:
    """Decode unpadded Base64URL, returning ``None`` for malformed input."""
    if isinstance(value, str):
        try:
            raw = value.encode("ascii")
        except UnicodeEncodeError:
            return None
    else:
        raw = value

    # A single leftover character cannot encode a whole byte.
    if not _ALPHABET.fullmatch(raw) or len(raw) % 4 == 1:
        return None

    padded = raw + b"=" * (-len(raw) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except binascii.Error:
        return None

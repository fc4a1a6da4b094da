"""
Base64url without padding, as used for every token segment.
"""

from __future__ import annotations

import base64
import binascii

from auth.errors import MalformedEncoding


def encode(data: bytes) -> str:
    """Base64url encode without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(text: str) -> bytes:
    """
    Base64url decode with padding restoration.
    Raises MalformedEncoding for anything that is not valid base64url.
    """
    if len(text) % 4 == 1:
        # no byte sequence encodes to this length
        raise MalformedEncoding("impossible base64url length")
    try:
        raw = text.encode("ascii")
    except UnicodeEncodeError:
        raise MalformedEncoding("non-ascii characters in base64url text")

    raw = raw.replace(b"-", b"+").replace(b"_", b"/")
    raw += b"=" * (-len(raw) % 4)
    try:
        return base64.b64decode(raw, validate=True)
    except binascii.Error as e:
        raise MalformedEncoding(f"invalid base64url text: {e}")

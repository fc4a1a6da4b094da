"""
HS256 session tokens implemented with the Python standard library only.
Base64url without padding, HMAC-SHA256 signature over the encoded
header and payload, strict exp validation (no clock skew).

The engine holds nothing but the signing key and the token lifetime, both
fixed at construction, so a single instance can be shared between threads.
Time is always passed in by the caller.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from auth import codec
from auth.errors import (
    InvalidSignature,
    MalformedToken,
    MissingToken,
    TokenError,
    TokenExpired,
    UnsupportedAlgorithm,
)

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TOKEN_TYPE = "JWT"
DEFAULT_LIFETIME_SECONDS = 3600

_HEADER = {"alg": ALGORITHM, "typ": TOKEN_TYPE}


def now_ts() -> int:
    """Return current UNIX timestamp (seconds)."""
    return int(time.time())


def constant_time_equals(a: str, b: str) -> bool:
    """
    String equality whose running time does not depend on where the two
    strings first differ.

    Delegates to hmac.compare_digest over the UTF-8 bytes of both values.
    Only the lengths may influence timing, and a signature's length is
    public anyway. Never replace this with ``==``, which stops at the
    first mismatching character.
    """
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def _segment_lengths(token: Optional[str]) -> str:
    return "/".join(str(len(part)) for part in (token or "").split("."))


def _dumps(obj: Dict[str, Any]) -> bytes:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _require_str(obj: Dict[str, Any], key: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise MalformedToken(f"missing or invalid '{key}'")
    return value


def _require_int(obj: Dict[str, Any], key: str) -> int:
    value = obj.get(key)
    # bool is an int subclass; true/false is never a timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedToken(f"missing or invalid '{key}'")
    return value


def _decode_segment(segment: str, name: str) -> Dict[str, Any]:
    try:
        obj = json.loads(codec.decode(segment).decode("utf-8"))
    except (ValueError, RecursionError) as e:
        # MalformedEncoding, UnicodeDecodeError and JSONDecodeError are all ValueError
        raise MalformedToken(f"undecodable {name}: {type(e).__name__}")
    if not isinstance(obj, dict):
        raise MalformedToken(f"{name} is not a JSON object")
    return obj


@dataclass(frozen=True)
class Claims:
    """What a token asserts about its subject, plus its validity window."""

    subject: str
    subject_id: str
    role: str
    issued_at: int
    expires_at: int

    def to_payload(self) -> Dict[str, Any]:
        return {
            "unique_name": self.subject,
            "userId": self.subject_id,
            "role": self.role,
            "iat": self.issued_at,
            "exp": self.expires_at,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Claims":
        return cls(
            subject=_require_str(payload, "unique_name"),
            subject_id=_require_str(payload, "userId"),
            role=_require_str(payload, "role"),
            issued_at=_require_int(payload, "iat"),
            expires_at=_require_int(payload, "exp"),
        )


class TokenEngine:
    """Issue and verify HS256 tokens with one injected signing key."""

    def __init__(
        self,
        key: Union[str, bytes],
        lifetime_seconds: int = DEFAULT_LIFETIME_SECONDS,
        debug: bool = False,
    ) -> None:
        if isinstance(key, str):
            key = key.encode("utf-8")
        if not key:
            raise ValueError("signing key must not be empty")
        if isinstance(lifetime_seconds, bool) or not isinstance(lifetime_seconds, int) or lifetime_seconds <= 0:
            raise ValueError("lifetime_seconds must be a positive integer")
        self._key = bytes(key)
        self.lifetime_seconds = lifetime_seconds
        self.debug = debug

    def __repr__(self) -> str:
        return f"TokenEngine(alg={ALGORITHM!r}, lifetime_seconds={self.lifetime_seconds})"

    def _sign(self, signing_input: str) -> str:
        digest = hmac.new(self._key, signing_input.encode("utf-8"), hashlib.sha256).digest()
        return codec.encode(digest)

    def issue(self, subject: str, subject_id: str, role: str, now: int) -> str:
        """
        Build a signed token for an already authenticated principal.
        iat/exp are derived from ``now`` and the engine lifetime only.
        """
        now = int(now)
        claims = Claims(
            subject=subject,
            subject_id=subject_id,
            role=role,
            issued_at=now,
            expires_at=now + self.lifetime_seconds,
        )
        header_b64 = codec.encode(_dumps(_HEADER))
        payload_b64 = codec.encode(_dumps(claims.to_payload()))
        signing_input = f"{header_b64}.{payload_b64}"
        token = f"{signing_input}.{self._sign(signing_input)}"
        if self.debug:
            logger.debug("token issued: segments=%s", _segment_lengths(token))
        return token

    def verify(self, token: Optional[str], now: int) -> Claims:
        """
        Decode and verify a token.
        - structure, then algorithm pin, then signature, then exp
        - a token is still valid at now == exp
        Returns the claims on success, raises a TokenError subclass otherwise.
        """
        try:
            claims = self._verify(token, int(now))
        except TokenError as e:
            if self.debug:
                logger.debug("token rejected: kind=%s segments=%s", e.kind, _segment_lengths(token))
            raise
        if self.debug:
            logger.debug("token accepted: segments=%s", _segment_lengths(token))
        return claims

    def _verify(self, token: Optional[str], now: int) -> Claims:
        if token is None or not token.strip():
            raise MissingToken("no token presented")

        parts = token.split(".")
        if len(parts) != 3 or not all(parts):
            raise MalformedToken(f"expected 3 non-empty segments, got {len(parts)}")
        header_b64, payload_b64, sig_b64 = parts

        header = _decode_segment(header_b64, "header")
        payload = _decode_segment(payload_b64, "payload")
        alg = _require_str(header, "alg")
        _require_str(header, "typ")
        claims = Claims.from_payload(payload)

        if alg != ALGORITHM:
            raise UnsupportedAlgorithm(f"unsupported alg {alg!r}")

        expected_sig = self._sign(f"{header_b64}.{payload_b64}")
        if not constant_time_equals(expected_sig, sig_b64):
            raise InvalidSignature("signature mismatch")

        if now > claims.expires_at:
            raise TokenExpired("token expired")

        return claims

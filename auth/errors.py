"""
Token verification failures.

Every failure Verify can produce is a TokenError subclass with a stable
``kind`` string. Callers facing the network should collapse them into a
single generic rejection; the kind is for logs and tests.
"""

from __future__ import annotations


class MalformedEncoding(ValueError):
    """Text is not valid unpadded base64url."""


class TokenError(ValueError):
    kind = "token_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind)


class MissingToken(TokenError):
    kind = "missing_token"


class MalformedToken(TokenError):
    kind = "malformed_token"


class UnsupportedAlgorithm(TokenError):
    kind = "unsupported_algorithm"


class InvalidSignature(TokenError):
    kind = "invalid_signature"


class TokenExpired(TokenError):
    kind = "token_expired"

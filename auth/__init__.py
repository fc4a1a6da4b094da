"""
Auth package: base64url codec, HS256 token engine (standard library only),
configuration and FastAPI dependencies.
"""
from . import codec, config, errors, jwt
from .errors import (
    InvalidSignature,
    MalformedEncoding,
    MalformedToken,
    MissingToken,
    TokenError,
    TokenExpired,
    UnsupportedAlgorithm,
)
from .jwt import Claims, TokenEngine

__all__ = [
    "codec",
    "config",
    "errors",
    "jwt",
    "Claims",
    "TokenEngine",
    "TokenError",
    "MissingToken",
    "MalformedToken",
    "UnsupportedAlgorithm",
    "InvalidSignature",
    "TokenExpired",
    "MalformedEncoding",
]

"""
Token module.

Signs and verifies access/refresh JWTs and issues one-time tokens for
email verification and password reset.

Public API:
- ITokenCodec / JWTTokenCodec: bearer token signing and verification
- OneTimeTokenIssuer: verification and reset tokens
- Models: TokenKind, TokenClaims, TokenPair, OneTimeToken
- Exceptions: TokenExpiredError, TokenMalformedError, TokenKindMismatchError
"""

from .interfaces import ITokenCodec
from .models import (
    TokenKind,
    TokenClaims,
    TokenPair,
    OneTimeToken,
    OneTimeTokenPurpose,
)
from .exceptions import (
    TokenExpiredError,
    TokenMalformedError,
    TokenKindMismatchError,
)
from .codec import JWTTokenCodec
from .one_time import OneTimeTokenIssuer, generate_token_value

__all__ = [
    # Interface
    "ITokenCodec",
    "JWTTokenCodec",
    "OneTimeTokenIssuer",
    "generate_token_value",
    # Models
    "TokenKind",
    "TokenClaims",
    "TokenPair",
    "OneTimeToken",
    "OneTimeTokenPurpose",
    # Exceptions
    "TokenExpiredError",
    "TokenMalformedError",
    "TokenKindMismatchError",
]

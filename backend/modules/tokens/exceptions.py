"""
Token codec exceptions.

The codec never recovers from these itself; every verification failure is
surfaced to the caller as exactly one of them.
"""

from shared.exceptions import AuthenticationError


class TokenExpiredError(AuthenticationError):
    """Raised when a token's expiry is at or before the current time."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class TokenMalformedError(AuthenticationError):
    """Raised when a token's signature or structure is invalid."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, code="TOKEN_MALFORMED")


class TokenKindMismatchError(AuthenticationError):
    """Raised when a valid token of one kind is presented as the other kind."""

    def __init__(self, expected: str, actual: str):
        super().__init__(
            f"Expected {expected} token, got {actual} token",
            code="TOKEN_KIND_MISMATCH",
            details={"expected": expected, "actual": actual},
        )

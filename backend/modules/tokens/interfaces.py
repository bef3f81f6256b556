"""
Token codec interface.

Stateless signing and verification of access and refresh tokens.
No I/O and no knowledge of which refresh tokens are still active.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import TokenClaims, TokenPair


@runtime_checkable
class ITokenCodec(Protocol):
    """Contract for issuing and verifying bearer tokens."""

    def issue_access_token(self, subject_id: str, email: str) -> str:
        """Sign a short-lived access token."""
        ...

    def issue_refresh_token(self, subject_id: str, email: str) -> str:
        """Sign a long-lived refresh token with the refresh secret."""
        ...

    def issue_pair(self, subject_id: str, email: str) -> TokenPair:
        """Issue both tokens."""
        ...

    def verify_access(self, token: str) -> TokenClaims:
        """
        Verify an access token.

        Raises:
            TokenMalformedError: Bad signature or structure
            TokenExpiredError: Expiry reached
            TokenKindMismatchError: Token is a refresh token
        """
        ...

    def verify_refresh(self, token: str) -> TokenClaims:
        """
        Verify a refresh token.

        Raises:
            TokenMalformedError: Bad signature or structure
            TokenExpiredError: Expiry reached
            TokenKindMismatchError: Token is an access token
        """
        ...

    def peek(self, token: str) -> Optional[dict[str, Any]]:
        """Decode without verifying. Never use the result for authorization."""
        ...

    def is_expired(self, token: str) -> bool:
        """True if the token cannot be decoded or has expired. Never raises."""
        ...

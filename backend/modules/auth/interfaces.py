"""
Authentication module interfaces.

The API layer depends on ISessionManager and ICredentialManager, not the
concrete implementations. This enables testing with fakes and future
extraction to a separate service.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.credentials.models import UserProfile
from modules.tokens.models import TokenPair

from .models import LoginResult


@runtime_checkable
class IPasswordHasher(Protocol):
    """One-way password hashing with a tunable cost factor."""

    async def hash(self, plaintext: str) -> str:
        ...

    async def verify(self, plaintext: str, hashed: str) -> bool:
        ...

    async def verify_dummy(self, plaintext: str) -> None:
        """Spend the same effort as verify() when there is no real hash."""
        ...


@runtime_checkable
class ISessionManager(Protocol):
    """
    Login, refresh, and logout.

    The only component that changes the set of active refresh tokens
    during normal operation.
    """

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Check the password and open a new session.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        ...

    async def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange an active refresh token for a new pair (one-shot rotation).

        Raises:
            TokenExpiredError, TokenMalformedError, TokenKindMismatchError
            UserNotFoundError: The token's subject no longer exists
            InvalidRefreshTokenError: The token is not (or no longer) active
        """
        ...

    async def logout(self, user_id: str, refresh_token: str) -> None:
        """Revoke a single refresh token. Revoking an inactive token is a no-op."""
        ...

    async def logout_all(self, user_id: str) -> None:
        """Revoke every refresh token of the user."""
        ...

    async def get_profile(self, user_id: str) -> UserProfile:
        """
        Raises:
            UserNotFoundError: If the user does not exist
        """
        ...

    async def authenticate(self, access_token: str) -> AuthenticatedUser:
        """
        Resolve a bearer access token to the calling user.

        Raises:
            TokenExpiredError, TokenMalformedError, TokenKindMismatchError
        """
        ...


@runtime_checkable
class ICredentialManager(Protocol):
    """Registration, email verification, and password reset."""

    async def register(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> UserProfile:
        """
        Raises:
            DuplicateEmailError: If the email is already registered
        """
        ...

    async def verify_email(self, token: str) -> UserProfile:
        """
        Raises:
            InvalidOrExpiredTokenError: Unknown, used, or expired token
        """
        ...

    async def resend_verification(self, email: str) -> None:
        """
        Raises:
            UserNotFoundError, AlreadyVerifiedError, NotificationDeliveryError
        """
        ...

    async def request_password_reset(self, email: str) -> None:
        """
        Send a reset link. Returns silently for unknown emails.

        Raises:
            NotificationDeliveryError: If the message could not be sent
        """
        ...

    async def reset_password(self, token: str, new_password: str) -> UserProfile:
        """
        Replace the password and revoke every refresh token.

        Raises:
            InvalidOrExpiredTokenError: Unknown, used, or expired token
        """
        ...

"""
Credential store interface.

The auth module depends on ICredentialStore, not on a concrete engine.
Lookups return None on a miss; only create() raises for a domain reason.
Every write must be observable as a single atomic transition.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import CredentialRegistration, CredentialUpdate, UserCredential


@runtime_checkable
class ICredentialStore(Protocol):
    """
    Persistence contract for user credentials.

    Implementations must provide all these methods.
    """

    async def create(self, registration: CredentialRegistration) -> UserCredential:
        """
        Create a new record with no refresh tokens and an unverified email.

        Raises:
            DuplicateEmailError: If the normalized email already exists
        """
        ...

    async def find_by_email(self, email: str) -> Optional[UserCredential]:
        """Look up a record by email (case-insensitive)."""
        ...

    async def find_by_id(self, user_id: str) -> Optional[UserCredential]:
        """Look up a record by its ID."""
        ...

    async def find_by_verification_token(self, token: str) -> Optional[UserCredential]:
        """Match a verification token whose expiry is strictly in the future."""
        ...

    async def find_by_password_reset_token(self, token: str) -> Optional[UserCredential]:
        """Match a password reset token whose expiry is strictly in the future."""
        ...

    async def update(self, user_id: str, changes: CredentialUpdate) -> Optional[UserCredential]:
        """
        Apply the explicitly set fields of ``changes``.

        Returns:
            The updated record, or None if the record does not exist
        """
        ...

    async def consume_verification_token(
        self, token: str, changes: CredentialUpdate
    ) -> Optional[UserCredential]:
        """
        Apply ``changes`` to the record holding this unexpired verification token.

        The match and the write are one atomic step, so a token can be
        consumed at most once. Returns None if no record matches.
        """
        ...

    async def consume_password_reset_token(
        self, token: str, changes: CredentialUpdate
    ) -> Optional[UserCredential]:
        """Password reset counterpart of consume_verification_token()."""
        ...

    async def add_refresh_token(self, user_id: str, token: str) -> Optional[UserCredential]:
        """Add a token to the active set. Returns None if the record does not exist."""
        ...

    async def remove_refresh_token(self, user_id: str, token: str) -> bool:
        """
        Compare-and-remove a token from the active set.

        Returns:
            True only if the token was present and has now been removed
        """
        ...

    async def rotate_refresh_token(self, user_id: str, old_token: str, new_token: str) -> bool:
        """
        Atomically replace ``old_token`` with ``new_token``.

        Returns:
            False (and changes nothing) if ``old_token`` is not active
        """
        ...

    async def clear_refresh_tokens(self, user_id: str) -> Optional[UserCredential]:
        """Empty the active set. Returns None if the record does not exist."""
        ...

    async def has_refresh_token(self, user_id: str, token: str) -> bool:
        """True if ``token`` is currently active for the user."""
        ...

"""
One-time token issuer for email verification and password reset.

Tokens are 32 random bytes, hex encoded (64 characters). They are stored on
the credential record together with their expiry and cleared once used.
"""

import secrets
from datetime import timedelta
from typing import Callable

from shared.clock import Clock, utc_now
from shared.config import Settings

from modules.credentials.exceptions import UserNotFoundError
from modules.credentials.interfaces import ICredentialStore
from modules.credentials.models import CredentialUpdate, UserCredential

from .models import OneTimeToken, OneTimeTokenPurpose

DEFAULT_VERIFICATION_TTL = timedelta(hours=24)
DEFAULT_PASSWORD_RESET_TTL = timedelta(hours=1)


def generate_token_value() -> str:
    """256 bits of randomness as a URL-safe hex string."""
    return secrets.token_hex(32)


class OneTimeTokenIssuer:
    """Generates one-time tokens and persists them on the credential record."""

    def __init__(
        self,
        store: ICredentialStore,
        verification_ttl: timedelta = DEFAULT_VERIFICATION_TTL,
        password_reset_ttl: timedelta = DEFAULT_PASSWORD_RESET_TTL,
        generate: Callable[[], str] = generate_token_value,
        clock: Clock = utc_now,
    ):
        self._store = store
        self._ttls = {
            OneTimeTokenPurpose.VERIFICATION: verification_ttl,
            OneTimeTokenPurpose.PASSWORD_RESET: password_reset_ttl,
        }
        self._generate = generate
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        store: ICredentialStore,
        settings: Settings,
        clock: Clock = utc_now,
    ) -> "OneTimeTokenIssuer":
        return cls(
            store,
            verification_ttl=timedelta(hours=settings.email_verification_ttl_hours),
            password_reset_ttl=timedelta(minutes=settings.password_reset_ttl_minutes),
            clock=clock,
        )

    def generate(self, purpose: OneTimeTokenPurpose) -> OneTimeToken:
        """Create a token without persisting it."""
        return OneTimeToken(
            value=self._generate(),
            expires_at=self._clock() + self._ttls[purpose],
            purpose=purpose,
        )

    async def issue_verification(self, user_id: str) -> tuple[OneTimeToken, UserCredential]:
        """
        Generate a verification token and store it, replacing any previous one.

        Raises:
            UserNotFoundError: If the record no longer exists
        """
        token = self.generate(OneTimeTokenPurpose.VERIFICATION)
        updated = await self._store.update(
            user_id,
            CredentialUpdate(
                email_verification_token=token.value,
                email_verification_expires_at=token.expires_at,
            ),
        )
        if updated is None:
            raise UserNotFoundError(user_id)
        return token, updated

    async def issue_password_reset(self, user_id: str) -> tuple[OneTimeToken, UserCredential]:
        """
        Generate a password reset token and store it, replacing any previous one.

        Raises:
            UserNotFoundError: If the record no longer exists
        """
        token = self.generate(OneTimeTokenPurpose.PASSWORD_RESET)
        updated = await self._store.update(
            user_id,
            CredentialUpdate(
                password_reset_token=token.value,
                password_reset_expires_at=token.expires_at,
            ),
        )
        if updated is None:
            raise UserNotFoundError(user_id)
        return token, updated

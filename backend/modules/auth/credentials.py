"""
Credential lifecycle: registration, email verification, password reset.
"""

import logging

from shared.logging import redact_email
from modules.credentials.exceptions import DuplicateEmailError, UserNotFoundError
from modules.credentials.interfaces import ICredentialStore
from modules.credentials.models import CredentialRegistration, CredentialUpdate, UserProfile
from modules.notifications.interfaces import INotificationSender
from modules.tokens.models import OneTimeTokenPurpose
from modules.tokens.one_time import OneTimeTokenIssuer

from .exceptions import AlreadyVerifiedError, InvalidOrExpiredTokenError
from .interfaces import ICredentialManager, IPasswordHasher

logger = logging.getLogger(__name__)


class CredentialManager(ICredentialManager):
    """Implementation of the credential lifecycle."""

    def __init__(
        self,
        store: ICredentialStore,
        hasher: IPasswordHasher,
        issuer: OneTimeTokenIssuer,
        sender: INotificationSender,
    ):
        self._store = store
        self._hasher = hasher
        self._issuer = issuer
        self._sender = sender

    async def register(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> UserProfile:
        """
        Create an unverified account and send the verification email.

        The record is created together with its verification token in a
        single write. A failed email is logged and otherwise ignored; the
        user can ask for a resend.
        """
        if await self._store.find_by_email(email) is not None:
            raise DuplicateEmailError()

        password_hash = await self._hasher.hash(password)
        token = self._issuer.generate(OneTimeTokenPurpose.VERIFICATION)
        user = await self._store.create(
            CredentialRegistration(
                email=email,
                password_hash=password_hash,
                first_name=first_name,
                last_name=last_name,
                email_verification_token=token.value,
                email_verification_expires_at=token.expires_at,
            )
        )
        logger.info("Registered user %s", user.id)

        try:
            await self._sender.send_verification(user.email, user.first_name, token.value)
        except Exception:
            logger.warning(
                "Verification email for %s failed; user can request a resend",
                redact_email(user.email),
                exc_info=True,
            )

        return UserProfile.from_credential(user)

    async def verify_email(self, token: str) -> UserProfile:
        # Match and write happen under the store lock, so a token verifies once.
        updated = await self._store.consume_verification_token(
            token,
            CredentialUpdate(
                is_email_verified=True,
                email_verification_token=None,
                email_verification_expires_at=None,
            ),
        )
        if updated is None:
            raise InvalidOrExpiredTokenError()

        logger.info("User %s verified their email", updated.id)
        return UserProfile.from_credential(updated)

    async def resend_verification(self, email: str) -> None:
        user = await self._store.find_by_email(email)
        if user is None:
            raise UserNotFoundError()
        if user.is_email_verified:
            raise AlreadyVerifiedError()

        token, updated = await self._issuer.issue_verification(user.id)
        await self._sender.send_verification(updated.email, updated.first_name, token.value)

    async def request_password_reset(self, email: str) -> None:
        user = await self._store.find_by_email(email)
        if user is None:
            # Same outcome as a real request so callers cannot enumerate accounts.
            logger.info("Password reset requested for unknown email %s", redact_email(email))
            return

        try:
            token, updated = await self._issuer.issue_password_reset(user.id)
        except UserNotFoundError:
            return

        await self._sender.send_password_reset(updated.email, updated.first_name, token.value)
        logger.info("Password reset issued for user %s", user.id)

    async def reset_password(self, token: str, new_password: str) -> UserProfile:
        # Unknown tokens are rejected before hashing.
        if await self._store.find_by_password_reset_token(token) is None:
            raise InvalidOrExpiredTokenError()

        password_hash = await self._hasher.hash(new_password)
        # Re-checked at write time; only one concurrent reset can consume it.
        updated = await self._store.consume_password_reset_token(
            token,
            CredentialUpdate(
                password_hash=password_hash,
                password_reset_token=None,
                password_reset_expires_at=None,
                refresh_tokens=(),
            ),
        )
        if updated is None:
            raise InvalidOrExpiredTokenError()

        logger.info("User %s reset their password; all sessions revoked", updated.id)
        return UserProfile.from_credential(updated)

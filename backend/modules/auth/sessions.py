"""
Session lifecycle: login, refresh, logout.

A session exists for as long as its refresh token is in the user's active
set. Refresh rotates the token with a compare-and-swap on the store, so a
given refresh token can be exchanged at most once even under concurrency.
"""

import logging

from shared.logging import redact_email
from shared.models import AuthenticatedUser
from modules.credentials.exceptions import UserNotFoundError
from modules.credentials.interfaces import ICredentialStore
from modules.credentials.models import UserProfile
from modules.tokens.interfaces import ITokenCodec
from modules.tokens.models import TokenPair

from .exceptions import InvalidCredentialsError, InvalidRefreshTokenError
from .interfaces import IPasswordHasher, ISessionManager
from .models import LoginResult

logger = logging.getLogger(__name__)


class SessionManager(ISessionManager):
    """
    Implementation of the session lifecycle.

    Collaborators are injected; the manager keeps no state of its own.
    """

    def __init__(
        self,
        store: ICredentialStore,
        codec: ITokenCodec,
        hasher: IPasswordHasher,
    ):
        self._store = store
        self._codec = codec
        self._hasher = hasher

    async def login(self, email: str, password: str) -> LoginResult:
        user = await self._store.find_by_email(email)
        if user is None:
            await self._hasher.verify_dummy(password)
            logger.info("Login failed for %s", redact_email(email))
            raise InvalidCredentialsError()

        if not await self._hasher.verify(password, user.password_hash):
            logger.info("Login failed for %s", redact_email(email))
            raise InvalidCredentialsError()

        tokens = self._codec.issue_pair(user.id, user.email)
        if await self._store.add_refresh_token(user.id, tokens.refresh_token) is None:
            # Record disappeared between the lookup and the write.
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return LoginResult(user=UserProfile.from_credential(user), tokens=tokens)

    async def refresh(self, refresh_token: str) -> TokenPair:
        claims = self._codec.verify_refresh(refresh_token)

        user = await self._store.find_by_id(claims.subject_id)
        if user is None:
            raise UserNotFoundError(claims.subject_id)

        if not await self._store.has_refresh_token(user.id, refresh_token):
            logger.warning("Inactive refresh token presented for user %s", user.id)
            raise InvalidRefreshTokenError()

        tokens = self._codec.issue_pair(user.id, user.email)
        if not await self._store.rotate_refresh_token(user.id, refresh_token, tokens.refresh_token):
            # Another request rotated or revoked the token first.
            logger.warning("Lost refresh rotation race for user %s", user.id)
            raise InvalidRefreshTokenError()

        return tokens

    async def logout(self, user_id: str, refresh_token: str) -> None:
        user = await self._store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        removed = await self._store.remove_refresh_token(user_id, refresh_token)
        logger.info("User %s logged out (token active: %s)", user_id, removed)

    async def logout_all(self, user_id: str) -> None:
        if await self._store.clear_refresh_tokens(user_id) is None:
            raise UserNotFoundError(user_id)
        logger.info("User %s logged out of all sessions", user_id)

    async def get_profile(self, user_id: str) -> UserProfile:
        user = await self._store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return UserProfile.from_credential(user)

    async def authenticate(self, access_token: str) -> AuthenticatedUser:
        claims = self._codec.verify_access(access_token)
        return AuthenticatedUser(id=claims.subject_id, email=claims.email)

"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

When the in-memory store is replaced by a database-backed one, only the
``store`` property here needs to change.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import ICredentialManager, IPasswordHasher, ISessionManager
    from modules.credentials.interfaces import ICredentialStore
    from modules.notifications.interfaces import INotificationSender
    from modules.tokens.interfaces import ITokenCodec
    from modules.tokens.one_time import OneTimeTokenIssuer


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Collaborators passed to the constructor replace the defaults, which is
    how tests inject fakes.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        store: "ICredentialStore | None" = None,
        hasher: "IPasswordHasher | None" = None,
        notifications: "INotificationSender | None" = None,
    ) -> None:
        self._settings = settings
        self._store = store
        self._hasher = hasher
        self._notifications = notifications
        self._codec: "ITokenCodec | None" = None
        self._issuer: "OneTimeTokenIssuer | None" = None
        self._sessions: "ISessionManager | None" = None
        self._credentials: "ICredentialManager | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def store(self) -> "ICredentialStore":
        """Get the credential store instance."""
        if self._store is None:
            from modules.credentials.repository import InMemoryCredentialStore
            self._store = InMemoryCredentialStore()
        return self._store

    @property
    def codec(self) -> "ITokenCodec":
        """Get the token codec instance."""
        if self._codec is None:
            from modules.tokens.codec import JWTTokenCodec
            self._codec = JWTTokenCodec.from_settings(self.settings)
        return self._codec

    @property
    def hasher(self) -> "IPasswordHasher":
        """Get the password hasher instance."""
        if self._hasher is None:
            from modules.auth.passwords import BcryptPasswordHasher
            self._hasher = BcryptPasswordHasher(rounds=self.settings.bcrypt_rounds)
        return self._hasher

    @property
    def issuer(self) -> "OneTimeTokenIssuer":
        """Get the one-time token issuer instance."""
        if self._issuer is None:
            from modules.tokens.one_time import OneTimeTokenIssuer
            self._issuer = OneTimeTokenIssuer.from_settings(self.store, self.settings)
        return self._issuer

    @property
    def notifications(self) -> "INotificationSender":
        """Get the notification sender instance."""
        if self._notifications is None:
            from modules.notifications.service import build_notification_sender
            self._notifications = build_notification_sender(self.settings)
        return self._notifications

    @property
    def sessions(self) -> "ISessionManager":
        """Get the session manager instance."""
        if self._sessions is None:
            from modules.auth.sessions import SessionManager
            self._sessions = SessionManager(self.store, self.codec, self.hasher)
        return self._sessions

    @property
    def credentials(self) -> "ICredentialManager":
        """Get the credential manager instance."""
        if self._credentials is None:
            from modules.auth.credentials import CredentialManager
            self._credentials = CredentialManager(
                self.store, self.hasher, self.issuer, self.notifications
            )
        return self._credentials


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_session_manager() -> "ISessionManager":
    """FastAPI dependency for the session manager."""
    return get_container().sessions


def get_credential_manager() -> "ICredentialManager":
    """FastAPI dependency for the credential manager."""
    return get_container().credentials

"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import pytest

from api.dependencies import reset_container
from shared.config import get_settings
from modules.auth.credentials import CredentialManager
from modules.auth.passwords import BcryptPasswordHasher
from modules.auth.sessions import SessionManager
from modules.credentials.repository import InMemoryCredentialStore
from modules.notifications.exceptions import NotificationDeliveryError
from modules.tokens.codec import JWTTokenCodec
from modules.tokens.one_time import OneTimeTokenIssuer


# Test JWT secrets (only for testing)
TEST_ACCESS_SECRET = "test-access-secret-for-testing-only"
TEST_REFRESH_SECRET = "test-refresh-secret-for-testing-only"

# Lowest cost bcrypt accepts; keeps the suite fast.
TEST_BCRYPT_ROUNDS = 4

TEST_EMAIL = "bob@example.com"
TEST_PASSWORD = "Secret123!"


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@dataclass
class SentMessage:
    email: str
    first_name: str
    token: str


@dataclass
class RecordingSender:
    """Notification sender that keeps every message in memory."""

    verifications: list[SentMessage] = field(default_factory=list)
    password_resets: list[SentMessage] = field(default_factory=list)

    async def send_verification(self, email: str, first_name: str, token: str) -> None:
        self.verifications.append(SentMessage(email, first_name, token))

    async def send_password_reset(self, email: str, first_name: str, token: str) -> None:
        self.password_resets.append(SentMessage(email, first_name, token))


class FailingSender:
    """Notification sender whose transport is always down."""

    def __init__(self):
        self.attempts = 0

    async def send_verification(self, email: str, first_name: str, token: str) -> None:
        self.attempts += 1
        raise NotificationDeliveryError("SMTP unavailable")

    async def send_password_reset(self, email: str, first_name: str, token: str) -> None:
        self.attempts += 1
        raise NotificationDeliveryError("SMTP unavailable")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock) -> InMemoryCredentialStore:
    return InMemoryCredentialStore(clock=clock)


@pytest.fixture
def codec(clock) -> JWTTokenCodec:
    return JWTTokenCodec(
        access_secret=TEST_ACCESS_SECRET,
        refresh_secret=TEST_REFRESH_SECRET,
        access_expires_in="15m",
        refresh_expires_in="7d",
        clock=clock,
    )


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def issuer(store, clock) -> OneTimeTokenIssuer:
    return OneTimeTokenIssuer(store, clock=clock)


@pytest.fixture
def sessions(store, codec, hasher) -> SessionManager:
    return SessionManager(store, codec, hasher)


@pytest.fixture
def credentials(store, hasher, issuer, sender) -> CredentialManager:
    return CredentialManager(store, hasher, issuer, sender)


@pytest.fixture
def verified_user(credentials, sender):
    """Async factory: register an account and click its verification link."""

    async def _create(email: str = TEST_EMAIL, password: str = TEST_PASSWORD):
        await credentials.register(email, password, "Bob", "Builder")
        return await credentials.verify_email(sender.verifications[-1].token)

    return _create

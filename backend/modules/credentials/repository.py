"""
In-process credential store.

Records are immutable models kept in a dict; every write builds a new record
and swaps it in while holding the store lock, so a concurrent reader sees
either the old record or the new one, never a mix.
"""

import asyncio
import hmac
import uuid
from typing import Callable, Optional

from shared.clock import Clock, utc_now

from .exceptions import DuplicateEmailError
from .interfaces import ICredentialStore
from .models import (
    CredentialRegistration,
    CredentialUpdate,
    UserCredential,
    normalize_email,
)


def _new_id() -> str:
    return uuid.uuid4().hex


class InMemoryCredentialStore(ICredentialStore):
    """
    ICredentialStore backed by process memory.

    Suitable for tests and single-process deployments. State is lost on
    restart.
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._records: dict[str, UserCredential] = {}
        self._ids_by_email: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def create(self, registration: CredentialRegistration) -> UserCredential:
        email = normalize_email(registration.email)
        async with self._lock:
            if email in self._ids_by_email:
                raise DuplicateEmailError()

            now = self._clock()
            record = UserCredential(
                id=self._id_factory(),
                email=email,
                password_hash=registration.password_hash,
                first_name=registration.first_name,
                last_name=registration.last_name,
                email_verification_token=registration.email_verification_token,
                email_verification_expires_at=registration.email_verification_expires_at,
                created_at=now,
                updated_at=now,
            )
            self._records[record.id] = record
            self._ids_by_email[email] = record.id
            return record

    async def find_by_email(self, email: str) -> Optional[UserCredential]:
        user_id = self._ids_by_email.get(normalize_email(email))
        if user_id is None:
            return None
        return self._records.get(user_id)

    async def find_by_id(self, user_id: str) -> Optional[UserCredential]:
        return self._records.get(user_id)

    async def find_by_verification_token(self, token: str) -> Optional[UserCredential]:
        return self._match_token(token, "email_verification_token", "email_verification_expires_at")

    async def find_by_password_reset_token(self, token: str) -> Optional[UserCredential]:
        return self._match_token(token, "password_reset_token", "password_reset_expires_at")

    async def consume_verification_token(
        self, token: str, changes: CredentialUpdate
    ) -> Optional[UserCredential]:
        async with self._lock:
            record = self._match_token(
                token, "email_verification_token", "email_verification_expires_at"
            )
            if record is None:
                return None
            return self._replace(record, **changes.changes())

    async def consume_password_reset_token(
        self, token: str, changes: CredentialUpdate
    ) -> Optional[UserCredential]:
        async with self._lock:
            record = self._match_token(token, "password_reset_token", "password_reset_expires_at")
            if record is None:
                return None
            return self._replace(record, **changes.changes())

    def _match_token(
        self, token: str, token_field: str, expiry_field: str
    ) -> Optional[UserCredential]:
        if not token:
            return None
        now = self._clock()
        for record in list(self._records.values()):
            stored = getattr(record, token_field)
            expires_at = getattr(record, expiry_field)
            if (
                stored is not None
                and expires_at is not None
                and expires_at > now
                and hmac.compare_digest(stored, token)
            ):
                return record
        return None

    async def update(self, user_id: str, changes: CredentialUpdate) -> Optional[UserCredential]:
        async with self._lock:
            record = self._records.get(user_id)
            if record is None:
                return None
            return self._replace(record, **changes.changes())

    async def add_refresh_token(self, user_id: str, token: str) -> Optional[UserCredential]:
        async with self._lock:
            record = self._records.get(user_id)
            if record is None:
                return None
            if token in record.refresh_tokens:
                return record
            return self._replace(record, refresh_tokens=record.refresh_tokens + (token,))

    async def remove_refresh_token(self, user_id: str, token: str) -> bool:
        async with self._lock:
            record = self._records.get(user_id)
            if record is None or token not in record.refresh_tokens:
                return False
            remaining = tuple(t for t in record.refresh_tokens if t != token)
            self._replace(record, refresh_tokens=remaining)
            return True

    async def rotate_refresh_token(self, user_id: str, old_token: str, new_token: str) -> bool:
        async with self._lock:
            record = self._records.get(user_id)
            if record is None or old_token not in record.refresh_tokens:
                return False
            remaining = tuple(t for t in record.refresh_tokens if t not in (old_token, new_token))
            self._replace(record, refresh_tokens=remaining + (new_token,))
            return True

    async def clear_refresh_tokens(self, user_id: str) -> Optional[UserCredential]:
        async with self._lock:
            record = self._records.get(user_id)
            if record is None:
                return None
            return self._replace(record, refresh_tokens=())

    async def has_refresh_token(self, user_id: str, token: str) -> bool:
        record = self._records.get(user_id)
        return record is not None and token in record.refresh_tokens

    def _replace(self, record: UserCredential, **fields) -> UserCredential:
        # Caller holds self._lock.
        updated = record.model_copy(update={**fields, "updated_at": self._clock()})
        self._records[record.id] = updated
        return updated

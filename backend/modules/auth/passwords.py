"""
Password hashing with bcrypt.

bcrypt is deliberately slow, so every call runs in a worker thread; a login
being hashed never holds up other requests on the event loop.
"""

import asyncio
from typing import Optional

import bcrypt

from .interfaces import IPasswordHasher

# Number of rounds for bcrypt hashing (12 is secure default)
BCRYPT_ROUNDS = 12

# bcrypt only uses the first 72 bytes; newer releases reject longer input.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(IPasswordHasher):
    """IPasswordHasher backed by the bcrypt package."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self._rounds = rounds
        self._dummy_hash: Optional[str] = None

    @property
    def rounds(self) -> int:
        return self._rounds

    async def hash(self, plaintext: str) -> str:
        return await asyncio.to_thread(self._hash_blocking, plaintext)

    async def verify(self, plaintext: str, hashed: str) -> bool:
        return await asyncio.to_thread(self._verify_blocking, plaintext, hashed)

    async def verify_dummy(self, plaintext: str) -> None:
        """
        Run a comparison against a throwaway hash.

        Called when the email is unknown so the response takes as long as
        a wrong-password response and does not reveal whether the account
        exists. The dummy hash is built on first use.
        """
        if self._dummy_hash is None:
            self._dummy_hash = await self.hash("latchkey-timing-dummy")
        await self.verify(plaintext, self._dummy_hash)

    def _hash_blocking(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("utf-8")

    @staticmethod
    def _verify_blocking(plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plaintext), hashed.encode("utf-8"))
        except ValueError:
            # Malformed or foreign hash format
            return False

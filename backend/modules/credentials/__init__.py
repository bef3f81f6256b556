"""
Credential store module.

Owns the persisted user record: identity, password hash, one-time tokens,
and the set of active refresh tokens.

Public API:
- ICredentialStore: Interface for credential persistence
- InMemoryCredentialStore: Process-local implementation
- UserCredential, CredentialRegistration, CredentialUpdate, UserProfile
- Exceptions: DuplicateEmailError, UserNotFoundError
"""

from .interfaces import ICredentialStore
from .models import (
    UserCredential,
    CredentialRegistration,
    CredentialUpdate,
    UserProfile,
    normalize_email,
)
from .exceptions import DuplicateEmailError, UserNotFoundError
from .repository import InMemoryCredentialStore

__all__ = [
    # Interface
    "ICredentialStore",
    "InMemoryCredentialStore",
    # Models
    "UserCredential",
    "CredentialRegistration",
    "CredentialUpdate",
    "UserProfile",
    "normalize_email",
    # Exceptions
    "DuplicateEmailError",
    "UserNotFoundError",
]

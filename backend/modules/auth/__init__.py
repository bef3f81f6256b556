"""
Authentication module.

Orchestrates sessions (login, refresh, logout) and the credential lifecycle
(registration, email verification, password reset).

Public API:
- ISessionManager / SessionManager
- ICredentialManager / CredentialManager
- IPasswordHasher / BcryptPasswordHasher
- LoginResult
- Auth exceptions: InvalidCredentialsError, InvalidRefreshTokenError, etc.
"""

from .interfaces import ICredentialManager, IPasswordHasher, ISessionManager
from .models import LoginResult
from .exceptions import (
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidOrExpiredTokenError,
    AlreadyVerifiedError,
)
from .passwords import BcryptPasswordHasher
from .sessions import SessionManager
from .credentials import CredentialManager

__all__ = [
    # Interfaces
    "ISessionManager",
    "ICredentialManager",
    "IPasswordHasher",
    # Implementations
    "SessionManager",
    "CredentialManager",
    "BcryptPasswordHasher",
    # Models
    "LoginResult",
    # Exceptions
    "InvalidCredentialsError",
    "InvalidRefreshTokenError",
    "InvalidOrExpiredTokenError",
    "AlreadyVerifiedError",
]

"""
Shared infrastructure for Latchkey backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- clock / durations: time source and lifetime parsing
- exceptions: Base exception classes
- logging: logger setup and redaction helpers

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .clock import Clock, utc_now
from .config import Settings, get_settings
from .durations import parse_duration
from .exceptions import (
    LatchkeyError,
    NotFoundError,
    ConflictError,
    ValidationError,
    AuthenticationError,
    ExternalServiceError,
)
from .models import AuthenticatedUser

__all__ = [
    "Clock",
    "utc_now",
    "Settings",
    "get_settings",
    "parse_duration",
    "LatchkeyError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "AuthenticationError",
    "ExternalServiceError",
    "AuthenticatedUser",
]

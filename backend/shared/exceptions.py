"""
Base exception classes for the Latchkey backend.

Each module defines its own exceptions that inherit from these bases.
Every expected domain failure is a LatchkeyError carrying a stable ``code``;
infrastructure failures (store outages, bugs) are not, and propagate as-is.
"""

from typing import Optional, Any


class LatchkeyError(Exception):
    """
    Base exception for all Latchkey errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(LatchkeyError):
    """Resource not found."""

    pass


class ConflictError(LatchkeyError):
    """Request conflicts with the current state of a resource."""

    pass


class ValidationError(LatchkeyError):
    """Input validation failed."""

    pass


class AuthenticationError(LatchkeyError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class ExternalServiceError(LatchkeyError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service

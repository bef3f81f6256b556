"""
Credential store exceptions.
"""

from typing import Optional

from shared.exceptions import ConflictError, NotFoundError


class DuplicateEmailError(ConflictError):
    """Raised when registering an email that already has a record."""

    def __init__(self, message: str = "User with this email already exists"):
        super().__init__(message, code="DUPLICATE_EMAIL")


class UserNotFoundError(NotFoundError):
    """Raised when a credential record does not exist."""

    def __init__(self, user_id: Optional[str] = None):
        details = {"user_id": user_id} if user_id else {}
        super().__init__("User not found", code="USER_NOT_FOUND", details=details)

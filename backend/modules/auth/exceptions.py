"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, ConflictError, ValidationError


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when login fails.

    Used for both unknown email and wrong password so responses do not
    reveal which accounts exist.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidRefreshTokenError(AuthenticationError):
    """Raised when a well-formed refresh token is no longer active."""

    def __init__(self, message: str = "Invalid refresh token"):
        super().__init__(message, code="INVALID_REFRESH_TOKEN")


class InvalidOrExpiredTokenError(ValidationError):
    """Raised when a verification or reset token is unknown, used, or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="INVALID_OR_EXPIRED_TOKEN")


class AlreadyVerifiedError(ConflictError):
    """Raised when requesting verification for an already verified email."""

    def __init__(self, message: str = "Email is already verified"):
        super().__init__(message, code="ALREADY_VERIFIED")

"""API models package."""

from .auth import (
    ApiResponse,
    EmailRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SessionData,
    TokensData,
    UserData,
)
from .errors import ErrorResponse

__all__ = [
    "ApiResponse",
    "EmailRequest",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "SessionData",
    "TokensData",
    "UserData",
    "ErrorResponse",
]

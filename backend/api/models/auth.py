"""
Request and response models for the auth endpoints.

Request bodies accept camelCase keys (``firstName``) as well as the
snake_case field names. Responses use the {success, message, data} envelope.
"""

import re
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from modules.credentials.models import NAME_MAX_LENGTH, UserProfile
from modules.tokens.models import TokenPair

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
PASSWORD_SPECIALS = "@$!%*?&"
_PASSWORD_RULES = (
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"\d"), "a number"),
    (re.compile(f"[{re.escape(PASSWORD_SPECIALS)}]"), f"a special character ({PASSWORD_SPECIALS})"),
)

DataT = TypeVar("DataT")


def check_password_strength(password: str) -> str:
    missing = [label for pattern, label in _PASSWORD_RULES if not pattern.search(password)]
    if missing:
        raise ValueError("Password must contain " + ", ".join(missing))
    return password


class _RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(_RequestModel):
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return check_password_strength(value)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value


class LoginRequest(_RequestModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class EmailRequest(_RequestModel):
    """Body for resend-verification and forgot-password."""

    email: EmailStr


class RefreshRequest(_RequestModel):
    refresh_token: str = Field(..., min_length=1)


class ResetPasswordRequest(_RequestModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return check_password_strength(value)


class ApiResponse(BaseModel, Generic[DataT]):
    """Standard success envelope."""

    success: bool = True
    message: str
    data: Optional[DataT] = None


class UserData(BaseModel):
    user: UserProfile


class SessionData(BaseModel):
    user: UserProfile
    tokens: TokenPair


class TokensData(BaseModel):
    tokens: TokenPair

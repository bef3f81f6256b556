"""
Credential store data models.

UserCredential is the persisted record and is immutable: the store replaces
the whole record on every write, so readers only ever see complete states.
CredentialUpdate carries partial changes; only fields explicitly passed are
applied, and an explicit None clears a nullable field.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

NAME_MAX_LENGTH = 50

# Each pair is set together and cleared together.
_TOKEN_PAIRS = (
    ("email_verification_token", "email_verification_expires_at"),
    ("password_reset_token", "password_reset_expires_at"),
)


def normalize_email(email: str) -> str:
    """Canonical form used for storage and comparison."""
    return email.strip().lower()


def _check_token_pairs(values: dict[str, Any], fields_set: set[str]) -> None:
    for token_field, expiry_field in _TOKEN_PAIRS:
        touched = {token_field, expiry_field} & fields_set
        if not touched:
            continue
        if len(touched) != 2:
            raise ValueError(f"{token_field} and {expiry_field} must be set together")
        if (values.get(token_field) is None) != (values.get(expiry_field) is None):
            raise ValueError(f"{token_field} and {expiry_field} must both be set or both be None")


class UserCredential(BaseModel):
    """
    A user's identity, password hash, and active refresh tokens.

    Owned by the credential store. Never returned to callers outside the
    auth module; use UserProfile for that.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    password_hash: str = Field(..., repr=False)
    first_name: str = Field(..., max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., max_length=NAME_MAX_LENGTH)
    is_email_verified: bool = False

    email_verification_token: Optional[str] = Field(None, repr=False)
    email_verification_expires_at: Optional[datetime] = None
    password_reset_token: Optional[str] = Field(None, repr=False)
    password_reset_expires_at: Optional[datetime] = None

    # Insertion order is kept; membership is what matters.
    refresh_tokens: tuple[str, ...] = Field(default=(), repr=False)

    created_at: datetime
    updated_at: datetime


class CredentialRegistration(BaseModel):
    """Fields needed to create a new credential record."""

    email: str
    password_hash: str = Field(..., repr=False)
    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email_verification_token: Optional[str] = Field(None, repr=False)
    email_verification_expires_at: Optional[datetime] = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _strip_names(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_verification_pair(self) -> "CredentialRegistration":
        if (self.email_verification_token is None) != (self.email_verification_expires_at is None):
            raise ValueError("verification token and expiry must be set together")
        return self


class CredentialUpdate(BaseModel):
    """
    Partial update for a credential record.

    Example:
        CredentialUpdate(password_reset_token=None, password_reset_expires_at=None)
        clears the reset pair and leaves everything else untouched.
    """

    password_hash: Optional[str] = Field(None, repr=False)
    first_name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    is_email_verified: Optional[bool] = None
    email_verification_token: Optional[str] = Field(None, repr=False)
    email_verification_expires_at: Optional[datetime] = None
    password_reset_token: Optional[str] = Field(None, repr=False)
    password_reset_expires_at: Optional[datetime] = None
    refresh_tokens: Optional[tuple[str, ...]] = Field(None, repr=False)

    @field_validator("is_email_verified")
    @classmethod
    def _verification_is_one_way(cls, value: Optional[bool]) -> Optional[bool]:
        if value is False:
            raise ValueError("is_email_verified cannot be reset to False")
        return value

    @model_validator(mode="after")
    def _check_fields(self) -> "CredentialUpdate":
        values = self.model_dump()
        for name in ("password_hash", "first_name", "last_name", "is_email_verified", "refresh_tokens"):
            if name in self.model_fields_set and values[name] is None:
                raise ValueError(f"{name} cannot be cleared")
        _check_token_pairs(values, self.model_fields_set)
        return self

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller explicitly set."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class UserProfile(BaseModel):
    """
    Public projection of a credential record.

    Excludes the password hash, refresh tokens, and one-time tokens.
    Serialized with camelCase keys for API responses.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    email: str
    first_name: str
    last_name: str
    is_email_verified: bool
    created_at: datetime

    @classmethod
    def from_credential(cls, credential: UserCredential) -> "UserProfile":
        return cls(
            id=credential.id,
            email=credential.email,
            first_name=credential.first_name,
            last_name=credential.last_name,
            is_email_verified=credential.is_email_verified,
            created_at=credential.created_at,
        )

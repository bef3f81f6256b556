"""
Token module data models.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TokenKind(str, Enum):
    """Discriminator embedded in every signed token."""

    ACCESS = "access"
    REFRESH = "refresh"


class OneTimeTokenPurpose(str, Enum):
    """The two independent kinds of one-time token."""

    VERIFICATION = "verification"
    PASSWORD_RESET = "password_reset"


class TokenClaims(BaseModel):
    """
    Verified contents of an access or refresh token.

    Only produced after the signature and expiry have been checked.
    """

    model_config = ConfigDict(frozen=True)

    subject_id: str = Field(..., description="User ID (sub claim)")
    email: str = Field(..., description="User's email at issue time")
    kind: TokenKind
    issued_at: datetime
    expires_at: datetime
    token_id: str = Field(..., description="Unique token ID (jti claim)")


class TokenPair(BaseModel):
    """
    Access/refresh token pair as returned to a client.

    Serializes as {"accessToken", "refreshToken", "expiresIn"}.
    expires_in tracks the configured access lifetime, not the signed exp.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    access_token: str
    refresh_token: str
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class OneTimeToken(BaseModel):
    """Opaque random string with an absolute expiry."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., repr=False)
    expires_at: datetime
    purpose: OneTimeTokenPurpose

"""
Authentication module data models.

These models define the data structures returned by the auth managers.
"""

from pydantic import BaseModel, Field

from modules.credentials.models import UserProfile
from modules.tokens.models import TokenPair


class LoginResult(BaseModel):
    """Outcome of a successful login."""

    user: UserProfile = Field(..., description="Public profile of the user")
    tokens: TokenPair = Field(..., description="Newly issued token pair")

    model_config = {"frozen": True}

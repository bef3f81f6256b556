"""
Bearer authentication dependency.

Verifies access tokens through the session manager and exposes the caller
as an AuthenticatedUser.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser
from modules.auth.interfaces import ISessionManager

from ..dependencies import get_session_manager

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Access token is required"):
        super().__init__(message, code="MISSING_TOKEN")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    sessions: ISessionManager = Depends(get_session_manager),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()

    return await sessions.authenticate(credentials.credentials)


"""
Authentication endpoints.

Thin adapters over the session and credential managers. Domain errors are
turned into error envelopes by the application exception handler.
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from shared.logging import redact_email
from shared.models import AuthenticatedUser
from modules.auth.interfaces import ICredentialManager, ISessionManager

from ..dependencies import get_credential_manager, get_session_manager
from ..middleware.auth import get_current_user
from ..models.auth import (
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

logger = logging.getLogger(__name__)

router = APIRouter()

# Returned for every forgot-password request, known email or not.
RESET_REQUESTED_MESSAGE = "If an account with that email exists, a password reset link has been sent."


@router.post(
    "/register",
    response_model=ApiResponse[UserData],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    credentials: ICredentialManager = Depends(get_credential_manager),
) -> ApiResponse[UserData]:
    """
    Create an account.

    The account starts unverified and a verification link is emailed.
    """
    user = await credentials.register(body.email, body.password, body.first_name, body.last_name)
    return ApiResponse[UserData](
        message="Registration successful. Please check your email to verify your account.",
        data=UserData(user=user),
    )


@router.post("/login", response_model=ApiResponse[SessionData])
async def login(
    body: LoginRequest,
    sessions: ISessionManager = Depends(get_session_manager),
) -> ApiResponse[SessionData]:
    result = await sessions.login(body.email, body.password)
    return ApiResponse[SessionData](
        message="Login successful",
        data=SessionData(user=result.user, tokens=result.tokens),
    )


@router.get("/verify-email", response_model=ApiResponse[UserData])
async def verify_email(
    token: str = Query(..., min_length=1),
    credentials: ICredentialManager = Depends(get_credential_manager),
) -> ApiResponse[UserData]:
    """Consume the token from a verification link."""
    user = await credentials.verify_email(token)
    return ApiResponse[UserData](message="Email verified successfully", data=UserData(user=user))


@router.post("/resend-verification", response_model=ApiResponse[None])
async def resend_verification(
    body: EmailRequest,
    credentials: ICredentialManager = Depends(get_credential_manager),
) -> ApiResponse[None]:
    await credentials.resend_verification(body.email)
    return ApiResponse[None](message="Verification email sent")


@router.post("/refresh", response_model=ApiResponse[TokensData])
async def refresh(
    body: RefreshRequest,
    sessions: ISessionManager = Depends(get_session_manager),
) -> ApiResponse[TokensData]:
    """
    Exchange a refresh token for a new pair.

    The presented refresh token is revoked; reusing it fails.
    """
    tokens = await sessions.refresh(body.refresh_token)
    return ApiResponse[TokensData](message="Token refreshed", data=TokensData(tokens=tokens))


@router.post("/forgot-password", response_model=ApiResponse[None])
async def forgot_password(
    body: EmailRequest,
    credentials: ICredentialManager = Depends(get_credential_manager),
) -> ApiResponse[None]:
    await credentials.request_password_reset(body.email)
    logger.debug("Handled password reset request for %s", redact_email(body.email))
    return ApiResponse[None](message=RESET_REQUESTED_MESSAGE)


@router.post("/reset-password", response_model=ApiResponse[None])
async def reset_password(
    body: ResetPasswordRequest,
    credentials: ICredentialManager = Depends(get_credential_manager),
) -> ApiResponse[None]:
    """Set a new password and sign out every session."""
    await credentials.reset_password(body.token, body.password)
    return ApiResponse[None](message="Password reset successful. Please log in again.")


@router.post("/logout", response_model=ApiResponse[None])
async def logout(
    body: RefreshRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    sessions: ISessionManager = Depends(get_session_manager),
) -> ApiResponse[None]:
    await sessions.logout(user.id, body.refresh_token)
    return ApiResponse[None](message="Logged out")


@router.post("/logout-all", response_model=ApiResponse[None])
async def logout_all(
    user: AuthenticatedUser = Depends(get_current_user),
    sessions: ISessionManager = Depends(get_session_manager),
) -> ApiResponse[None]:
    await sessions.logout_all(user.id)
    return ApiResponse[None](message="Logged out from all devices")


@router.get("/profile", response_model=ApiResponse[UserData])
async def profile(
    user: AuthenticatedUser = Depends(get_current_user),
    sessions: ISessionManager = Depends(get_session_manager),
) -> ApiResponse[UserData]:
    """Get the current user's profile. Requires authentication."""
    current = await sessions.get_profile(user.id)
    return ApiResponse[UserData](message="Profile retrieved", data=UserData(user=current))

"""
JWT token codec.

Access and refresh tokens share the same payload shape but are signed with
two independent secrets, so leaking one secret does not let an attacker
forge the other kind. A ``kind`` claim is checked after the signature so a
refresh token can never be replayed as an access token or vice versa.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

import jwt

from shared.clock import Clock, utc_now
from shared.config import Settings
from shared.durations import parse_duration

from .exceptions import TokenExpiredError, TokenKindMismatchError, TokenMalformedError
from .interfaces import ITokenCodec
from .models import TokenClaims, TokenKind, TokenPair

_REQUIRED_CLAIMS = ["sub", "email", "kind", "iat", "exp", "jti"]


class JWTTokenCodec(ITokenCodec):
    """
    ITokenCodec implementation using PyJWT.

    Expiry is checked against the injected clock rather than PyJWT's own
    wall clock, and is exclusive: a token whose exp equals "now" is expired.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_expires_in: str = "15m",
        refresh_expires_in: str = "7d",
        algorithm: str = "HS256",
        clock: Clock = utc_now,
    ):
        if not access_secret or not refresh_secret:
            raise ValueError("Both access and refresh secrets are required")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh secrets must differ")

        self._secrets = {
            TokenKind.ACCESS: access_secret,
            TokenKind.REFRESH: refresh_secret,
        }
        self._lifetimes = {
            TokenKind.ACCESS: parse_duration(access_expires_in),
            TokenKind.REFRESH: parse_duration(refresh_expires_in),
        }
        self._access_expires_in = access_expires_in
        self._algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock = utc_now) -> "JWTTokenCodec":
        return cls(
            access_secret=settings.jwt_access_secret,
            refresh_secret=settings.jwt_refresh_secret,
            access_expires_in=settings.jwt_access_expires_in,
            refresh_expires_in=settings.jwt_refresh_expires_in,
            algorithm=settings.jwt_algorithm,
            clock=clock,
        )

    # ------------------------------------------------------------------
    # Issuing
    # ------------------------------------------------------------------

    def issue_access_token(self, subject_id: str, email: str) -> str:
        return self._issue(TokenKind.ACCESS, subject_id, email)

    def issue_refresh_token(self, subject_id: str, email: str) -> str:
        return self._issue(TokenKind.REFRESH, subject_id, email)

    def issue_pair(self, subject_id: str, email: str) -> TokenPair:
        # expires_in re-reads the configured lifetime string; see DESIGN.md.
        return TokenPair(
            access_token=self.issue_access_token(subject_id, email),
            refresh_token=self.issue_refresh_token(subject_id, email),
            expires_in=parse_duration(self._access_expires_in),
        )

    def _issue(self, kind: TokenKind, subject_id: str, email: str) -> str:
        issued_at = int(self._clock().timestamp())
        payload = {
            "sub": subject_id,
            "email": email,
            "kind": kind.value,
            "iat": issued_at,
            "exp": issued_at + self._lifetimes[kind],
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secrets[kind], algorithm=self._algorithm)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify_access(self, token: str) -> TokenClaims:
        return self._verify(token, TokenKind.ACCESS)

    def verify_refresh(self, token: str) -> TokenClaims:
        return self._verify(token, TokenKind.REFRESH)

    def _verify(self, token: str, expected: TokenKind) -> TokenClaims:
        if not token or not isinstance(token, str):
            raise TokenMalformedError("Token is required")

        # The claimed kind only selects which secret to check against; it is
        # trusted once the signature verifies with that secret.
        claimed = self._claimed_kind(token)
        if claimed is None:
            raise TokenMalformedError()

        try:
            payload = jwt.decode(
                token,
                self._secrets[claimed],
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": _REQUIRED_CLAIMS,
                },
            )
        except jwt.InvalidTokenError as e:
            raise TokenMalformedError(f"Invalid token: {e}") from e

        try:
            subject_id = str(payload["sub"])
            email = str(payload["email"])
            issued_at = int(payload["iat"])
            expires_at = int(payload["exp"])
            token_id = str(payload["jti"])
        except (TypeError, ValueError) as e:
            raise TokenMalformedError(f"Invalid token: {e}") from e

        if expires_at <= self._clock().timestamp():
            raise TokenExpiredError()

        if claimed is not expected:
            raise TokenKindMismatchError(expected.value, claimed.value)

        return TokenClaims(
            subject_id=subject_id,
            email=email,
            kind=claimed,
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
            token_id=token_id,
        )

    def _claimed_kind(self, token: str) -> Optional[TokenKind]:
        payload = self.peek(token)
        if payload is None:
            return None
        try:
            return TokenKind(payload.get("kind"))
        except ValueError:
            return None

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def peek(self, token: str) -> Optional[dict[str, Any]]:
        if not token or not isinstance(token, str):
            return None
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError:
            return None

    def is_expired(self, token: str) -> bool:
        payload = self.peek(token)
        if not payload or "exp" not in payload:
            return True
        try:
            expires_at = int(payload["exp"])
        except (TypeError, ValueError):
            return True
        return expires_at <= self._clock().timestamp()

"""
Centralized configuration for the Latchkey backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., JWT_*, EMAIL_*).
"""

from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .durations import parse_duration

DEFAULT_ACCESS_SECRET = "default-access-secret-change-in-production"
DEFAULT_REFRESH_SECRET = "default-refresh-secret-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Latchkey API"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3001", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # JWT
    jwt_access_secret: str = DEFAULT_ACCESS_SECRET
    jwt_refresh_secret: str = DEFAULT_REFRESH_SECRET
    jwt_access_expires_in: str = "15m"
    jwt_refresh_expires_in: str = "7d"
    jwt_algorithm: str = "HS256"

    # Passwords
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # One-time tokens
    email_verification_ttl_hours: int = 24
    password_reset_ttl_minutes: int = 60

    # Email (SMTP). Leaving email_user empty switches to the logging sender.
    email_host: str = "smtp.gmail.com"
    email_port: int = 587
    email_user: str = ""
    email_pass: str = ""
    email_from: str = ""

    # URLs used in notification links
    app_url: str = "http://localhost:8000"
    frontend_url: str = "http://localhost:3001"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def email_configured(self) -> bool:
        return bool(self.email_host and self.email_user and self.email_from)

    @model_validator(mode="after")
    def validate_token_settings(self) -> "Settings":
        """
        Reject configurations that would produce unusable or forgeable tokens.

        Lifetimes must parse, the two signing secrets must differ, and
        production refuses the development defaults or short secrets.
        """
        parse_duration(self.jwt_access_expires_in)
        parse_duration(self.jwt_refresh_expires_in)

        if self.jwt_access_secret == self.jwt_refresh_secret:
            raise ValueError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ.")

        if self.is_production:
            for name, value, default in (
                ("JWT_ACCESS_SECRET", self.jwt_access_secret, DEFAULT_ACCESS_SECRET),
                ("JWT_REFRESH_SECRET", self.jwt_refresh_secret, DEFAULT_REFRESH_SECRET),
            ):
                if value == default:
                    raise ValueError(f"{name} is required in production mode.")
                if len(value) < 32:
                    raise ValueError(f"{name} must be at least 32 characters.")
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() in tests that change the environment.
    """
    return Settings()

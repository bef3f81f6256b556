"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from pydantic import ValidationError

from shared.config import (
    DEFAULT_ACCESS_SECRET,
    DEFAULT_REFRESH_SECRET,
    Settings,
    get_settings,
)

STRONG_ACCESS = "a" * 40
STRONG_REFRESH = "b" * 40


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings()
        assert settings.app_name == "Latchkey API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.host == "0.0.0.0"
        assert settings.jwt_access_expires_in == "15m"
        assert settings.jwt_refresh_expires_in == "7d"
        assert settings.bcrypt_rounds == 12
        assert settings.email_verification_ttl_hours == 24
        assert settings.password_reset_ttl_minutes == 60

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000", "JWT_ACCESS_EXPIRES_IN": "30m"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.jwt_access_expires_in == "30m"

    def test_email_configured_requires_user_and_sender(self):
        assert Settings().email_configured is False
        settings = Settings(email_user="mailer", email_from="noreply@example.com")
        assert settings.email_configured is True

    def test_rejects_identical_secrets(self):
        with pytest.raises(ValidationError, match="must differ"):
            Settings(jwt_access_secret="same-secret", jwt_refresh_secret="same-secret")

    def test_rejects_unparseable_lifetime(self):
        with pytest.raises(ValidationError):
            Settings(jwt_access_expires_in="fifteen minutes")

    def test_rejects_out_of_range_bcrypt_rounds(self):
        with pytest.raises(ValidationError):
            Settings(bcrypt_rounds=3)


class TestProductionSecrets:
    def test_production_rejects_default_secrets(self):
        with pytest.raises(ValidationError, match="required in production"):
            Settings(environment="production")

    def test_production_rejects_short_secrets(self):
        with pytest.raises(ValidationError, match="at least 32 characters"):
            Settings(
                environment="production",
                jwt_access_secret="short-access",
                jwt_refresh_secret=STRONG_REFRESH,
            )

    def test_production_accepts_strong_secrets(self):
        settings = Settings(
            environment="production",
            jwt_access_secret=STRONG_ACCESS,
            jwt_refresh_secret=STRONG_REFRESH,
        )
        assert settings.is_production is True

    def test_development_allows_defaults(self):
        settings = Settings(environment="development")
        assert settings.jwt_access_secret == DEFAULT_ACCESS_SECRET
        assert settings.jwt_refresh_secret == DEFAULT_REFRESH_SECRET


class TestGetSettings:
    def test_returns_cached_instance(self):
        """get_settings should return the same instance."""
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self):
        first = get_settings()
        get_settings.cache_clear()
        assert get_settings() is not first

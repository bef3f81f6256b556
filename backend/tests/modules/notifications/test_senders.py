"""Tests for notification senders."""

import logging
import smtplib
from unittest.mock import patch

import pytest

from modules.notifications.exceptions import NotificationDeliveryError
from modules.notifications.service import (
    LoggingNotificationSender,
    SMTPNotificationSender,
    build_notification_sender,
)
from shared.config import Settings


def make_sender(port: int = 587) -> SMTPNotificationSender:
    return SMTPNotificationSender(
        host="smtp.example.com",
        port=port,
        username="mailer",
        password="mail-pass",
        from_email="noreply@example.com",
        app_url="http://localhost:8000",
        frontend_url="http://localhost:3001",
    )


class TestSMTPNotificationSender:
    @pytest.mark.asyncio
    async def test_sends_verification_with_starttls(self):
        with patch("modules.notifications.service.smtplib.SMTP") as mock_smtp:
            server = mock_smtp.return_value
            await make_sender().send_verification("bob@example.com", "Bob", "abc123")

        mock_smtp.assert_called_once_with("smtp.example.com", 587, timeout=30.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "mail-pass")
        from_addr, to_addrs, body = server.sendmail.call_args.args
        assert from_addr == "noreply@example.com"
        assert to_addrs == ["bob@example.com"]
        assert "verify-email?token=abc123" in body

    @pytest.mark.asyncio
    async def test_port_465_uses_implicit_tls(self):
        with patch("modules.notifications.service.smtplib.SMTP_SSL") as mock_ssl:
            server = mock_ssl.return_value
            await make_sender(port=465).send_password_reset("bob@example.com", "Bob", "abc123")

        server.starttls.assert_not_called()
        assert "reset-password?token=abc123" in server.sendmail.call_args.args[2]

    @pytest.mark.asyncio
    async def test_transport_errors_become_delivery_errors(self):
        with patch(
            "modules.notifications.service.smtplib.SMTP",
            side_effect=smtplib.SMTPConnectError(421, b"unavailable"),
        ):
            with pytest.raises(NotificationDeliveryError) as exc_info:
                await make_sender().send_verification("bob@example.com", "Bob", "abc123")

        assert exc_info.value.service == "email"
        assert "abc123" not in exc_info.value.message


class TestLoggingNotificationSender:
    @pytest.mark.asyncio
    async def test_logs_without_sending(self, caplog):
        sender = LoggingNotificationSender("http://localhost:8000", "http://localhost:3001")
        with caplog.at_level(logging.INFO, logger="modules.notifications.service"):
            await sender.send_verification("bob@example.com", "Bob", "abc123")
            await sender.send_password_reset("bob@example.com", "Bob", "abc123")

        assert "bo***@example.com" in caplog.text
        assert "abc123" not in caplog.text


class TestBuildNotificationSender:
    def test_falls_back_to_logging_sender(self):
        assert isinstance(build_notification_sender(Settings()), LoggingNotificationSender)

    def test_smtp_when_configured(self):
        settings = Settings(
            email_user="mailer",
            email_pass="mail-pass",
            email_from="noreply@example.com",
        )
        assert isinstance(build_notification_sender(settings), SMTPNotificationSender)

    def test_describes_configured_lifetimes(self):
        settings = Settings(
            email_user="mailer",
            email_from="noreply@example.com",
            email_verification_ttl_hours=48,
            password_reset_ttl_minutes=30,
        )
        sender = build_notification_sender(settings)
        assert sender._verification_valid_for == "48 hours"
        assert sender._reset_valid_for == "30 minutes"

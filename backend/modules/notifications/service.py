"""
Notification sender implementations.

SMTPNotificationSender delivers real email; LoggingNotificationSender is the
development fallback used when SMTP is not configured.
"""

import asyncio
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from shared.config import Settings
from shared.logging import redact_email

from .exceptions import NotificationDeliveryError
from .interfaces import INotificationSender
from .templates import (
    EmailMessage,
    password_reset_url,
    render_password_reset,
    render_verification,
    verification_url,
)

logger = logging.getLogger(__name__)


def _describe_hours(hours: int) -> str:
    return "1 hour" if hours == 1 else f"{hours} hours"


def _describe_minutes(minutes: int) -> str:
    if minutes % 60 == 0:
        return _describe_hours(minutes // 60)
    return f"{minutes} minutes"


class SMTPNotificationSender(INotificationSender):
    """
    Sends notifications over SMTP.

    Port 465 uses implicit TLS; any other port uses STARTTLS. The blocking
    smtplib calls run in a worker thread so they never stall the event loop.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_email: str,
        app_url: str,
        frontend_url: str,
        app_name: str = "Latchkey",
        verification_valid_for: str = "24 hours",
        reset_valid_for: str = "1 hour",
        timeout: float = 30.0,
    ):
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_email = from_email
        self._app_url = app_url
        self._frontend_url = frontend_url
        self._app_name = app_name
        self._verification_valid_for = verification_valid_for
        self._reset_valid_for = reset_valid_for
        self._timeout = timeout

    async def send_verification(self, email: str, first_name: str, token: str) -> None:
        message = render_verification(
            first_name,
            verification_url(self._app_url, token),
            self._app_name,
            self._verification_valid_for,
        )
        await self._deliver(email, message)

    async def send_password_reset(self, email: str, first_name: str, token: str) -> None:
        message = render_password_reset(
            first_name,
            password_reset_url(self._frontend_url, token),
            self._app_name,
            self._reset_valid_for,
        )
        await self._deliver(email, message)

    async def _deliver(self, to_email: str, message: EmailMessage) -> None:
        try:
            await asyncio.to_thread(self._send_blocking, to_email, message)
        except (smtplib.SMTPException, ssl.SSLError, OSError) as e:
            logger.error(
                "Email delivery to %s failed: %s: %s",
                redact_email(to_email),
                type(e).__name__,
                e,
            )
            raise NotificationDeliveryError(f"Failed to send email: {type(e).__name__}") from e

        logger.info("Sent '%s' to %s", message.subject, redact_email(to_email))

    def _send_blocking(self, to_email: str, message: EmailMessage) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = self._from_email
        msg["To"] = to_email
        msg.attach(MIMEText(message.text_body, "plain"))
        msg.attach(MIMEText(message.html_body, "html"))

        context = ssl.create_default_context()
        if self._port == 465:
            server = smtplib.SMTP_SSL(self._host, self._port, context=context, timeout=self._timeout)
        else:
            server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)

        with server:
            if self._port != 465:
                server.starttls(context=context)
            if self._username and self._password:
                server.login(self._username, self._password)
            server.sendmail(self._from_email, [to_email], msg.as_string())


class LoggingNotificationSender(INotificationSender):
    """
    Development sender: logs that a message would have been sent.

    The token itself is only logged at DEBUG level.
    """

    def __init__(self, app_url: str = "", frontend_url: str = ""):
        self._app_url = app_url
        self._frontend_url = frontend_url

    async def send_verification(self, email: str, first_name: str, token: str) -> None:
        logger.info("Email not configured; verification for %s not sent", redact_email(email))
        logger.debug("Verification link: %s", verification_url(self._app_url, token))

    async def send_password_reset(self, email: str, first_name: str, token: str) -> None:
        logger.info("Email not configured; password reset for %s not sent", redact_email(email))
        logger.debug("Password reset link: %s", password_reset_url(self._frontend_url, token))


def build_notification_sender(settings: Optional[Settings] = None) -> INotificationSender:
    """Pick the SMTP sender when email is configured, otherwise the logging one."""
    if settings is None:
        from shared.config import get_settings

        settings = get_settings()

    if not settings.email_configured:
        logger.warning("EMAIL_USER/EMAIL_FROM not set; notifications will only be logged")
        return LoggingNotificationSender(settings.app_url, settings.frontend_url)

    return SMTPNotificationSender(
        host=settings.email_host,
        port=settings.email_port,
        username=settings.email_user,
        password=settings.email_pass,
        from_email=settings.email_from,
        app_url=settings.app_url,
        frontend_url=settings.frontend_url,
        app_name=settings.app_name.removesuffix(" API"),
        verification_valid_for=_describe_hours(settings.email_verification_ttl_hours),
        reset_valid_for=_describe_minutes(settings.password_reset_ttl_minutes),
    )

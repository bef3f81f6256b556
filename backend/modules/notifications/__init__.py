"""
Notifications module.

Delivers email verification and password reset messages.

Public API:
- INotificationSender: Interface consumed by the auth module
- SMTPNotificationSender, LoggingNotificationSender, build_notification_sender
- NotificationDeliveryError
"""

from .interfaces import INotificationSender
from .exceptions import NotificationDeliveryError
from .service import (
    SMTPNotificationSender,
    LoggingNotificationSender,
    build_notification_sender,
)

__all__ = [
    "INotificationSender",
    "NotificationDeliveryError",
    "SMTPNotificationSender",
    "LoggingNotificationSender",
    "build_notification_sender",
]

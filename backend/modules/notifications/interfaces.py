"""
Notification sender interface.

The auth module depends on INotificationSender to deliver one-time tokens.
Implementations raise NotificationDeliveryError when delivery fails.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class INotificationSender(Protocol):
    """Outbound delivery of verification and password reset messages."""

    async def send_verification(self, email: str, first_name: str, token: str) -> None:
        """
        Deliver an email verification link.

        Raises:
            NotificationDeliveryError: If the message could not be delivered
        """
        ...

    async def send_password_reset(self, email: str, first_name: str, token: str) -> None:
        """
        Deliver a password reset link.

        Raises:
            NotificationDeliveryError: If the message could not be delivered
        """
        ...

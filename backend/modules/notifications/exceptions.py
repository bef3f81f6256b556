"""
Notification module exceptions.
"""

from shared.exceptions import ExternalServiceError


class NotificationDeliveryError(ExternalServiceError):
    """Raised when an outbound message could not be delivered."""

    def __init__(self, message: str = "Failed to send notification", service: str = "email"):
        super().__init__(message, service=service, code="NOTIFICATION_FAILED")

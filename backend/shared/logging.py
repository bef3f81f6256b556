"""
Logging setup for the Latchkey backend.

Modules log through ``logging.getLogger(__name__)``; the API lifespan calls
configure_logging() once at startup.
"""

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install a stderr handler on the root logger and set its level.

    Handlers that are already installed (uvicorn, pytest) are left in place;
    the stderr handler is only added when the root logger has none.
    """
    logging.basicConfig(
        stream=sys.stderr,
        format=_FORMAT,
        datefmt="%H:%M:%S",
    )
    logging.getLogger().setLevel(level.upper())


def redact_email(email: str) -> str:
    """Redact an email address for log lines."""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"

"""
Latchkey API package.

Provides the FastAPI application for account and session management.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]

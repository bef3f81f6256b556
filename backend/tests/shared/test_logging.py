"""Tests for shared/logging.py."""

import logging

import pytest

from shared.logging import configure_logging, redact_email


class TestRedactEmail:
    def test_keeps_prefix_and_domain(self):
        assert redact_email("bob@example.com") == "bo***@example.com"

    def test_short_local_part(self):
        assert redact_email("b@example.com") == "b***@example.com"

    def test_not_an_email(self):
        assert redact_email("nonsense") == "redacted"


class TestConfigureLogging:
    @pytest.fixture
    def root(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        yield root
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    def test_keeps_existing_handlers(self, root):
        existing = logging.NullHandler()
        root.addHandler(existing)

        configure_logging("warning")

        assert existing in root.handlers
        assert root.level == logging.WARNING

    def test_installs_single_handler_when_none(self, root):
        root.handlers[:] = []

        configure_logging("debug")
        configure_logging("info")

        assert len(root.handlers) == 1
        assert root.level == logging.INFO

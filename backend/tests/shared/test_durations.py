"""Tests for shared/durations.py."""

import pytest

from shared.durations import parse_duration


class TestParseDuration:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("15m", 900),
            ("7d", 604800),
            ("1h", 3600),
            ("45s", 45),
            ("120", 120),
            (" 2H ", 7200),
            (300, 300),
        ],
    )
    def test_valid_values(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "m", "15x", "-5m", "1.5h", "15 minutes", None])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)

    @pytest.mark.parametrize("value", ["0m", 0, -10])
    def test_rejects_non_positive(self, value):
        with pytest.raises(ValueError, match="positive"):
            parse_duration(value)

    def test_rejects_bool(self):
        with pytest.raises(ValueError):
            parse_duration(True)

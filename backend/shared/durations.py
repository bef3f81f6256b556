"""
Lifetime strings such as "15m" or "7d".

Token lifetimes are configured as short strings; both the signer and the
"expiresIn" value reported to clients read them through parse_duration().
"""

import re

_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400}
_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)


def parse_duration(value: str | int) -> int:
    """
    Convert a lifetime string to seconds.

    Args:
        value: "<n>s", "<n>m", "<n>h", "<n>d", or a bare number of seconds

    Returns:
        Number of seconds (always > 0)

    Raises:
        ValueError: If the value cannot be parsed or is zero
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, int):
        seconds = value
    else:
        match = _PATTERN.match(value or "")
        if match is None:
            raise ValueError(f"Invalid duration: {value!r}")
        amount, unit = match.groups()
        seconds = int(amount) * _UNITS[(unit or "s").lower()]

    if seconds <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return seconds

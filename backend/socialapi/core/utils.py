"""
Utility functions for the application.
"""
from typing import Any, Optional
import random
import re
import string
import time

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ACCOUNTNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.]+$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_ID_ALPHABET = string.digits + string.ascii_lowercase


def is_valid_email(value: Any) -> bool:
    """Check for a ``local@domain.tld`` shaped address."""
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_accountname(value: Any) -> bool:
    """Letters, digits, underscore and period only."""
    return isinstance(value, str) and ACCOUNTNAME_PATTERN.fullmatch(value) is not None


def parse_int(value: Optional[str], default: int) -> int:
    """
    Parse the leading integer of a query string value.

    Missing, non-numeric and zero values fall back to ``default``
    ("5abc" parses as 5, "abc" and "0" give the default).
    """
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if not match:
        return default
    return int(match.group(1)) or default


def generate_id() -> str:
    """Millisecond timestamp followed by 9 random base-36 characters."""
    millis = str(int(time.time() * 1000))
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(9))
    return millis + suffix

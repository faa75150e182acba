"""Shared utilities used across the booking engine."""

import re
from datetime import datetime

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$", re.ASCII)


def normalize_email(value: str) -> str:
    """Normalize an e-mail address by trimming whitespace and lower-casing it.

    Examples:
        >>> normalize_email("  Jane.Doe@Example.COM ")
        'jane.doe@example.com'
    """
    return value.strip().lower()


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value.strip()))


def is_iso_date(value: str) -> bool:
    """Check a ``YYYY-MM-DD`` string names a real calendar day."""
    if not _DATE_RE.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
        return True
    except ValueError:
        return False


def is_clock_time(value: str) -> bool:
    """Check a string looks like an ``HH:MM`` booking time."""
    return bool(_TIME_RE.match(value))

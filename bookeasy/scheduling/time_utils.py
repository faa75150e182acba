"""
Conversions between ``HH:MM`` clock strings and minute offsets, plus
display formatting for times, dates, and durations.

All arithmetic is offset-free local time of day; there is no day rollover.
"""

import logging
import re
from datetime import date, datetime
from typing import Optional, Union

from bookeasy.config import settings

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class InvalidTimeFormat(ValueError):
    """Raised when a clock string is not a valid 24-hour ``HH:MM`` value."""


def time_to_minutes(value: str) -> int:
    """Parse a 24-hour ``HH:MM`` string into minutes since midnight.

    Examples:
        >>> time_to_minutes("09:30")
        570
        >>> time_to_minutes("00:00")
        0
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Expected an HH:MM string, got {value!r}")
    match = _CLOCK_RE.fullmatch(value)
    if match is None:
        raise InvalidTimeFormat(f"Expected HH:MM, got {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidTimeFormat(f"Time out of range: {value!r}")
    return hour * 60 + minute


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as zero-padded ``HH:MM``.

    Values outside a single day are rejected rather than wrapped.
    """
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minutes must be in [0, {MINUTES_PER_DAY}), got {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_time_display(value: str) -> str:
    """Convert ``HH:MM`` to a 12-hour ``h:MM AM/PM`` string.

    Examples:
        >>> format_time_display("00:00")
        '12:00 AM'
        >>> format_time_display("13:05")
        '1:05 PM'
    """
    total = time_to_minutes(value)
    hour, minute = divmod(total, 60)
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {suffix}"


def format_time(value: str, clock: Optional[str] = None) -> str:
    """Format a clock string using the configured 12h/24h convention."""
    clock = clock or settings.display.clock
    if clock == "24h":
        return minutes_to_time(time_to_minutes(value))
    if clock == "12h":
        return format_time_display(value)
    raise ValueError(f"Unknown clock format: {clock!r}")


def format_date_display(value: Union[str, date], locale: Optional[str] = None) -> str:
    """Render a ``YYYY-MM-DD`` date as a long weekday/month/day string.

    ``en-US`` gives ``Monday, January 1, 2024``; ``en-GB`` gives
    ``Monday 1 January 2024``.
    """
    locale = locale or settings.display.locale
    day = value if isinstance(value, date) else datetime.strptime(value, "%Y-%m-%d").date()
    weekday = _DAY_NAMES[day.weekday()]
    month = _MONTH_NAMES[day.month - 1]
    if locale == "en-US":
        return f"{weekday}, {month} {day.day}, {day.year}"
    if locale == "en-GB":
        return f"{weekday} {day.day} {month} {day.year}"
    raise ValueError(f"Unsupported display locale: {locale!r}")


def format_duration(minutes: int) -> str:
    """Compact duration label: ``45m``, ``1h``, ``1h 30m``."""
    if minutes < 60:
        return f"{minutes}m"
    hours, remainder = divmod(minutes, 60)
    if remainder == 0:
        return f"{hours}h"
    return f"{hours}h {remainder}m"

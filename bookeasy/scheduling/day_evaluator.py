"""
Day-level availability: decides whether a calendar date can be booked.

Rules are checked in a fixed priority so the reported reason is stable:
past date, then weekday, then booking window.
"""

import calendar
import logging
from datetime import date, datetime

from bookeasy.schemas.booking_schema import (
    DayAvailability,
    EventType,
    SiteSettings,
    Weekday,
)
from bookeasy.scheduling.policy import BookingWindowPolicy, today

logger = logging.getLogger(__name__)

REASON_PAST_DATE = "Past date"
REASON_NOT_AVAILABLE_DAY = "Not an available day"
REASON_OUTSIDE_WINDOW = "Outside booking window"


def weekday_of(day: date) -> Weekday:
    """Canonical English weekday name for ``day``, independent of locale."""
    return Weekday.of(day)


def effective_available_days(
    event_type: EventType, site_settings: SiteSettings
) -> list[Weekday]:
    """Event type days when set, otherwise the site defaults. Never merged."""
    if event_type.available_days is not None:
        return list(event_type.available_days)
    return list(site_settings.default_available_days)


def evaluate_day(
    day: date,
    event_type: EventType,
    site_settings: SiteSettings,
    now: datetime,
) -> DayAvailability:
    """Decide whether ``day`` is bookable for ``event_type``."""
    if day < today(now):
        return DayAvailability(date=day, available=False, reason=REASON_PAST_DATE)

    if weekday_of(day) not in effective_available_days(event_type, site_settings):
        return DayAvailability(date=day, available=False, reason=REASON_NOT_AVAILABLE_DAY)

    policy = BookingWindowPolicy.from_settings(site_settings)
    if not policy.within_booking_window(day, now):
        return DayAvailability(date=day, available=False, reason=REASON_OUTSIDE_WINDOW)

    return DayAvailability(date=day, available=True)


def evaluate_month_availability(
    year: int,
    month: int,
    event_type: EventType,
    site_settings: SiteSettings,
    now: datetime,
) -> list[DayAvailability]:
    """Evaluate every day of ``month`` in calendar order."""
    days_in_month = calendar.monthrange(year, month)[1]
    return [
        evaluate_day(date(year, month, d), event_type, site_settings, now)
        for d in range(1, days_in_month + 1)
    ]

"""
Booking window policy: how far ahead and how soon a slot may be booked.

Both checks take ``now`` explicitly so availability is reproducible in
tests and never depends on the process clock.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from bookeasy.schemas.booking_schema import SiteSettings
from bookeasy.scheduling.time_utils import time_to_minutes

logger = logging.getLogger(__name__)


def today(now: datetime) -> date:
    """The calendar date of ``now`` with the time of day dropped."""
    return now.date()


def slot_instant(day: date, clock: str, now: datetime) -> datetime:
    """Combine a date and ``HH:MM`` into an instant comparable with ``now``."""
    hour, minute = divmod(time_to_minutes(clock), 60)
    return datetime.combine(day, time(hour, minute), tzinfo=now.tzinfo)


@dataclass(frozen=True)
class BookingWindowPolicy:
    """Minimum lead time and maximum advance range for new bookings."""

    minimum_notice_hours: float
    booking_window_days: int

    @classmethod
    def from_settings(cls, site_settings: SiteSettings) -> "BookingWindowPolicy":
        return cls(
            minimum_notice_hours=site_settings.minimum_notice_hours,
            booking_window_days=site_settings.booking_window_days,
        )

    @property
    def minimum_notice(self) -> timedelta:
        return timedelta(hours=self.minimum_notice_hours)

    def last_bookable_date(self, now: datetime) -> date:
        return today(now) + timedelta(days=self.booking_window_days)

    def within_booking_window(self, day: date, now: datetime) -> bool:
        """Date-only comparison against ``today + booking_window_days``."""
        return day <= self.last_bookable_date(now)

    def within_minimum_notice(self, day: date, clock: str, now: datetime) -> bool:
        """True when the slot starts at least ``minimum_notice_hours`` after ``now``."""
        return slot_instant(day, clock, now) - now >= self.minimum_notice


def within_booking_window(day: date, site_settings: SiteSettings, now: datetime) -> bool:
    return BookingWindowPolicy.from_settings(site_settings).within_booking_window(day, now)


def within_minimum_notice(
    day: date, clock: str, site_settings: SiteSettings, now: datetime
) -> bool:
    return BookingWindowPolicy.from_settings(site_settings).within_minimum_notice(
        day, clock, now
    )


def last_bookable_date(site_settings: SiteSettings, now: datetime) -> date:
    return BookingWindowPolicy.from_settings(site_settings).last_bookable_date(now)

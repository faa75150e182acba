"""
Time slot generation for a single bookable date.

Candidates start at the daily opening time and step by a fixed interval
that does not depend on the event duration. A candidate is dropped when it
would run past closing time, and marked unavailable when it violates the
minimum notice or overlaps an existing booking widened by the buffer.

Usage:
    slots = generate_slots(day, event_type, bookings, site_settings, now)
    times = [s.time for s in slots if s.available]
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from bookeasy.schemas.booking_schema import Booking, EventType, SiteSettings, TimeSlot
from bookeasy.scheduling.day_evaluator import evaluate_day
from bookeasy.scheduling.policy import BookingWindowPolicy, today
from bookeasy.scheduling.time_utils import (
    InvalidTimeFormat,
    minutes_to_time,
    time_to_minutes,
)

logger = logging.getLogger(__name__)

SLOT_INTERVAL_MINUTES = 30
DEFAULT_DURATION_MINUTES = 30

REASON_TOO_SOON = "Too soon to book"
REASON_CONFLICT = "Time slot unavailable"


class IllegalSlotSelection(Exception):
    """Raised when a requested date/time is not an available computed slot."""

    def __init__(self, day: date, clock: str, reason: str) -> None:
        self.day = day
        self.clock = clock
        self.reason = reason
        super().__init__(f"{day.isoformat()} {clock} cannot be booked: {reason}")


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open interval overlap: touching endpoints do not overlap."""
    return a_start < b_end and b_start < a_end


def resolve_schedule(
    event_type: EventType, site_settings: SiteSettings
) -> tuple[int, int, int, int]:
    """Return ``(start, end, duration, buffer)`` in minutes for ``event_type``."""
    start_time = event_type.start_time or site_settings.default_start_time
    end_time = event_type.end_time or site_settings.default_end_time
    if event_type.start_time is None or event_type.end_time is None:
        logger.debug(
            "Event type '%s' has no own hours, using %s-%s",
            event_type.slug, start_time, end_time,
        )
    duration = event_type.duration or DEFAULT_DURATION_MINUTES
    buffer = site_settings.buffer_time or 0
    return time_to_minutes(start_time), time_to_minutes(end_time), duration, buffer


def _booking_duration(booking: Booking, durations: dict[str, int]) -> int:
    if booking.duration:
        return booking.duration
    if booking.event_type_id and booking.event_type_id in durations:
        return durations[booking.event_type_id]
    return DEFAULT_DURATION_MINUTES


def _blocking_intervals(
    day: date,
    bookings: Iterable[Booking],
    buffer: int,
    durations: dict[str, int],
) -> list[tuple[int, int]]:
    intervals = []
    for booking in bookings:
        if booking.booking_date != day or not booking.blocks_slots:
            continue
        start = time_to_minutes(booking.booking_time)
        end = start + _booking_duration(booking, durations)
        intervals.append((start - buffer, end + buffer))
    return intervals


def generate_slots(
    day: date,
    event_type: EventType,
    bookings: Iterable[Booking],
    site_settings: SiteSettings,
    now: datetime,
    durations: Optional[dict[str, int]] = None,
) -> list[TimeSlot]:
    """
    Enumerate the slots of ``day`` in ascending order.

    Returns an empty list when ``day`` itself is not bookable. ``durations``
    maps event type ids to minutes for bookings that carry no duration of
    their own; anything still unknown counts as 30 minutes.
    """
    if not evaluate_day(day, event_type, site_settings, now).available:
        return []

    start, end, duration, buffer = resolve_schedule(event_type, site_settings)
    policy = BookingWindowPolicy.from_settings(site_settings)
    blocked = _blocking_intervals(day, bookings, buffer, durations or {})

    slots: list[TimeSlot] = []
    for candidate in range(start, end, SLOT_INTERVAL_MINUTES):
        if candidate + duration > end:
            continue
        clock = minutes_to_time(candidate)

        if not policy.within_minimum_notice(day, clock, now):
            slots.append(TimeSlot(time=clock, available=False, reason=REASON_TOO_SOON))
            continue

        conflict = any(
            intervals_overlap(candidate, candidate + duration, b_start, b_end)
            for b_start, b_end in blocked
        )
        if conflict:
            slots.append(TimeSlot(time=clock, available=False, reason=REASON_CONFLICT))
        else:
            slots.append(TimeSlot(time=clock, available=True))
    return slots


def available_times(
    day: date,
    event_type: EventType,
    bookings: Iterable[Booking],
    site_settings: SiteSettings,
    now: datetime,
    durations: Optional[dict[str, int]] = None,
) -> list[str]:
    """Just the ``HH:MM`` start times that can be booked."""
    return [
        slot.time
        for slot in generate_slots(day, event_type, bookings, site_settings, now, durations)
        if slot.available
    ]


def ensure_slot_bookable(
    day: date,
    clock: str,
    event_type: EventType,
    bookings: Iterable[Booking],
    site_settings: SiteSettings,
    now: datetime,
    durations: Optional[dict[str, int]] = None,
) -> TimeSlot:
    """Return the matching available slot or raise ``IllegalSlotSelection``."""
    day_result = evaluate_day(day, event_type, site_settings, now)
    if not day_result.available:
        raise IllegalSlotSelection(day, clock, day_result.reason or "Date unavailable")

    try:
        requested = time_to_minutes(clock)
    except InvalidTimeFormat:
        raise IllegalSlotSelection(day, clock, "Invalid time") from None

    for slot in generate_slots(day, event_type, bookings, site_settings, now, durations):
        if time_to_minutes(slot.time) != requested:
            continue
        if not slot.available:
            raise IllegalSlotSelection(day, clock, slot.reason or REASON_CONFLICT)
        return slot
    raise IllegalSlotSelection(day, clock, "Not an offered time")


def next_available_date(
    event_type: EventType,
    site_settings: SiteSettings,
    now: datetime,
    bookings: Optional[list[Booking]] = None,
    durations: Optional[dict[str, int]] = None,
) -> Optional[date]:
    """First date from today, inside the booking window, with a free slot."""
    policy = BookingWindowPolicy.from_settings(site_settings)
    day = today(now)
    last = policy.last_bookable_date(now)
    while day <= last:
        slots = generate_slots(day, event_type, bookings or [], site_settings, now, durations)
        if any(slot.available for slot in slots):
            return day
        day += timedelta(days=1)
    logger.debug("No availability for '%s' through %s", event_type.slug, last)
    return None

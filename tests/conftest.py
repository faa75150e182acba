"""Shared test fixtures and helpers."""

from datetime import date, datetime
from typing import Any, Optional

import pytest

from bookeasy.config import AccessConfig, AppConfig
from bookeasy.schemas.booking_schema import Booking, EventType, SiteSettings
from bookeasy.services.booking_service import BookingService
from bookeasy.services.notifications import LoggingNotifier
from bookeasy.storage import InMemoryBookingStore

# 2024-01-07 is a Sunday, 2024-01-08 the following Monday.
SUNDAY = date(2024, 1, 7)
MONDAY = date(2024, 1, 8)
NOW = datetime(2024, 1, 7, 8, 0)

ACCESS_CODE = "let-me-in"


def make_event_type(**overrides: Any) -> EventType:
    """Scenario A event type: 30 minutes, Mondays 09:00-10:00."""
    fields = {
        "id": "evt-1",
        "slug": "intro-call",
        "name": "Intro Call",
        "duration": 30,
        "available_days": ["Monday"],
        "start_time": "09:00",
        "end_time": "10:00",
    }
    fields.update(overrides)
    return EventType(**fields)


def make_settings(**overrides: Any) -> SiteSettings:
    """Permissive settings: no buffer, no notice, one-year window."""
    fields = {
        "site_name": "Test Site",
        "buffer_time": 0,
        "minimum_notice_hours": 0,
        "booking_window_days": 365,
        "default_start_time": "09:00",
        "default_end_time": "17:00",
        "default_available_days": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
        "email_notifications": True,
    }
    fields.update(overrides)
    return SiteSettings(**fields)


def make_booking(
    day: date = MONDAY,
    time: str = "09:00",
    status: Any = "confirmed",
    duration: Optional[int] = None,
    booking_id: str = "BK-1",
    event_type_id: Optional[str] = "evt-1",
) -> Booking:
    return Booking(
        id=booking_id,
        event_type_id=event_type_id,
        attendee_name="Existing Attendee",
        attendee_email="existing@example.com",
        booking_date=day,
        booking_time=time,
        duration=duration,
        status=status,
    )


@pytest.fixture
def event_type():
    return make_event_type()


@pytest.fixture
def site_settings():
    return make_settings()


@pytest.fixture
def store(event_type, site_settings):
    return InMemoryBookingStore([event_type], site_settings)


@pytest.fixture
def notifier():
    return LoggingNotifier(from_email="bookings@test.local")


@pytest.fixture
def service(store, notifier):
    return BookingService(store, notifier)


@pytest.fixture
def access_code(monkeypatch):
    """Configure the management access code for the duration of a test."""
    monkeypatch.setattr(
        "bookeasy.services.access.settings",
        AppConfig(access=AccessConfig(access_code=ACCESS_CODE)),
    )
    return ACCESS_CODE

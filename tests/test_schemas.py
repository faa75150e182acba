"""Tests for data model validation and status normalisation."""

import pytest
from pydantic import ValidationError

from bookeasy.schemas.booking_schema import BookingStatus, EventType, SiteSettings, Weekday
from tests.conftest import make_booking, make_event_type


class TestBookingStatus:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("confirmed", BookingStatus.CONFIRMED),
            ("Confirmed", BookingStatus.CONFIRMED),
            (" CANCELLED ", BookingStatus.CANCELLED),
            ({"key": "completed", "value": "Completed"}, BookingStatus.COMPLETED),
            ({"value": "Cancelled"}, BookingStatus.CANCELLED),
            (None, BookingStatus.UNKNOWN),
            ("rescheduled", BookingStatus.UNKNOWN),
            (42, BookingStatus.UNKNOWN),
            (BookingStatus.CANCELLED, BookingStatus.CANCELLED),
        ],
    )
    def test_normalize(self, raw, expected):
        assert BookingStatus.normalize(raw) == expected

    def test_booking_normalises_on_construction(self):
        booking = make_booking(status={"key": "cancelled", "value": "Cancelled"})
        assert booking.status is BookingStatus.CANCELLED
        assert booking.blocks_slots is False


class TestEventType:
    def test_days_coerced_to_enum(self):
        event_type = make_event_type(available_days=["monday", " FRIDAY "])
        assert event_type.available_days == [Weekday.MONDAY, Weekday.FRIDAY]

    def test_unknown_day_rejected(self):
        with pytest.raises(ValidationError):
            make_event_type(available_days=["Funday"])

    def test_start_must_precede_end(self):
        with pytest.raises(ValidationError, match="before end_time"):
            make_event_type(start_time="10:00", end_time="10:00")

    def test_malformed_time_rejected(self):
        with pytest.raises(ValidationError):
            make_event_type(start_time="9am")

    def test_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_event_type(duration=0)

    def test_minimal(self):
        event_type = EventType(id="e", slug="e", name="E")
        assert event_type.duration is None
        assert event_type.available_days is None


class TestSiteSettings:
    def test_defaults(self):
        settings = SiteSettings.defaults()
        assert settings.default_start_time == "09:00"
        assert settings.default_end_time == "17:00"
        assert settings.buffer_time == 0
        assert settings.minimum_notice_hours == 24
        assert settings.booking_window_days == 30
        assert settings.default_available_days == [
            Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY,
        ]

    def test_negative_buffer_rejected(self):
        with pytest.raises(ValidationError):
            SiteSettings(buffer_time=-5)

    def test_start_must_precede_end(self):
        with pytest.raises(ValidationError, match="before default_end_time"):
            SiteSettings(default_start_time="17:00", default_end_time="09:00")

    def test_fractional_notice_allowed(self):
        assert SiteSettings(minimum_notice_hours=0.5).minimum_notice_hours == 0.5

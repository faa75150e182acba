"""Booking, event type, and availability data models."""

import datetime as dt
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from bookeasy.config import settings
from bookeasy.utils import is_clock_time


class Weekday(str, Enum):
    """Canonical day-of-week names, used as the comparison key for availability."""

    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @classmethod
    def of(cls, day: dt.date) -> "Weekday":
        # date.weekday() is Monday=0 .. Sunday=6
        return _WEEKDAYS_FROM_MONDAY[day.weekday()]


_WEEKDAYS_FROM_MONDAY = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
)


class BookingStatus(str, Enum):
    """Lifecycle status of a stored booking."""

    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"

    @classmethod
    def normalize(cls, raw: Any) -> "BookingStatus":
        """Coerce a stored status into the enum.

        The backend stores either a plain string (``"Confirmed"``) or a
        select-dropdown pair (``{"key": "confirmed", "value": "Confirmed"}``).
        Anything unrecognised becomes ``UNKNOWN``.
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, dict):
            raw = raw.get("key") or raw.get("value")
        if not isinstance(raw, str):
            return cls.UNKNOWN
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.UNKNOWN


def _clock_minutes(value: str) -> int:
    hour, minute = value.split(":")
    return int(hour) * 60 + int(minute)


def _coerce_days(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [d.strip().capitalize() if isinstance(d, str) else d for d in value]
    return value


class EventType(BaseModel):
    """A bookable meeting template."""

    id: str
    slug: str
    name: str
    description: Optional[str] = None
    duration: Optional[int] = Field(default=None, gt=0)
    available_days: Optional[list[Weekday]] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    host_name: Optional[str] = None

    @field_validator("available_days", mode="before")
    @classmethod
    def _normalize_days(cls, value: Any) -> Any:
        return _coerce_days(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_time(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_clock_time(value):
            raise ValueError(f"expected HH:MM, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_window(self) -> "EventType":
        if self.start_time and self.end_time:
            if _clock_minutes(self.start_time) >= _clock_minutes(self.end_time):
                raise ValueError(
                    f"start_time {self.start_time} must be before end_time {self.end_time}"
                )
        return self


class SiteSettings(BaseModel):
    """Site-wide scheduling policy.

    Every field falls back to the environment-level defaults in
    ``bookeasy.config`` when the stored settings omit it.
    """

    site_name: str = Field(default_factory=lambda: settings.site_name)
    buffer_time: int = Field(
        default_factory=lambda: settings.scheduling.buffer_time_minutes, ge=0
    )
    minimum_notice_hours: float = Field(
        default_factory=lambda: settings.scheduling.minimum_notice_hours, ge=0
    )
    booking_window_days: int = Field(
        default_factory=lambda: settings.scheduling.booking_window_days, ge=0
    )
    default_start_time: str = Field(
        default_factory=lambda: settings.scheduling.default_start_time
    )
    default_end_time: str = Field(
        default_factory=lambda: settings.scheduling.default_end_time
    )
    default_available_days: list[Weekday] = Field(
        default_factory=lambda: [Weekday(d) for d in settings.scheduling.default_available_days]
    )
    email_notifications: bool = Field(
        default_factory=lambda: settings.notifications.enabled
    )
    timezone: Optional[str] = None

    @field_validator("default_available_days", mode="before")
    @classmethod
    def _normalize_days(cls, value: Any) -> Any:
        return _coerce_days(value)

    @field_validator("default_start_time", "default_end_time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        if not is_clock_time(value):
            raise ValueError(f"expected HH:MM, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_hours(self) -> "SiteSettings":
        if _clock_minutes(self.default_start_time) >= _clock_minutes(self.default_end_time):
            raise ValueError(
                f"default_start_time {self.default_start_time} must be before "
                f"default_end_time {self.default_end_time}"
            )
        return self

    @classmethod
    def defaults(cls) -> "SiteSettings":
        """Settings used when none are stored."""
        return cls()


class Booking(BaseModel):
    """An existing appointment as seen by the availability engine."""

    id: str
    event_type_id: Optional[str] = None
    attendee_name: str = ""
    attendee_email: str = ""
    booking_date: dt.date
    booking_time: str
    duration: Optional[int] = Field(default=None, gt=0)
    status: BookingStatus = BookingStatus.UNKNOWN
    notes: str = ""

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> BookingStatus:
        return BookingStatus.normalize(value)

    @field_validator("booking_time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        if not is_clock_time(value):
            raise ValueError(f"expected HH:MM, got {value!r}")
        return value

    @property
    def blocks_slots(self) -> bool:
        """Cancelled bookings free their slot."""
        return self.status != BookingStatus.CANCELLED


class DayAvailability(BaseModel):
    """Whether a calendar date can be booked, and why not."""

    date: dt.date
    available: bool
    reason: Optional[str] = None


class TimeSlot(BaseModel):
    """A candidate start time within a day."""

    time: str
    available: bool
    reason: Optional[str] = None


class BookingRequest(BaseModel):
    """Raw booking request as submitted by an attendee."""

    event_type_id: str = ""
    attendee_name: str = ""
    attendee_email: str = ""
    booking_date: str = ""
    booking_time: str = ""
    notes: Optional[str] = None


class BookingResponse(BaseModel):
    """Booking creation or update result."""

    success: bool
    message: str
    booking: Optional[Booking] = None
    error_code: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class SettingsResponse(BaseModel):
    """Site settings update result."""

    success: bool
    message: str
    settings: Optional[SiteSettings] = None
    error_code: Optional[str] = None

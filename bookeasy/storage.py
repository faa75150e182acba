"""
Storage boundary for event types, bookings, and site settings.

The availability engine never talks to storage; callers load plain models
through a ``BookingStore`` and pass them in. Backend records arrive in the
headless-CMS shape ``{"id", "slug", "title", "metadata": {...}}`` and are
converted here, which is the only place the polymorphic booking status is
normalised.

``InMemoryBookingStore`` backs tests and the console demo. In production this
would be a client for the object-storage bucket.
"""

import logging
import uuid
from datetime import date, datetime
from typing import Any, Optional, Protocol

from pydantic import ValidationError

from bookeasy.schemas.booking_schema import (
    Booking,
    BookingStatus,
    EventType,
    SiteSettings,
)

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the backend cannot load or persist an object."""


class BookingStore(Protocol):
    """Operations the booking service needs from persistence."""

    def list_bookings(self, booking_date: Optional[date] = None) -> list[Booking]: ...

    def create_booking(self, fields: dict[str, Any]) -> Booking: ...

    def update_booking_status(self, booking_id: str, status: Any) -> Booking: ...

    def get_booking(self, booking_id: str) -> Optional[Booking]: ...

    def delete_booking(self, booking_id: str) -> None: ...

    def get_settings(self) -> Optional[SiteSettings]: ...

    def update_settings(self, site_settings: SiteSettings) -> SiteSettings: ...

    def get_event_type(self, slug: str) -> Optional[EventType]: ...

    def get_event_type_by_id(self, event_type_id: str) -> Optional[EventType]: ...

    def list_event_types(self) -> list[EventType]: ...


def _drop_empty(metadata: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in metadata.items() if v is not None and v != ""}


def event_type_from_record(record: dict[str, Any]) -> EventType:
    """Build an ``EventType`` from a backend record."""
    meta = record.get("metadata") or {}
    host = meta.get("host")
    host_name = None
    if isinstance(host, dict):
        host_name = (host.get("metadata") or {}).get("full_name") or host.get("title")
    return EventType(
        id=record["id"],
        slug=record.get("slug") or record["id"],
        name=meta.get("event_name") or record.get("title") or record["id"],
        description=meta.get("description") or None,
        duration=meta.get("duration") or None,
        available_days=meta.get("available_days") or None,
        start_time=meta.get("start_time") or None,
        end_time=meta.get("end_time") or None,
        host_name=host_name,
    )


def booking_from_record(record: dict[str, Any]) -> Booking:
    """Build a ``Booking`` from a backend record.

    The event type may be embedded (depth=1 fetch) or just an id; an
    embedded one also supplies the booking's duration.
    """
    meta = record.get("metadata") or {}
    event_type = meta.get("event_type")
    event_type_id = None
    duration = None
    if isinstance(event_type, dict):
        event_type_id = event_type.get("id")
        duration = (event_type.get("metadata") or {}).get("duration") or None
    elif isinstance(event_type, str):
        event_type_id = event_type

    # ISO timestamps ("2024-01-02T00:00:00.000Z") keep only their date part
    raw_date = str(meta.get("booking_date", ""))[:10]
    return Booking(
        id=record["id"],
        event_type_id=event_type_id,
        attendee_name=meta.get("attendee_name") or "",
        attendee_email=meta.get("attendee_email") or "",
        booking_date=raw_date,
        booking_time=meta.get("booking_time", ""),
        duration=duration,
        status=meta.get("status"),
        notes=meta.get("notes") or "",
    )


def settings_from_record(record: Optional[dict[str, Any]]) -> Optional[SiteSettings]:
    """Build ``SiteSettings``; omitted fields take the configured defaults."""
    if record is None:
        return None
    meta = _drop_empty(dict(record.get("metadata") or {}))
    return SiteSettings(**{k: v for k, v in meta.items() if k in SiteSettings.model_fields})


def load_bookings(records: list[dict[str, Any]]) -> list[Booking]:
    """Convert records, skipping ones too malformed to place on a calendar."""
    bookings = []
    for record in records:
        try:
            bookings.append(booking_from_record(record))
        except (ValidationError, KeyError) as exc:
            logger.warning("Skipping malformed booking %s: %s", record.get("id"), exc)
    return bookings


def list_upcoming_bookings(store: BookingStore, now: datetime) -> list[Booking]:
    """Bookings dated today or later, earliest first."""
    current = now.date()
    upcoming = [b for b in store.list_bookings() if b.booking_date >= current]
    return sorted(upcoming, key=lambda b: (b.booking_date, b.booking_time))


class InMemoryBookingStore:
    """Dict-backed ``BookingStore`` used by tests and the console demo."""

    def __init__(
        self,
        event_types: Optional[list[EventType]] = None,
        site_settings: Optional[SiteSettings] = None,
        bookings: Optional[list[Booking]] = None,
    ) -> None:
        self._event_types: dict[str, EventType] = {e.id: e for e in event_types or []}
        self._settings = site_settings
        self._bookings: dict[str, Booking] = {b.id: b for b in bookings or []}

    def list_bookings(self, booking_date: Optional[date] = None) -> list[Booking]:
        bookings = list(self._bookings.values())
        if booking_date is not None:
            bookings = [b for b in bookings if b.booking_date == booking_date]
        return sorted(bookings, key=lambda b: (b.booking_date, b.booking_time))

    def create_booking(self, fields: dict[str, Any]) -> Booking:
        booking_id = f"BK-{uuid.uuid4().hex[:6].upper()}"
        try:
            booking = Booking(id=booking_id, **fields)
        except ValidationError as exc:
            raise StorageError(f"Invalid booking fields: {exc}") from exc
        self._bookings[booking_id] = booking
        logger.info(
            "Booking stored: %s on %s at %s",
            booking_id, booking.booking_date, booking.booking_time,
        )
        return booking

    def update_booking_status(self, booking_id: str, status: Any) -> Booking:
        if booking_id not in self._bookings:
            raise StorageError(f"Booking {booking_id} not found")
        updated = self._bookings[booking_id].model_copy(
            update={"status": BookingStatus.normalize(status)}
        )
        self._bookings[booking_id] = updated
        logger.info("Booking %s status set to %s", booking_id, updated.status.value)
        return updated

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return self._bookings.get(booking_id)

    def delete_booking(self, booking_id: str) -> None:
        if self._bookings.pop(booking_id, None) is None:
            raise StorageError(f"Booking {booking_id} not found")
        logger.info("Booking %s deleted", booking_id)

    def get_settings(self) -> Optional[SiteSettings]:
        return self._settings

    def update_settings(self, site_settings: SiteSettings) -> SiteSettings:
        if self._settings is None:
            raise StorageError("Settings not found")
        self._settings = site_settings
        logger.info("Site settings updated for '%s'", site_settings.site_name)
        return site_settings

    def get_event_type(self, slug: str) -> Optional[EventType]:
        for event_type in self._event_types.values():
            if event_type.slug == slug:
                return event_type
        return None

    def get_event_type_by_id(self, event_type_id: str) -> Optional[EventType]:
        return self._event_types.get(event_type_id)

    def list_event_types(self) -> list[EventType]:
        return list(self._event_types.values())

    def reset(self) -> None:
        """Clear all bookings. Used by test fixtures for isolation."""
        self._bookings.clear()

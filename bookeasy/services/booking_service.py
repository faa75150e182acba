"""
Server-side booking flow.

The public booking page already hides unavailable slots, but a request can
still arrive for a slot that was taken in the meantime or was never offered.
``BookingService.create_booking`` recomputes the slots from current storage
and only persists when the requested date/time is one of them.

Usage:
    service = BookingService(store, LoggingNotifier())
    response = service.create_booking(request, now=datetime.now())
    if not response.success:
        print(response.error_code, response.message)
"""

import logging
from datetime import date, datetime
from typing import Any, Optional

from pydantic import ValidationError

from bookeasy.logging_context import request_scope
from bookeasy.schemas.booking_schema import (
    Booking,
    BookingRequest,
    BookingResponse,
    BookingStatus,
    DayAvailability,
    EventType,
    SettingsResponse,
    SiteSettings,
    TimeSlot,
)
from bookeasy.scheduling.day_evaluator import evaluate_month_availability
from bookeasy.scheduling.slot_generator import (
    IllegalSlotSelection,
    ensure_slot_bookable,
    generate_slots,
    next_available_date,
)
from bookeasy.services.access import require_access
from bookeasy.services.notifications import Notifier, notify_booking_confirmed
from bookeasy.storage import BookingStore, StorageError, list_upcoming_bookings
from bookeasy.utils import is_clock_time, is_iso_date, is_valid_email, normalize_email

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "event_type_id",
    "attendee_name",
    "attendee_email",
    "booking_date",
    "booking_time",
)


class UnknownEventType(LookupError):
    """Raised when a slug or id does not match a stored event type."""


class BookingService:
    """Availability queries and booking management on top of a ``BookingStore``."""

    def __init__(self, store: BookingStore, notifier: Optional[Notifier] = None) -> None:
        self.store = store
        self.notifier = notifier

    def _site_settings(self) -> SiteSettings:
        return self.store.get_settings() or SiteSettings.defaults()

    def _event_type(self, slug: str) -> EventType:
        event_type = self.store.get_event_type(slug)
        if event_type is None:
            raise UnknownEventType(slug)
        return event_type

    def _durations(self) -> dict[str, int]:
        return {e.id: e.duration for e in self.store.list_event_types() if e.duration}

    def get_month_availability(
        self, slug: str, year: int, month: int, now: datetime
    ) -> list[DayAvailability]:
        return evaluate_month_availability(
            year, month, self._event_type(slug), self._site_settings(), now
        )

    def get_slots(self, slug: str, day: date, now: datetime) -> list[TimeSlot]:
        return generate_slots(
            day,
            self._event_type(slug),
            self.store.list_bookings(booking_date=day),
            self._site_settings(),
            now,
            self._durations(),
        )

    def next_available_date(self, slug: str, now: datetime) -> Optional[date]:
        """First date inside the booking window with an open slot."""
        return next_available_date(
            self._event_type(slug),
            self._site_settings(),
            now,
            self.store.list_bookings(),
            self._durations(),
        )

    def _validate_request(self, request: BookingRequest) -> Optional[BookingResponse]:
        missing = [
            name for name in REQUIRED_FIELDS
            if not getattr(request, name) or not getattr(request, name).strip()
        ]
        if missing:
            logger.warning("Booking request missing fields: %s", missing)
            return BookingResponse(
                success=False,
                message=f"Missing required fields: {', '.join(missing)}.",
                error_code="missing_fields",
            )
        if not is_valid_email(request.attendee_email):
            return BookingResponse(
                success=False, message="Invalid email format.", error_code="invalid_email"
            )
        if not is_iso_date(request.booking_date):
            return BookingResponse(
                success=False,
                message="Invalid date format. Expected YYYY-MM-DD.",
                error_code="invalid_date",
            )
        if not is_clock_time(request.booking_time):
            return BookingResponse(
                success=False,
                message="Invalid time format. Expected HH:MM.",
                error_code="invalid_time",
            )
        return None

    def create_booking(self, request: BookingRequest, now: datetime) -> BookingResponse:
        """Validate, re-check availability, persist, then notify."""
        with request_scope():
            logger.info("Booking request for event %s", request.event_type_id)
            invalid = self._validate_request(request)
            if invalid is not None:
                return invalid
            try:
                return self._create_booking(request, now)
            except StorageError as exc:
                logger.error("Storage failure: %s", exc)
                return BookingResponse(
                    success=False,
                    message="Failed to create booking. Please try again.",
                    error_code="storage_error",
                )

    def _create_booking(self, request: BookingRequest, now: datetime) -> BookingResponse:
        event_type = self.store.get_event_type_by_id(request.event_type_id)
        if event_type is None:
            return BookingResponse(
                success=False,
                message=f"Event type {request.event_type_id} not found.",
                error_code="unknown_event_type",
            )

        day = date.fromisoformat(request.booking_date)
        site_settings = self._site_settings()
        try:
            slot = ensure_slot_bookable(
                day,
                request.booking_time,
                event_type,
                self.store.list_bookings(booking_date=day),
                site_settings,
                now,
                self._durations(),
            )
        except IllegalSlotSelection as exc:
            logger.info("Rejected %s %s: %s", day, request.booking_time, exc.reason)
            return BookingResponse(
                success=False,
                message=f"This time slot is no longer available ({exc.reason}).",
                error_code="slot_unavailable",
            )

        booking = self.store.create_booking(
            {
                "event_type_id": event_type.id,
                "attendee_name": request.attendee_name.strip(),
                "attendee_email": normalize_email(request.attendee_email),
                "booking_date": day,
                "booking_time": slot.time,
                "duration": event_type.duration,
                "status": BookingStatus.CONFIRMED,
                "notes": (request.notes or "").strip(),
            }
        )
        notify_booking_confirmed(self.notifier, booking, event_type, site_settings)
        logger.info("Booking %s confirmed", booking.id)
        return BookingResponse(
            success=True,
            message=(
                f"Booking confirmed. Reference number: {booking.id}. "
                f"{event_type.name} on {booking.booking_date} at {booking.booking_time}."
            ),
            booking=booking,
            created_at=now,
        )

    def get_booking(self, booking_id: str, access_code: Optional[str]) -> BookingResponse:
        require_access(access_code)
        try:
            booking = self.store.get_booking(booking_id)
        except StorageError as exc:
            logger.error("Fetch failed for %s: %s", booking_id, exc)
            return BookingResponse(
                success=False, message="Failed to fetch booking.", error_code="storage_error"
            )
        if booking is None:
            return BookingResponse(
                success=False, message="Booking not found.", error_code="not_found"
            )
        return BookingResponse(success=True, message=f"Booking {booking_id}.", booking=booking)

    def update_booking_status(
        self, booking_id: str, status: Any, access_code: Optional[str]
    ) -> BookingResponse:
        """Change a booking's status. Requires the management access code."""
        require_access(access_code)
        normalized = BookingStatus.normalize(status)
        if normalized == BookingStatus.UNKNOWN:
            return BookingResponse(
                success=False, message=f"Unknown status: {status!r}.", error_code="invalid_status"
            )
        with request_scope():
            try:
                booking = self.store.update_booking_status(booking_id, normalized)
            except StorageError as exc:
                logger.error("Status update failed for %s: %s", booking_id, exc)
                return BookingResponse(success=False, message=str(exc), error_code="storage_error")
            logger.info("Booking %s marked %s", booking_id, normalized.value)
        return BookingResponse(
            success=True,
            message=f"Booking {booking_id} marked {normalized.value}.",
            booking=booking,
        )

    def delete_booking(self, booking_id: str, access_code: Optional[str]) -> BookingResponse:
        """Remove a booking outright. Its slot is free again immediately."""
        require_access(access_code)
        with request_scope():
            try:
                if self.store.get_booking(booking_id) is None:
                    return BookingResponse(
                        success=False, message="Booking not found.", error_code="not_found"
                    )
                self.store.delete_booking(booking_id)
            except StorageError as exc:
                logger.error("Delete failed for %s: %s", booking_id, exc)
                return BookingResponse(
                    success=False, message="Failed to delete booking.", error_code="storage_error"
                )
            logger.info("Booking %s deleted", booking_id)
        return BookingResponse(success=True, message="Booking deleted successfully.")

    def update_settings(
        self, changes: dict[str, Any], access_code: Optional[str]
    ) -> SettingsResponse:
        """Apply a partial settings update after validating the merged result.

        Fields left out of ``changes`` keep their stored values, so the
        engine never sees a half-written policy.
        """
        require_access(access_code)
        unknown = sorted(set(changes) - set(SiteSettings.model_fields))
        if unknown:
            return SettingsResponse(
                success=False,
                message=f"Unknown settings: {', '.join(unknown)}.",
                error_code="invalid_settings",
            )
        with request_scope():
            try:
                current = self.store.get_settings()
                if current is None:
                    return SettingsResponse(
                        success=False, message="Settings not found.", error_code="not_found"
                    )
                try:
                    updated = SiteSettings(**{**current.model_dump(), **changes})
                except ValidationError as exc:
                    logger.warning("Rejected settings update: %s", exc.error_count())
                    return SettingsResponse(
                        success=False,
                        message=f"Invalid settings: {exc.errors()[0]['msg']}",
                        error_code="invalid_settings",
                    )
                saved = self.store.update_settings(updated)
            except StorageError as exc:
                logger.error("Settings update failed: %s", exc)
                return SettingsResponse(
                    success=False,
                    message="Failed to update settings.",
                    error_code="storage_error",
                )
            logger.info("Settings updated: %s", sorted(changes))
        return SettingsResponse(
            success=True, message="Settings updated successfully.", settings=saved
        )

    def list_upcoming_bookings(self, now: datetime, access_code: Optional[str]) -> list[Booking]:
        require_access(access_code)
        return list_upcoming_bookings(self.store, now)

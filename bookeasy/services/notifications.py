"""
Booking confirmation notifications.

Delivery is an external concern; this module defines the seam and makes sure
a failed e-mail never turns a stored booking into a failed request.
"""

import logging
from typing import Optional, Protocol

from bookeasy.config import settings
from bookeasy.schemas.booking_schema import Booking, EventType, SiteSettings
from bookeasy.scheduling.time_utils import format_date_display, format_time_display

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Sends booking confirmation messages."""

    def send_attendee_confirmation(self, booking: Booking, summary: dict[str, str]) -> None: ...

    def send_host_notification(self, booking: Booking, summary: dict[str, str]) -> None: ...


class LoggingNotifier:
    """Notifier that records messages in the log instead of sending them."""

    def __init__(self, from_email: Optional[str] = None) -> None:
        self.from_email = from_email or settings.notifications.from_email
        self.sent: list[tuple[str, str]] = []

    def send_attendee_confirmation(self, booking: Booking, summary: dict[str, str]) -> None:
        self.sent.append(("attendee", booking.attendee_email))
        logger.info(
            "Confirmation from %s to %s: %s on %s at %s",
            self.from_email, booking.attendee_email,
            summary["event_name"], summary["date"], summary["time"],
        )

    def send_host_notification(self, booking: Booking, summary: dict[str, str]) -> None:
        self.sent.append(("host", summary.get("host_name", "")))
        logger.info(
            "Host notice: %s booked %s on %s at %s",
            booking.attendee_name, summary["event_name"], summary["date"], summary["time"],
        )


def booking_summary(booking: Booking, event_type: EventType) -> dict[str, str]:
    """Display fields shared by attendee and host messages."""
    summary = {
        "event_name": event_type.name,
        "date": format_date_display(booking.booking_date),
        "time": format_time_display(booking.booking_time),
        "duration": str(event_type.duration or booking.duration or ""),
        "attendee_name": booking.attendee_name,
    }
    if event_type.host_name:
        summary["host_name"] = event_type.host_name
    return summary


def notify_booking_confirmed(
    notifier: Optional[Notifier],
    booking: Booking,
    event_type: EventType,
    site_settings: SiteSettings,
) -> bool:
    """Send both confirmation messages. Never raises; returns whether all were sent."""
    if notifier is None or not site_settings.email_notifications:
        logger.debug("Notifications disabled, skipping booking %s", booking.id)
        return False

    summary = booking_summary(booking, event_type)
    delivered = True
    for send in (notifier.send_attendee_confirmation, notifier.send_host_notification):
        try:
            send(booking, summary)
        except Exception:
            delivered = False
            logger.exception("Notification failed for booking %s", booking.id)
    return delivered

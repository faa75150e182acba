from bookeasy.services.access import AccessDenied, require_access, verify_access_code
from bookeasy.services.booking_service import BookingService, UnknownEventType
from bookeasy.services.notifications import LoggingNotifier, Notifier, notify_booking_confirmed

__all__ = [
    "BookingService", "UnknownEventType",
    "LoggingNotifier", "Notifier", "notify_booking_confirmed",
    "AccessDenied", "require_access", "verify_access_code",
]

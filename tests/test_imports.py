"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_booking_schema(self):
        from bookeasy.schemas.booking_schema import (
            Booking, BookingRequest, BookingResponse, BookingStatus,
            DayAvailability, EventType, SiteSettings, TimeSlot, Weekday,
        )
        assert BookingStatus.CANCELLED == "cancelled"
        assert Weekday.SUNDAY == "Sunday"


class TestSchedulingImports:
    def test_package_reexports(self):
        from bookeasy.scheduling import (
            BookingWindowPolicy, IllegalSlotSelection, InvalidTimeFormat,
            ensure_slot_bookable, evaluate_day, evaluate_month_availability,
            format_date_display, format_time_display, generate_slots,
            minutes_to_time, next_available_date, time_to_minutes,
            within_booking_window, within_minimum_notice,
        )
        assert callable(generate_slots)
        assert issubclass(InvalidTimeFormat, ValueError)

    def test_policy_module_imports_first(self):
        import importlib

        module = importlib.import_module("bookeasy.scheduling.policy")
        assert hasattr(module, "BookingWindowPolicy")


class TestServiceImports:
    def test_package_reexports(self):
        from bookeasy.services import (
            AccessDenied, BookingService, LoggingNotifier, UnknownEventType,
            notify_booking_confirmed, require_access, verify_access_code,
        )
        assert callable(notify_booking_confirmed)

    def test_storage(self):
        from bookeasy.storage import BookingStore, InMemoryBookingStore, StorageError
        assert InMemoryBookingStore().list_bookings() == []


class TestConfigImports:
    def test_settings_singleton(self):
        from bookeasy.config import settings
        assert settings.scheduling.booking_window_days >= 0
        assert settings.display.locale


class TestEntryPoints:
    def test_console_demo(self):
        from console_demo import ConsoleSession, build_demo_store
        assert callable(build_demo_store)
        assert ConsoleSession.SCENARIOS

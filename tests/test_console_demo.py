"""Tests for the offline console demo commands."""

from datetime import date, datetime

from console_demo import ConsoleSession, build_demo_store
from tests.conftest import make_settings

SUNDAY_MORNING = datetime(2024, 1, 7, 8, 0)


class TestDemoStore:
    def test_seeded_catalogue(self):
        store = build_demo_store(SUNDAY_MORNING)
        assert {e.slug for e in store.list_event_types()} == {"intro-call", "consultation"}

    def test_seed_bookings_two_days_out(self):
        store = build_demo_store(SUNDAY_MORNING)
        assert {b.booking_date for b in store.list_bookings()} == {date(2024, 1, 9)}


class TestConsoleSession:
    def test_book_first_takes_earliest_open_slot(self):
        session = ConsoleSession(now=SUNDAY_MORNING)
        session.handle("book-first intro-call Jane Doe jane@example.com")
        booked = session.store.list_bookings(booking_date=date(2024, 1, 8))
        assert [(b.booking_time, b.attendee_name) for b in booked] == [("09:00", "Jane Doe")]

    def test_book_first_with_nothing_open(self, capsys):
        session = ConsoleSession(now=SUNDAY_MORNING)
        session.store.update_settings(make_settings(booking_window_days=0))
        before = session.store.list_bookings()
        session.handle("book-first intro-call Jane Doe jane@example.com")
        assert "Nothing to book." in capsys.readouterr().out
        assert session.store.list_bookings() == before

    def test_next_reports_empty_window(self, capsys):
        session = ConsoleSession(now=SUNDAY_MORNING)
        session.store.update_settings(make_settings(booking_window_days=0))
        session.handle("next intro-call")
        assert "Nothing available" in capsys.readouterr().out

    def test_unknown_event_type(self, capsys):
        ConsoleSession(now=SUNDAY_MORNING).handle("next nope")
        assert "No event type 'nope'" in capsys.readouterr().out

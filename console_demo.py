"""
Offline console demo: browses availability and books slots without any backend.

Uses the real availability engine and booking service over an in-memory store
seeded with two event types and a few existing bookings. No network calls.

Usage:
    python console_demo.py
    python console_demo.py --scenario booking
"""

import argparse
import sys
from datetime import date, datetime, timedelta
from typing import Optional

from bookeasy.config import settings
from bookeasy.schemas.booking_schema import (
    Booking,
    BookingRequest,
    BookingStatus,
    EventType,
    SiteSettings,
)
from bookeasy.scheduling.time_utils import (
    format_date_display,
    format_duration,
    format_time,
)
from bookeasy.services.booking_service import BookingService, UnknownEventType
from bookeasy.services.notifications import LoggingNotifier
from bookeasy.storage import InMemoryBookingStore

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


def build_demo_store(now: datetime) -> InMemoryBookingStore:
    """Seed a store with demo event types and bookings relative to ``now``."""
    intro = EventType(
        id="evt-intro",
        slug="intro-call",
        name="Intro Call",
        description="A quick 30 minute introduction.",
        duration=30,
        available_days=["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
        start_time="09:00",
        end_time="12:00",
        host_name="Alex Host",
    )
    consult = EventType(
        id="evt-consult",
        slug="consultation",
        name="Consultation",
        description="A one hour deep dive.",
        duration=60,
        available_days=["Monday", "Wednesday"],
        start_time="13:00",
        end_time="17:00",
        host_name="Alex Host",
    )
    site = SiteSettings(
        site_name=settings.site_name,
        buffer_time=15,
        minimum_notice_hours=24,
        booking_window_days=30,
    )
    seed_day = now.date() + timedelta(days=2)
    bookings = [
        Booking(
            id="BK-SEED01", event_type_id=intro.id, attendee_name="Sam Seed",
            attendee_email="sam@example.com", booking_date=seed_day,
            booking_time="10:00", status={"key": "confirmed", "value": "Confirmed"},
        ),
        Booking(
            id="BK-SEED02", event_type_id=intro.id, attendee_name="Cass Cancel",
            attendee_email="cass@example.com", booking_date=seed_day,
            booking_time="11:00", status=BookingStatus.CANCELLED,
        ),
    ]
    return InMemoryBookingStore([intro, consult], site, bookings)


class ConsoleSession:
    """Simple command loop over the booking service."""

    SCENARIOS: dict[str, list[str]] = {
        "booking": [
            "events",
            "month intro-call",
            "next intro-call",
            "book-first intro-call Jane Doe jane@example.com",
            "next intro-call",
        ],
    }

    def __init__(self, now: Optional[datetime] = None) -> None:
        self.now = now or datetime.now().replace(second=0, microsecond=0)
        self.store = build_demo_store(self.now)
        self.notifier = LoggingNotifier()
        self.service = BookingService(self.store, self.notifier)

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def run_scenario(self, scenario: str) -> None:
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return
        self._banner(f"Scenario: {scenario}")
        for step in steps:
            print(f"\n{BLUE}> {RESET}{step}")
            self.handle(step)

    def run(self) -> None:
        self._banner("Type 'help' for commands, 'quit' to exit")
        while True:
            try:
                line = input(f"\n{BLUE}> {RESET}").strip()
            except EOFError:
                return
            if not line:
                continue
            if line.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            self.handle(line)

    def _banner(self, subtitle: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {settings.site_name.upper()} - Console Demo{RESET}")
        print(f"{BOLD}  Now: {self.now:%Y-%m-%d %H:%M}  |  {subtitle}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def handle(self, line: str) -> None:
        command, *args = line.split()
        handlers = {
            "help": self._help,
            "events": self._events,
            "month": self._month,
            "slots": self._slots,
            "next": self._next,
            "book": self._book,
            "book-first": self._book_first,
        }
        handler = handlers.get(command)
        if handler is None:
            self.say(f"Unknown command '{command}'. Try 'help'.")
            return
        try:
            handler(args)
        except UnknownEventType as exc:
            print(f"{RED}No event type '{exc.args[0]}'.{RESET}")
        except (IndexError, ValueError) as exc:
            print(f"{RED}Bad arguments: {exc}{RESET}")

    def _help(self, args: list[str]) -> None:
        self.say(
            "events | month <slug> [YYYY-MM] | slots <slug> <YYYY-MM-DD> | next <slug>\n"
            "book <slug> <YYYY-MM-DD> <HH:MM> <first> <last> <email>\n"
            "book-first <slug> <first> <last> <email>"
        )

    def _events(self, args: list[str]) -> None:
        for event_type in self.store.list_event_types():
            days = ", ".join(d.value[:3] for d in event_type.available_days or [])
            self.say(
                f"{event_type.slug:<14} {event_type.name:<14} "
                f"{format_duration(event_type.duration or 30):<6} "
                f"{days} {event_type.start_time}-{event_type.end_time}"
            )

    def _month(self, args: list[str]) -> None:
        slug = args[0]
        if len(args) > 1:
            year, month = (int(p) for p in args[1].split("-"))
        else:
            year, month = self.now.year, self.now.month
        days = self.service.get_month_availability(slug, year, month, self.now)
        print(f"{BOLD}  Su Mo Tu We Th Fr Sa{RESET}")
        # Sunday-first grid; date.weekday() is Monday=0
        cells = ["  "] * ((days[0].date.weekday() + 1) % 7)
        for day in days:
            label = f"{day.date.day:>2}"
            cells.append(f"{GREEN}{label}{RESET}" if day.available else f"{DIM}{label}{RESET}")
        for i in range(0, len(cells), 7):
            print("  " + " ".join(cells[i:i + 7]))

    def _slots(self, args: list[str]) -> None:
        slug, day = args[0], date.fromisoformat(args[1])
        slots = self.service.get_slots(slug, day, self.now)
        if not slots:
            self.say(f"{format_date_display(day)} is not bookable.")
            return
        self.say(format_date_display(day))
        for slot in slots:
            label = format_time(slot.time)
            if slot.available:
                print(f"  {GREEN}{label:>8}{RESET}")
            else:
                print(f"  {DIM}{label:>8}  {slot.reason}{RESET}")

    def _next(self, args: list[str]) -> None:
        found = self.service.next_available_date(args[0], self.now)
        if found is None:
            self.say("Nothing available inside the booking window.")
            return
        self._slots([args[0], found.isoformat()])

    def _book(self, args: list[str]) -> None:
        slug, day, clock = args[0], args[1], args[2]
        name, email = " ".join(args[3:-1]), args[-1]
        self._submit(slug, day, clock, name, email)

    def _book_first(self, args: list[str]) -> None:
        slug = args[0]
        name, email = " ".join(args[1:-1]), args[-1]
        found = self.service.next_available_date(slug, self.now)
        first = None
        if found is not None:
            slots = self.service.get_slots(slug, found, self.now)
            first = next((s for s in slots if s.available), None)
        if first is None:
            self.say("Nothing to book.")
            return
        self._submit(slug, found.isoformat(), first.time, name, email)

    def _submit(self, slug: str, day: str, clock: str, name: str, email: str) -> None:
        event_type = self.store.get_event_type(slug)
        if event_type is None:
            raise UnknownEventType(slug)
        response = self.service.create_booking(
            BookingRequest(
                event_type_id=event_type.id,
                attendee_name=name,
                attendee_email=email,
                booking_date=day,
                booking_time=clock,
            ),
            now=self.now,
        )
        colour = GREEN if response.success else YELLOW
        print(f"{colour}{response.message}{RESET}")
        if self.notifier.sent:
            self.system_log(f"Notifications: {self.notifier.sent}")


def main() -> None:
    parser = argparse.ArgumentParser(description="BookEasy console demo")
    parser.add_argument(
        "--scenario",
        choices=list(ConsoleSession.SCENARIOS),
        help="Auto-play a pre-scripted scenario",
    )
    args = parser.parse_args()

    session = ConsoleSession()
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(f"\n{DIM}Interrupted.{RESET}")
        sys.exit(0)

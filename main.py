"""
Command-line entry point.

Prints month availability or the slots of one day for an event type from the
demo store, or starts the interactive console.

Usage:
    Console mode: python main.py console
    Month view:   python main.py month intro-call --month 2025-04
    Day slots:    python main.py slots intro-call 2025-04-07 --now 2025-04-01T09:00
"""

import argparse
import logging
from datetime import date, datetime

from bookeasy.config import settings

logger = logging.getLogger(__name__)


def _parse_now(value: str) -> datetime:
    return datetime.fromisoformat(value)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"{settings.site_name} availability")
    parser.add_argument(
        "--now",
        type=_parse_now,
        default=None,
        help="Evaluate as of this ISO timestamp (default: current time)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("console", help="Interactive console demo")

    month = commands.add_parser("month", help="Show day availability for a month")
    month.add_argument("slug")
    month.add_argument("--month", help="YYYY-MM (default: current month)")

    slots = commands.add_parser("slots", help="Show the time slots of one day")
    slots.add_argument("slug")
    slots.add_argument("day", type=date.fromisoformat)
    return parser


def _run_console_mode(now: datetime) -> None:
    """Start the offline console demo (no backend required)."""
    from console_demo import ConsoleSession

    session = ConsoleSession(now=now)
    session.run()


if __name__ == "__main__":
    args = _build_parser().parse_args()
    now = args.now or datetime.now().replace(second=0, microsecond=0)

    if args.command == "console":
        _run_console_mode(now)
    else:
        from console_demo import ConsoleSession

        session = ConsoleSession(now=now)
        if args.command == "month":
            session.handle(f"month {args.slug} {args.month or ''}".strip())
        else:
            session.handle(f"slots {args.slug} {args.day.isoformat()}")
        logger.debug("Evaluated %s for '%s' as of %s", args.command, args.slug, now)

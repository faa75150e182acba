"""Tests for request id correlation in log output."""

import io
import logging

import pytest

from bookeasy.logging_context import (
    LOG_FORMAT,
    NO_REQUEST,
    RequestIdFilter,
    current_request_id,
    install_request_id,
    request_scope,
)
from bookeasy.schemas.booking_schema import BookingRequest
from bookeasy.services.booking_service import BookingService
from tests.conftest import MONDAY, NOW


@pytest.fixture
def log_stream():
    """Root-level handler formatted like production output."""
    stream = io.StringIO()
    handler = install_request_id(logging.StreamHandler(stream))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    previous = root.level
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    yield stream
    root.removeHandler(handler)
    root.setLevel(previous)


class TestRequestScope:
    def test_outside_scope(self):
        assert current_request_id() == NO_REQUEST

    def test_generated_id(self):
        with request_scope() as request_id:
            assert request_id.startswith("REQ-")
            assert current_request_id() == request_id
        assert current_request_id() == NO_REQUEST

    def test_explicit_id_and_nesting(self):
        with request_scope("REQ-outer"):
            with request_scope("REQ-inner"):
                assert current_request_id() == "REQ-inner"
            assert current_request_id() == "REQ-outer"

    def test_reset_after_error(self):
        with pytest.raises(RuntimeError):
            with request_scope("REQ-boom"):
                raise RuntimeError
        assert current_request_id() == NO_REQUEST


class TestFormattedOutput:
    def test_filter_installed_once(self):
        handler = logging.StreamHandler(io.StringIO())
        install_request_id(handler)
        install_request_id(handler)
        assert sum(isinstance(f, RequestIdFilter) for f in handler.filters) == 1

    def test_line_contains_request_id(self, log_stream):
        with request_scope("REQ-abc"):
            logging.getLogger("bookeasy.test.any_module").info("hello")
        assert "[REQ-abc] INFO: hello" in log_stream.getvalue()

    def test_line_outside_scope_uses_placeholder(self, log_stream):
        logging.getLogger("bookeasy.test.any_module").info("idle")
        assert f"[{NO_REQUEST}] INFO: idle" in log_stream.getvalue()

    def test_booking_lines_share_one_id(self, log_stream, store):
        request = BookingRequest(
            event_type_id="evt-1",
            attendee_name="Jane Doe",
            attendee_email="jane@example.com",
            booking_date=MONDAY.isoformat(),
            booking_time="09:00",
        )
        booking = BookingService(store).create_booking(request, now=NOW).booking
        lines = [
            line for line in log_stream.getvalue().splitlines()
            if "Booking request" in line or f"Booking {booking.id} confirmed" in line
            or "Booking stored" in line
        ]
        assert len(lines) == 3
        ids = {line.split("] [")[1].split("]")[0] for line in lines}
        assert len(ids) == 1
        assert ids.pop().startswith("REQ-")

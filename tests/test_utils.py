"""Tests for shared utility functions."""

from bookeasy.utils import is_clock_time, is_iso_date, is_valid_email, normalize_email


class TestNormalizeEmail:
    def test_lowercases(self):
        assert normalize_email("Jane@Example.COM") == "jane@example.com"

    def test_strips_whitespace(self):
        assert normalize_email("  jane@example.com  ") == "jane@example.com"


class TestIsValidEmail:
    def test_valid(self):
        assert is_valid_email("jane.doe@example.co.uk")

    def test_missing_domain(self):
        assert not is_valid_email("jane@")

    def test_missing_tld(self):
        assert not is_valid_email("jane@example")

    def test_spaces(self):
        assert not is_valid_email("jane doe@example.com")


class TestIsIsoDate:
    def test_valid(self):
        assert is_iso_date("2024-02-29")

    def test_impossible_day(self):
        assert not is_iso_date("2023-02-29")

    def test_wrong_separator(self):
        assert not is_iso_date("2024/02/01")

    def test_timestamp_rejected(self):
        assert not is_iso_date("2024-02-01T10:00")


class TestIsClockTime:
    def test_padded(self):
        assert is_clock_time("09:30")

    def test_unpadded_hour(self):
        assert is_clock_time("9:30")

    def test_out_of_range(self):
        assert not is_clock_time("24:00")
        assert not is_clock_time("12:75")

    def test_seconds_rejected(self):
        assert not is_clock_time("09:30:00")

    def test_non_ascii_digits_rejected(self):
        assert not is_clock_time("٠٩:30")

"""Tests for the management access check."""

import pytest

from bookeasy.services.access import AccessDenied, require_access, verify_access_code


class TestVerifyAccessCode:
    def test_matching_code(self):
        assert verify_access_code("secret", expected="secret")

    def test_wrong_code(self):
        assert not verify_access_code("guess", expected="secret")

    def test_missing_code(self):
        assert not verify_access_code(None, expected="secret")
        assert not verify_access_code("", expected="secret")

    def test_unconfigured_denies_everything(self):
        assert not verify_access_code("", expected="")
        assert not verify_access_code("anything", expected="")

    def test_uses_configured_code(self, access_code):
        assert verify_access_code(access_code)
        assert not verify_access_code(access_code + "x")


class TestRequireAccess:
    def test_raises_on_mismatch(self):
        with pytest.raises(AccessDenied):
            require_access("guess", expected="secret")

    def test_passes_on_match(self):
        require_access("secret", expected="secret")

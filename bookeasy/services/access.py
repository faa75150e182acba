"""Shared-secret check gating booking management operations."""

import hmac
import logging
from typing import Optional

from bookeasy.config import settings

logger = logging.getLogger(__name__)


class AccessDenied(Exception):
    """Raised when a management operation is attempted without the access code."""


def verify_access_code(provided: Optional[str], expected: Optional[str] = None) -> bool:
    """Compare ``provided`` with the configured access code in constant time.

    With no access code configured every attempt is denied.
    """
    expected = settings.access.access_code if expected is None else expected
    if not expected:
        logger.warning("Access check attempted but no access code is configured")
        return False
    if not provided:
        return False
    return hmac.compare_digest(provided.encode(), expected.encode())


def require_access(provided: Optional[str], expected: Optional[str] = None) -> None:
    if not verify_access_code(provided, expected):
        raise AccessDenied("Invalid access code")

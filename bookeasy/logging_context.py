"""Per-request correlation IDs for the booking service's log output.

Each service operation runs inside ``request_scope()``, which binds a fresh
``REQ-`` id to the current context. ``install_request_id`` puts a filter on a
handler so that every record it emits, from any ``bookeasy`` module, carries
``request_id`` for ``LOG_FORMAT`` to print. Records logged outside a scope
show ``-``.

Usage:
    configure_logging("INFO")
    with request_scope() as request_id:
        logger.info("Creating booking")
        # 2024-01-07 08:00:00 [bookeasy.x] [REQ-1a2b3c4d] INFO: Creating booking
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
NO_REQUEST = "-"

_current_request: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST)


def current_request_id() -> str:
    return _current_request.get()


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind ``request_id`` (or a generated one) until the block exits."""
    request_id = request_id or f"REQ-{uuid.uuid4().hex[:8]}"
    token = _current_request.set(request_id)
    try:
        yield request_id
    finally:
        _current_request.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamps the active request id onto records passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _current_request.get()  # type: ignore[attr-defined]
        return True


def install_request_id(handler: logging.Handler) -> logging.Handler:
    if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
        handler.addFilter(RequestIdFilter())
    return handler


def configure_logging(level: str) -> None:
    """Set up root logging with request ids in every line."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    for handler in logging.getLogger().handlers:
        install_request_id(handler)

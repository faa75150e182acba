"""
Centralized configuration with environment variable overrides.

Scheduling fallbacks, display options, and the management access code are
configurable here. Site-level values stored alongside bookings take
precedence; these only apply when the stored settings omit a value.
"""

import logging
import os
import re
from dataclasses import dataclass, field

from dotenv import load_dotenv

from bookeasy.logging_context import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)
SUPPORTED_LOCALES = ("en-US", "en-GB")
CLOCK_FORMATS = ("12h", "24h")

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


def _split_days(env_var: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(env_var, default)
    return tuple(day.strip().capitalize() for day in raw.split(",") if day.strip())


@dataclass(frozen=True)
class SchedulingConfig:
    """Fallback schedule used when neither the event type nor site settings set one."""

    default_start_time: str = os.getenv("DEFAULT_START_TIME", "09:00")
    default_end_time: str = os.getenv("DEFAULT_END_TIME", "17:00")
    default_available_days: tuple[str, ...] = _split_days(
        "DEFAULT_AVAILABLE_DAYS", "Monday,Tuesday,Wednesday,Thursday,Friday"
    )
    buffer_time_minutes: int = _safe_int("BUFFER_TIME_MINUTES", "0")
    minimum_notice_hours: float = _safe_float("MINIMUM_NOTICE_HOURS", "24")
    booking_window_days: int = _safe_int("BOOKING_WINDOW_DAYS", "30")


@dataclass(frozen=True)
class DisplayConfig:
    """Presentation options for dates and times."""

    locale: str = os.getenv("DISPLAY_LOCALE", "en-US")
    clock: str = os.getenv("CLOCK_FORMAT", "12h")


@dataclass(frozen=True)
class AccessConfig:
    """Shared secret gating booking management operations."""

    access_code: str = os.getenv("ACCESS_CODE", "")


@dataclass(frozen=True)
class NotificationConfig:
    """Booking confirmation e-mail settings."""

    enabled: bool = _safe_bool("EMAIL_NOTIFICATIONS", "true")
    from_email: str = os.getenv("FROM_EMAIL", "BookEasy <bookings@yourdomain.com>")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    access: AccessConfig = field(default_factory=AccessConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    site_name: str = os.getenv("SITE_NAME", "BookEasy")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    sched = config.scheduling
    for name, value in [
        ("DEFAULT_START_TIME", sched.default_start_time),
        ("DEFAULT_END_TIME", sched.default_end_time),
    ]:
        if not _TIME_RE.match(value):
            raise ValueError(f"{name} must be HH:MM (24-hour), got {value!r}")
    if sched.default_start_time >= sched.default_end_time:
        raise ValueError(
            "DEFAULT_START_TIME must be before DEFAULT_END_TIME, "
            f"got {sched.default_start_time} >= {sched.default_end_time}"
        )

    unknown_days = [d for d in sched.default_available_days if d not in WEEKDAY_NAMES]
    if unknown_days:
        raise ValueError(f"DEFAULT_AVAILABLE_DAYS has unknown days: {unknown_days}")

    if sched.buffer_time_minutes < 0:
        raise ValueError(
            f"BUFFER_TIME_MINUTES must be >= 0, got {sched.buffer_time_minutes}"
        )
    if sched.minimum_notice_hours < 0:
        raise ValueError(
            f"MINIMUM_NOTICE_HOURS must be >= 0, got {sched.minimum_notice_hours}"
        )
    if sched.booking_window_days < 0:
        raise ValueError(
            f"BOOKING_WINDOW_DAYS must be >= 0, got {sched.booking_window_days}"
        )

    if config.display.locale not in SUPPORTED_LOCALES:
        raise ValueError(
            f"DISPLAY_LOCALE must be one of {SUPPORTED_LOCALES}, got {config.display.locale!r}"
        )
    if config.display.clock not in CLOCK_FORMATS:
        raise ValueError(
            f"CLOCK_FORMAT must be one of {CLOCK_FORMATS}, got {config.display.clock!r}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    configure_logging(config.log_level)
    if not config.access.access_code:
        logger.warning("ACCESS_CODE is not set; booking management is disabled")
    logger.info("Configuration loaded for '%s'", config.site_name)
    return config


# Singleton instance
settings = load_config()

from bookeasy.scheduling.day_evaluator import evaluate_day, evaluate_month_availability
from bookeasy.scheduling.policy import (
    BookingWindowPolicy,
    within_booking_window,
    within_minimum_notice,
)
from bookeasy.scheduling.slot_generator import (
    IllegalSlotSelection,
    ensure_slot_bookable,
    generate_slots,
    next_available_date,
)
from bookeasy.scheduling.time_utils import (
    InvalidTimeFormat,
    format_date_display,
    format_time_display,
    minutes_to_time,
    time_to_minutes,
)

__all__ = [
    "evaluate_day",
    "evaluate_month_availability",
    "generate_slots",
    "ensure_slot_bookable",
    "next_available_date",
    "IllegalSlotSelection",
    "BookingWindowPolicy",
    "within_booking_window",
    "within_minimum_notice",
    "InvalidTimeFormat",
    "time_to_minutes",
    "minutes_to_time",
    "format_time_display",
    "format_date_display",
]

"""Pure availability engine: no I/O, no logging, no framework imports."""

from availability.engine.aggregation import (
    blocks_for_day,
    bookings_on,
    classify_day,
    classify_range,
    day_capacity,
    day_slots,
    rest_day_fee,
    rest_day_on,
    summarize_day,
    summarize_range,
)
from availability.engine.capacity import (
    active_bookings,
    booking_interval,
    evaluate_slot,
    reservations_at,
    resolve_duration_hours,
)
from availability.engine.dates import (
    date_key,
    group_by_day,
    iter_days,
    month_bounds,
    parse_date_key,
    to_local_date,
    weekday_index,
)
from availability.engine.slots import block_slots, generate_slots, overlaps, time_range

__all__ = [
    "active_bookings",
    "block_slots",
    "booking_interval",
    "blocks_for_day",
    "bookings_on",
    "classify_day",
    "classify_range",
    "date_key",
    "day_capacity",
    "day_slots",
    "evaluate_slot",
    "generate_slots",
    "group_by_day",
    "iter_days",
    "month_bounds",
    "overlaps",
    "parse_date_key",
    "reservations_at",
    "resolve_duration_hours",
    "rest_day_fee",
    "rest_day_on",
    "summarize_day",
    "summarize_range",
    "time_range",
    "to_local_date",
    "weekday_index",
]

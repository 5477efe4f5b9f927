"""Slot capacity evaluation.

Callers pass bookings already narrowed to the slot's calendar day; the
overlap check only looks at time of day.
"""

from collections.abc import Iterable

from availability.domain.models import (
    FALLBACK_DURATION_HOURS,
    Booking,
    Slot,
    SlotWindow,
    SystemConfiguration,
    TimeBlock,
)
from availability.domain.value_objects import hours_to_minutes
from availability.engine.slots import Interval, overlaps, window_interval


def active_bookings(bookings: Iterable[Booking]) -> list[Booking]:
    return [booking for booking in bookings if not booking.is_cancelled]


def resolve_duration_hours(
    booking: Booking,
    config: SystemConfiguration,
    block: TimeBlock | None = None,
) -> float:
    """Booking duration, then the system default, then the block's, then 2 hours."""
    candidates = (
        booking.event_duration_hours,
        config.default_event_duration_hours,
        block.duration_hours if block is not None else None,
    )
    for hours in candidates:
        if hours:
            return hours
    return FALLBACK_DURATION_HOURS


def booking_interval(
    booking: Booking,
    config: SystemConfiguration,
    block: TimeBlock | None = None,
) -> Interval:
    # The end may run past midnight; minutes are not wrapped.
    start = booking.event_time.minutes
    return start, start + hours_to_minutes(resolve_duration_hours(booking, config, block))


def reservations_at(
    window: SlotWindow,
    block: TimeBlock,
    bookings: Iterable[Booking],
    config: SystemConfiguration,
) -> tuple[Booking, ...]:
    slot = window_interval(window)
    return tuple(
        booking
        for booking in active_bookings(bookings)
        if overlaps(booking_interval(booking, config, block), slot)
    )


def evaluate_slot(
    window: SlotWindow,
    block: TimeBlock,
    bookings: Iterable[Booking],
    config: SystemConfiguration,
    single_event: bool = False,
) -> Slot:
    """Decide availability of one slot.

    With ``single_event`` (or the block's own ``one_reservation_per_day``)
    any booking on the day exhausts the slot. Otherwise the slot is open
    while fewer than ``max_events_per_block`` bookings overlap it. The
    remaining capacity is reported as computed, including negative values.
    """
    todays = active_bookings(bookings)
    overlapping = reservations_at(window, block, todays, config)

    if single_event or block.one_reservation_per_day:
        remaining = 0 if todays else 1
        return Slot(
            time=window.start,
            end_time=window.end,
            available=remaining > 0,
            remaining_capacity=remaining,
            total_capacity=1,
            reservations=overlapping,
        )

    capacity = block.max_events_per_block
    return Slot(
        time=window.start,
        end_time=window.end,
        available=len(overlapping) < capacity,
        remaining_capacity=capacity - len(overlapping),
        total_capacity=capacity,
        reservations=overlapping,
    )

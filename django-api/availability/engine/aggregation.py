"""Day-level aggregation: per-slot day view, day summaries and range classification."""

from collections import Counter
from collections.abc import Iterable
from datetime import date, tzinfo

from availability.domain.models import (
    AvailabilityLevel,
    BlockAvailability,
    Booking,
    DayAvailability,
    RestDay,
    SystemConfiguration,
    TimeBlock,
)
from availability.domain.value_objects import Money
from availability.engine.capacity import active_bookings, evaluate_slot
from availability.engine.dates import group_by_day, iter_days, to_local_date, weekday_index
from availability.engine.slots import block_slots

LIMITED_THRESHOLD = 0.5


def rest_day_on(day: date, config: SystemConfiguration) -> RestDay | None:
    return config.rest_day_for(weekday_index(day))


def rest_day_fee(day: date, config: SystemConfiguration) -> Money:
    rest_day = rest_day_on(day, config)
    return rest_day.fee if rest_day is not None else Money.zero()


def blocks_for_day(day: date, config: SystemConfiguration) -> tuple[TimeBlock, ...]:
    """Blocks that apply to the day, or the fallback block for a releasable rest day."""
    weekday = weekday_index(day)
    blocks = config.blocks_for(weekday)
    if blocks:
        return blocks
    rest_day = config.rest_day_for(weekday)
    if rest_day is not None and rest_day.can_be_released and config.fallback_block is not None:
        return (config.fallback_block,)
    return ()


def bookings_on(day: date, bookings: Iterable[Booking], tz: tzinfo) -> list[Booking]:
    return [
        booking
        for booking in active_bookings(bookings)
        if to_local_date(booking.event_date, tz) == day
    ]


def day_slots(
    day: date,
    config: SystemConfiguration,
    bookings: Iterable[Booking],
    tz: tzinfo,
) -> tuple[BlockAvailability, ...]:
    """Per-slot availability for every block on the day.

    A blocked rest day has no bookable blocks.
    """
    rest_day = rest_day_on(day, config)
    if rest_day is not None and rest_day.is_blocked:
        return ()

    todays = bookings_on(day, bookings, tz)
    return tuple(
        BlockAvailability(
            block=block,
            slots=tuple(
                evaluate_slot(window, block, todays, config, config.one_event_per_day)
                for window in block_slots(block)
            ),
        )
        for block in blocks_for_day(day, config)
    )


def summarize_day(
    day: date,
    config: SystemConfiguration,
    bookings: Iterable[Booking],
    tz: tzinfo,
) -> DayAvailability:
    rest_day = rest_day_on(day, config)
    blocks = blocks_for_day(day, config)
    todays = bookings_on(day, bookings, tz)

    total_slots = 0
    available_slots = 0
    if config.one_event_per_day:
        total_slots = sum(len(block_slots(block)) for block in blocks)
        available_slots = 0 if todays else total_slots
    else:
        for block in blocks:
            for window in block_slots(block):
                total_slots += 1
                if evaluate_slot(window, block, todays, config).available:
                    available_slots += 1

    blocked = rest_day is not None and rest_day.is_blocked
    if blocked:
        available_slots = 0

    return DayAvailability(
        date=day,
        available=not blocked and (available_slots > 0 or not blocks),
        total_slots=total_slots,
        available_slots=available_slots,
        is_rest_day=rest_day is not None,
        rest_day_fee=rest_day.fee if rest_day is not None else None,
        has_reservations=bool(todays),
    )


def summarize_range(
    start: date,
    end: date,
    config: SystemConfiguration,
    bookings: Iterable[Booking],
    tz: tzinfo,
) -> dict[str, DayAvailability]:
    by_day = group_by_day(active_bookings(bookings), tz)
    return {
        day.isoformat(): summarize_day(day, config, by_day.get(day, []), tz)
        for day in iter_days(start, end)
    }


def day_capacity(day: date, config: SystemConfiguration) -> int:
    blocks = blocks_for_day(day, config)
    if not blocks:
        return 0
    if config.one_event_per_day:
        return 1
    return sum(
        1 if block.one_reservation_per_day else block.max_events_per_block
        for block in blocks
    )


def classify_day(day: date, config: SystemConfiguration, booked: int) -> AvailabilityLevel:
    rest_day = rest_day_on(day, config)
    if rest_day is not None and rest_day.is_blocked:
        return AvailabilityLevel.UNAVAILABLE

    capacity = day_capacity(day, config)
    if capacity == 0:
        return AvailabilityLevel.AVAILABLE
    if booked >= capacity:
        return AvailabilityLevel.UNAVAILABLE
    if booked >= capacity * LIMITED_THRESHOLD:
        return AvailabilityLevel.LIMITED
    return AvailabilityLevel.AVAILABLE


def classify_range(
    start: date,
    end: date,
    config: SystemConfiguration,
    bookings: Iterable[Booking],
    tz: tzinfo,
) -> dict[str, AvailabilityLevel]:
    counts = Counter(
        to_local_date(booking.event_date, tz) for booking in active_bookings(bookings)
    )
    return {
        day.isoformat(): classify_day(day, config, counts[day])
        for day in iter_days(start, end)
    }

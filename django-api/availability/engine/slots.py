"""Slot generation and the interval overlap predicate."""

from availability.domain.models import SlotWindow, TimeBlock
from availability.domain.value_objects import WallClockTime, hours_to_minutes

HALF_HOUR_BREAK_MINUTES = 30

Interval = tuple[int, int]


def generate_slots(
    start: WallClockTime,
    end: WallClockTime,
    duration_hours: float,
    half_hour_break: bool,
) -> list[SlotWindow]:
    """Return every whole slot that fits inside [start, end).

    A slot that would run past ``end`` is dropped, never truncated, so a
    block shorter than one duration yields no slots.
    """
    duration = hours_to_minutes(duration_hours)
    if duration <= 0:
        return []
    step = duration + (HALF_HOUR_BREAK_MINUTES if half_hour_break else 0)

    windows = []
    current = start.minutes
    while current + duration <= end.minutes:
        windows.append(
            SlotWindow(start=WallClockTime(current), end=WallClockTime(current + duration))
        )
        current += step
    return windows


def block_slots(block: TimeBlock) -> list[SlotWindow]:
    return generate_slots(
        block.start_time, block.end_time, block.duration_hours, block.half_hour_break
    )


def time_range(start: str, end: str) -> Interval:
    """Parse two HH:MM strings into a minutes interval."""
    return (
        WallClockTime.from_string(start).minutes,
        WallClockTime.from_string(end).minutes,
    )


def window_interval(window: SlotWindow) -> Interval:
    return window.start.minutes, window.end.minutes


def overlaps(first: Interval, second: Interval) -> bool:
    """Half-open overlap: touching intervals do not overlap."""
    return first[0] < second[1] and second[0] < first[1]

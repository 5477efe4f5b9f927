"""Domain models for the availability engine.

These are pure domain objects with no API input rules.
Django ORM models are in availability/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from availability.domain.errors import InvalidScheduleError
from availability.domain.value_objects import Money, WallClockTime, hours_to_minutes

# Weekday indices run 0 = Sunday ... 6 = Saturday.
WEEKDAYS = range(7)

FALLBACK_DURATION_HOURS = 2.0


def _check_weekday(day: int) -> None:
    if day not in WEEKDAYS:
        raise InvalidScheduleError(f"Weekday must be between 0 and 6, got {day}")


@dataclass(frozen=True)
class TimeBlock:
    """A named operating window on specific weekdays that yields bookable slots."""

    name: str
    days: frozenset[int]
    start_time: WallClockTime
    end_time: WallClockTime
    duration_hours: float
    half_hour_break: bool = False
    max_events_per_block: int = 1
    one_reservation_per_day: bool = False

    def __post_init__(self) -> None:
        for day in self.days:
            _check_weekday(day)
        if self.start_time >= self.end_time:
            raise InvalidScheduleError(
                f"Block {self.name!r} must start before it ends "
                f"({self.start_time} >= {self.end_time})"
            )
        if hours_to_minutes(self.duration_hours) <= 0:
            raise InvalidScheduleError(f"Block {self.name!r} needs a positive duration")
        if self.max_events_per_block < 1:
            raise InvalidScheduleError(
                f"Block {self.name!r} must allow at least one event"
            )

    @property
    def duration_minutes(self) -> int:
        return hours_to_minutes(self.duration_hours)

    def applies_to(self, weekday: int) -> bool:
        return weekday in self.days


@dataclass(frozen=True)
class RestDay:
    """A weekday that is normally closed, optionally releasable for a fee."""

    day: int
    fee: Money
    can_be_released: bool = True
    name: str = ""

    def __post_init__(self) -> None:
        _check_weekday(self.day)

    @property
    def is_blocked(self) -> bool:
        return not self.can_be_released


def default_fallback_block() -> TimeBlock:
    """Schedule used for a releasable rest day that has no blocks of its own."""
    return TimeBlock(
        name="Rest day",
        days=frozenset(WEEKDAYS),
        start_time=WallClockTime.from_string("10:00"),
        end_time=WallClockTime.from_string("18:00"),
        duration_hours=4,
        half_hour_break=True,
        max_events_per_block=2,
    )


@dataclass(frozen=True)
class SystemConfiguration:
    """The active scheduling configuration, passed by value into the engine."""

    time_blocks: tuple[TimeBlock, ...] = ()
    rest_days: tuple[RestDay, ...] = ()
    one_event_per_day: bool = True
    default_event_duration_hours: float | None = None
    fallback_block: TimeBlock | None = field(default_factory=default_fallback_block)

    def __post_init__(self) -> None:
        seen: set[int] = set()
        for rest_day in self.rest_days:
            if rest_day.day in seen:
                raise InvalidScheduleError(
                    f"Weekday {rest_day.day} is listed as a rest day more than once"
                )
            seen.add(rest_day.day)
        if (
            self.default_event_duration_hours is not None
            and hours_to_minutes(self.default_event_duration_hours) <= 0
        ):
            raise InvalidScheduleError("Default event duration must be positive")

    def blocks_for(self, weekday: int) -> tuple[TimeBlock, ...]:
        return tuple(block for block in self.time_blocks if block.applies_to(weekday))

    def rest_day_for(self, weekday: int) -> RestDay | None:
        for rest_day in self.rest_days:
            if rest_day.day == weekday:
                return rest_day
        return None


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Booking:
    """Read-only projection of a persisted reservation."""

    event_date: date | datetime
    event_time: WallClockTime
    event_duration_hours: float | None = None
    status: BookingStatus = BookingStatus.CONFIRMED
    id: str | None = None
    customer_name: str = ""
    child_name: str = ""
    total_amount: Decimal = Decimal("0")

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED


@dataclass(frozen=True)
class SlotWindow:
    """A generated [start, end) range within a block."""

    start: WallClockTime
    end: WallClockTime


@dataclass(frozen=True)
class Slot:
    """Availability of one slot. remaining_capacity may be negative when overbooked."""

    time: WallClockTime
    end_time: WallClockTime
    available: bool
    remaining_capacity: int
    total_capacity: int
    reservations: tuple[Booking, ...] = ()


@dataclass(frozen=True)
class BlockAvailability:
    block: TimeBlock
    slots: tuple[Slot, ...]


@dataclass(frozen=True)
class DayAvailability:
    """Coarse per-day summary used by calendar views."""

    date: date
    available: bool
    total_slots: int
    available_slots: int
    is_rest_day: bool
    rest_day_fee: Money | None
    has_reservations: bool


class AvailabilityLevel(str, Enum):
    AVAILABLE = "available"
    LIMITED = "limited"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class DayDetails:
    """Admin view of one day: per-slot availability plus the day's bookings."""

    date: date
    summary: DayAvailability
    blocks: tuple[BlockAvailability, ...]
    reservations: tuple[Booking, ...]
    total_revenue: Decimal
    average_event_value: Decimal


@dataclass(frozen=True)
class AvailableBlocks:
    """Customer booking-flow view of one day."""

    date: date
    weekday: int
    rest_day: RestDay | None
    rest_day_fee: Money
    blocks: tuple[BlockAvailability, ...]
    default_event_duration_hours: float | None

    @property
    def is_rest_day(self) -> bool:
        return self.rest_day is not None

    @property
    def can_be_released(self) -> bool:
        return self.rest_day is None or self.rest_day.can_be_released

"""Builders and in-memory stores shared by the test suite."""

from datetime import date, datetime
from decimal import Decimal

from availability.domain import (
    Booking,
    BookingStatus,
    Money,
    RestDay,
    SystemConfiguration,
    TimeBlock,
    WallClockTime,
)
from availability.stores.interfaces import BookingStore, ConfigurationStore

WEDNESDAY = date(2025, 1, 15)


def block(
    name: str = "Afternoon",
    days: tuple[int, ...] = (3,),
    start: str = "10:00",
    end: str = "18:00",
    duration: float = 2,
    half_hour_break: bool = False,
    capacity: int = 2,
    one_reservation_per_day: bool = False,
) -> TimeBlock:
    return TimeBlock(
        name=name,
        days=frozenset(days),
        start_time=WallClockTime.from_string(start),
        end_time=WallClockTime.from_string(end),
        duration_hours=duration,
        half_hour_break=half_hour_break,
        max_events_per_block=capacity,
        one_reservation_per_day=one_reservation_per_day,
    )


def rest_day(day: int, fee: str = "1500", can_be_released: bool = True) -> RestDay:
    return RestDay(day=day, fee=Money(Decimal(fee)), can_be_released=can_be_released)


def configuration(
    *blocks: TimeBlock,
    rest_days: tuple[RestDay, ...] = (),
    one_event_per_day: bool = False,
    default_duration: float | None = None,
    **extra,
) -> SystemConfiguration:
    return SystemConfiguration(
        time_blocks=blocks,
        rest_days=rest_days,
        one_event_per_day=one_event_per_day,
        default_event_duration_hours=default_duration,
        **extra,
    )


def booking(
    event_date: date | datetime = WEDNESDAY,
    time: str = "12:00",
    duration: float | None = 2,
    status: BookingStatus = BookingStatus.CONFIRMED,
    amount: str = "0",
    booking_id: str | None = None,
) -> Booking:
    return Booking(
        id=booking_id,
        event_date=event_date,
        event_time=WallClockTime.from_string(time),
        event_duration_hours=duration,
        status=status,
        total_amount=Decimal(amount),
    )


class InMemoryConfigurationStore(ConfigurationStore):
    def __init__(self, configuration: SystemConfiguration | None = None) -> None:
        self.configuration = configuration

    def get_active_configuration(self) -> SystemConfiguration | None:
        return self.configuration

    def save_configuration(self, configuration: SystemConfiguration) -> SystemConfiguration:
        self.configuration = configuration
        return configuration


class InMemoryBookingStore(BookingStore):
    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self.bookings = list(bookings or [])
        self.requested_ranges: list[tuple[date, date]] = []

    def list_active_bookings(self, start: date, end: date) -> list[Booking]:
        self.requested_ranges.append((start, end))
        return [item for item in self.bookings if not item.is_cancelled]

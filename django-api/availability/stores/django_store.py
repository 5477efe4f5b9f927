"""Django ORM implementations of the availability stores."""

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from availability import models
from availability.domain import (
    Booking,
    BookingStatus,
    Money,
    RestDay,
    SystemConfiguration,
    TimeBlock,
    WallClockTime,
)
from availability.domain.errors import InvalidScheduleError
from availability.domain.models import default_fallback_block
from availability.stores.interfaces import BookingStore, ConfigurationStore

logger = logging.getLogger(__name__)

_DEFAULT_FALLBACK = object()


def _time_block_to_domain(row: models.TimeBlock) -> TimeBlock:
    return TimeBlock(
        name=row.name,
        days=frozenset(int(day) for day in row.days),
        start_time=WallClockTime.from_string(row.start_time),
        end_time=WallClockTime.from_string(row.end_time),
        duration_hours=row.duration_hours,
        half_hour_break=row.half_hour_break,
        max_events_per_block=row.max_events_per_block,
        one_reservation_per_day=row.one_reservation_per_day,
    )


def _rest_day_to_domain(row: models.RestDay) -> RestDay:
    fee = Decimal(row.fee)
    if fee < 0:
        raise InvalidScheduleError(f"Rest day {row.day} has a negative fee ({fee})")
    return RestDay(
        day=row.day,
        name=row.name,
        fee=Money(fee),
        can_be_released=row.can_be_released,
    )


def _reservation_to_domain(row: models.Reservation) -> Booking:
    return Booking(
        id=str(row.id),
        event_date=row.event_date,
        event_time=WallClockTime.from_string(row.event_time),
        event_duration_hours=row.event_duration_hours,
        status=BookingStatus(row.status),
        customer_name=row.customer_name,
        child_name=row.child_name,
        total_amount=Decimal(row.total_amount),
    )


class DjangoConfigurationStore(ConfigurationStore):
    """Database-backed configuration store using Django ORM."""

    def __init__(self, fallback_block: TimeBlock | None = _DEFAULT_FALLBACK) -> None:
        # None disables the rest-day fallback schedule.
        if fallback_block is _DEFAULT_FALLBACK:
            fallback_block = default_fallback_block()
        self._fallback_block = fallback_block

    def get_active_configuration(self) -> SystemConfiguration | None:
        row = (
            models.SystemConfiguration.objects.filter(is_active=True)
            .prefetch_related("time_blocks", "rest_days")
            .first()
        )
        if row is None:
            return None
        return self._to_domain(row)

    @transaction.atomic
    def save_configuration(self, configuration: SystemConfiguration) -> SystemConfiguration:
        models.SystemConfiguration.objects.filter(is_active=True).update(is_active=False)
        row = models.SystemConfiguration.objects.create(
            is_active=True,
            one_event_per_day=configuration.one_event_per_day,
            default_event_duration_hours=configuration.default_event_duration_hours,
        )
        models.TimeBlock.objects.bulk_create(
            models.TimeBlock(
                configuration=row,
                position=position,
                name=block.name,
                days=sorted(block.days),
                start_time=str(block.start_time),
                end_time=str(block.end_time),
                duration_hours=block.duration_hours,
                half_hour_break=block.half_hour_break,
                max_events_per_block=block.max_events_per_block,
                one_reservation_per_day=block.one_reservation_per_day,
            )
            for position, block in enumerate(configuration.time_blocks)
        )
        models.RestDay.objects.bulk_create(
            models.RestDay(
                configuration=row,
                day=rest_day.day,
                name=rest_day.name,
                fee=rest_day.fee.amount,
                can_be_released=rest_day.can_be_released,
            )
            for rest_day in configuration.rest_days
        )
        logger.info(
            "Stored system configuration %s with %d blocks and %d rest days",
            row.id,
            len(configuration.time_blocks),
            len(configuration.rest_days),
        )
        return self.get_active_configuration()

    def _to_domain(self, row: models.SystemConfiguration) -> SystemConfiguration:
        return SystemConfiguration(
            time_blocks=tuple(_time_block_to_domain(block) for block in row.time_blocks.all()),
            rest_days=tuple(_rest_day_to_domain(rest_day) for rest_day in row.rest_days.all()),
            one_event_per_day=row.one_event_per_day,
            default_event_duration_hours=row.default_event_duration_hours,
            fallback_block=self._fallback_block,
        )


class DjangoBookingStore(BookingStore):
    """Database-backed reservation store using Django ORM."""

    def list_active_bookings(self, start: date, end: date) -> list[Booking]:
        # Widen by a day on each side so instants stored near midnight in
        # another offset are still fetched; the engine re-buckets by local day.
        tz = timezone.get_current_timezone()
        lower = datetime.combine(start - timedelta(days=1), time.min, tzinfo=tz)
        upper = datetime.combine(end + timedelta(days=2), time.min, tzinfo=tz)
        rows = models.Reservation.objects.filter(
            event_date__gte=lower, event_date__lt=upper
        ).exclude(status=models.Reservation.Status.CANCELLED)
        return [_reservation_to_domain(row) for row in rows]

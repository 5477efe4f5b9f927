"""Availability service - orchestration around the pure engine.

Services:
- Depend only on interfaces (stores)
- Resolve the active configuration once per call
- Perform orchestration, logging and error mapping
- Return domain models or raise domain errors
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta, tzinfo
from decimal import Decimal

from availability import engine
from availability.domain import (
    AvailabilityLevel,
    AvailableBlocks,
    BlockAvailability,
    DayAvailability,
    DayDetails,
    Money,
    SystemConfiguration,
)
from availability.domain.errors import (
    InvalidDateRangeError,
    InvalidMonthError,
    NoActiveConfigurationError,
)
from availability.stores.interfaces import BookingStore, ConfigurationStore

logger = logging.getLogger(__name__)

DEFAULT_RANGE_DAYS = 90
MAX_RANGE_DAYS = 366


class AvailabilityService:
    """Service for availability and scheduling-configuration operations."""

    def __init__(
        self,
        configuration_store: ConfigurationStore,
        booking_store: BookingStore,
        tz: tzinfo,
        default_range_days: int = DEFAULT_RANGE_DAYS,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._configuration_store = configuration_store
        self._booking_store = booking_store
        self._tz = tz
        self._default_range_days = default_range_days
        self._today = today or self._local_today

    def get_configuration(self) -> SystemConfiguration:
        """Return the active configuration.

        Raises:
            NoActiveConfigurationError: If no configuration is active.
        """
        configuration = self._configuration_store.get_active_configuration()
        if configuration is None:
            logger.warning("Availability requested without an active system configuration")
            raise NoActiveConfigurationError()
        return configuration

    def update_configuration(self, configuration: SystemConfiguration) -> SystemConfiguration:
        stored = self._configuration_store.save_configuration(configuration)
        logger.info(
            "System configuration replaced: %d blocks, %d rest days, one_event_per_day=%s",
            len(stored.time_blocks),
            len(stored.rest_days),
            stored.one_event_per_day,
        )
        return stored

    def get_day_details(self, date_param: str) -> DayDetails:
        """Return per-slot availability, the summary and the bookings for one day.

        Raises:
            InvalidDateError: If date_param is not YYYY-MM-DD.
            NoActiveConfigurationError: If no configuration is active.
        """
        day = engine.parse_date_key(date_param)
        configuration = self.get_configuration()
        bookings = engine.bookings_on(
            day, self._booking_store.list_active_bookings(day, day), self._tz
        )

        blocks = engine.day_slots(day, configuration, bookings, self._tz)
        summary = engine.summarize_day(day, configuration, bookings, self._tz)
        self._warn_overbooked(day, blocks)

        total_revenue = sum((booking.total_amount for booking in bookings), Decimal("0"))
        average = total_revenue / len(bookings) if bookings else Decimal("0")

        logger.info(
            "Day details for %s: %d bookings, %d/%d slots available",
            day,
            len(bookings),
            summary.available_slots,
            summary.total_slots,
        )
        return DayDetails(
            date=day,
            summary=summary,
            blocks=blocks,
            reservations=tuple(bookings),
            total_revenue=total_revenue,
            average_event_value=average,
        )

    def get_available_blocks(self, date_param: str) -> AvailableBlocks:
        """Return the bookable blocks for one day.

        A blocked rest day comes back with no blocks.

        Raises:
            InvalidDateError: If date_param is not YYYY-MM-DD.
            NoActiveConfigurationError: If no configuration is active.
        """
        day = engine.parse_date_key(date_param)
        configuration = self.get_configuration()
        rest_day = engine.rest_day_on(day, configuration)

        if rest_day is not None and rest_day.is_blocked:
            logger.info("Blocked rest day %s requested; returning no blocks", day)
            blocks: tuple[BlockAvailability, ...] = ()
        else:
            bookings = self._booking_store.list_active_bookings(day, day)
            blocks = engine.day_slots(day, configuration, bookings, self._tz)
            self._warn_overbooked(day, blocks)

        logger.debug("Available blocks for %s: %d", day, len(blocks))
        return AvailableBlocks(
            date=day,
            weekday=engine.weekday_index(day),
            rest_day=rest_day,
            rest_day_fee=engine.rest_day_fee(day, configuration),
            blocks=blocks,
            default_event_duration_hours=configuration.default_event_duration_hours,
        )

    def get_month_availability(self, year: int, month: int) -> dict[str, DayAvailability]:
        """Return the per-day summary for every day of a month.

        Raises:
            InvalidMonthError: If year or month is out of range.
            NoActiveConfigurationError: If no configuration is active.
        """
        start, end = engine.month_bounds(year, month)
        configuration = self.get_configuration()
        bookings = self._booking_store.list_active_bookings(start, end)
        summaries = engine.summarize_range(start, end, configuration, bookings, self._tz)
        logger.info(
            "Month availability for %04d-%02d: %d days, %d with reservations",
            year,
            month,
            len(summaries),
            sum(1 for summary in summaries.values() if summary.has_reservations),
        )
        return summaries

    def get_availability_range(
        self,
        start_param: str | None = None,
        end_param: str | None = None,
    ) -> dict[str, AvailabilityLevel]:
        """Classify each day of a range as available, limited or unavailable.

        The range starts today when no start is given and spans the default
        number of days when no end is given.

        Raises:
            InvalidDateError: If a date is not YYYY-MM-DD.
            InvalidDateRangeError: If the range is reversed or too long.
            NoActiveConfigurationError: If no configuration is active.
        """
        start = engine.parse_date_key(start_param) if start_param else self._today()
        end = (
            engine.parse_date_key(end_param)
            if end_param
            else start + timedelta(days=self._default_range_days)
        )
        if end < start:
            raise InvalidDateRangeError("End date must not be before start date")
        if (end - start).days > MAX_RANGE_DAYS:
            raise InvalidDateRangeError(f"Date range cannot exceed {MAX_RANGE_DAYS} days")

        configuration = self.get_configuration()
        bookings = self._booking_store.list_active_bookings(start, end)
        levels = engine.classify_range(start, end, configuration, bookings, self._tz)
        logger.info("Availability range %s..%s: %d days", start, end, len(levels))
        return levels

    def get_rest_day_fee(self, date_param: str) -> Money:
        """Return the rest-day surcharge for a date, zero on ordinary days."""
        day = engine.parse_date_key(date_param)
        return engine.rest_day_fee(day, self.get_configuration())

    def _warn_overbooked(self, day: date, blocks: tuple[BlockAvailability, ...]) -> None:
        for block in blocks:
            for slot in block.slots:
                if slot.remaining_capacity < 0:
                    logger.warning(
                        "Overbooked slot %s %s-%s in block %r: remaining capacity %d",
                        day,
                        slot.time,
                        slot.end_time,
                        block.block.name,
                        slot.remaining_capacity,
                    )

    def _local_today(self) -> date:
        return datetime.now(self._tz).date()


def parse_year_month(year: str | None, month: str | None) -> tuple[int, int]:
    """Parse query-string year/month values.

    Raises:
        InvalidMonthError: If either value is missing or not an integer.
    """
    try:
        return int(year), int(month)
    except (TypeError, ValueError):
        raise InvalidMonthError() from None

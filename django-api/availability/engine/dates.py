"""Calendar-day normalization.

Every day key in the engine comes from ``to_local_date``: aware datetimes are
converted into the business timezone before their date is taken, naive
datetimes are assumed to already be business-local, and plain dates pass
through untouched.
"""

import calendar
import re
from collections import defaultdict
from collections.abc import Iterable, Iterator
from datetime import date, datetime, timedelta, tzinfo

from availability.domain.errors import InvalidDateError, InvalidMonthError
from availability.domain.models import Booking

DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def to_local_date(value: date | datetime, tz: tzinfo) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def date_key(value: date | datetime, tz: tzinfo) -> str:
    """Canonical YYYY-MM-DD key for a date or instant."""
    return to_local_date(value, tz).isoformat()


def parse_date_key(value: str) -> date:
    """Parse a strict YYYY-MM-DD key."""
    try:
        text = value.strip()
    except AttributeError:
        raise InvalidDateError(value) from None
    if not DATE_KEY_PATTERN.match(text):
        raise InvalidDateError(value)
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidDateError(value) from None


def weekday_index(day: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return day.isoweekday() % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not (1 <= month <= 12 and date.min.year <= year <= date.max.year):
        raise InvalidMonthError()
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def group_by_day(bookings: Iterable[Booking], tz: tzinfo) -> dict[date, list[Booking]]:
    grouped: dict[date, list[Booking]] = defaultdict(list)
    for booking in bookings:
        grouped[to_local_date(booking.event_date, tz)].append(booking)
    return dict(grouped)

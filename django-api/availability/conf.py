"""Access to the AVAILABILITY settings dict."""

from datetime import tzinfo
from zoneinfo import ZoneInfo

from django.conf import settings

from availability.domain import TimeBlock, WallClockTime
from availability.domain.models import WEEKDAYS
from availability.services.availability_service import DEFAULT_RANGE_DAYS


def _section() -> dict:
    return getattr(settings, "AVAILABILITY", {})


def business_time_zone() -> tzinfo:
    return ZoneInfo(_section().get("TIME_ZONE", settings.TIME_ZONE))


def default_range_days() -> int:
    return int(_section().get("DEFAULT_RANGE_DAYS", DEFAULT_RANGE_DAYS))


def fallback_block() -> TimeBlock | None:
    """Fallback schedule for releasable rest days, or None when disabled."""
    schedule = _section().get("FALLBACK_SCHEDULE")
    if not schedule:
        return None
    return TimeBlock(
        name=schedule.get("name", "Rest day"),
        days=frozenset(WEEKDAYS),
        start_time=WallClockTime.from_string(schedule["start_time"]),
        end_time=WallClockTime.from_string(schedule["end_time"]),
        duration_hours=schedule["duration_hours"],
        half_hour_break=schedule.get("half_hour_break", True),
        max_events_per_block=schedule["max_events_per_block"],
    )

"""Pytest configuration and shared fixtures."""

from zoneinfo import ZoneInfo

import pytest
from rest_framework.test import APIClient


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def tz() -> ZoneInfo:
    return ZoneInfo("America/Mexico_City")


@pytest.fixture(autouse=True)
def business_settings(settings):
    settings.TIME_ZONE = "America/Mexico_City"
    settings.AVAILABILITY = {
        "TIME_ZONE": "America/Mexico_City",
        "DEFAULT_RANGE_DAYS": 90,
        "FALLBACK_SCHEDULE": {
            "start_time": "10:00",
            "end_time": "18:00",
            "duration_hours": 4,
            "half_hour_break": True,
            "max_events_per_block": 2,
        },
    }

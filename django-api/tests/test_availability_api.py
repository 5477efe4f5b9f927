"""Integration tests for the availability HTTP API.

These go through the Django stores and the DRF handlers.
Run with: pytest tests/test_availability_api.py -v
"""

from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from django.core.exceptions import ValidationError
from rest_framework.test import APIClient

from availability import models
from availability.domain.errors import InvalidScheduleError
from availability.stores.django_store import DjangoBookingStore, DjangoConfigurationStore

LOCAL = ZoneInfo("America/Mexico_City")

CONFIG_PAYLOAD = {
    "time_blocks": [
        {
            "name": "Afternoon",
            "days": [3],
            "start_time": "10:00",
            "end_time": "18:00",
            "duration_hours": 2,
            "half_hour_break": False,
            "max_events_per_block": 2,
        }
    ],
    "rest_days": [
        {"day": 1, "name": "Monday", "fee": "1500.00", "can_be_released": False},
        {"day": 2, "name": "Tuesday", "fee": "800.00", "can_be_released": True},
    ],
    "one_event_per_day": False,
    "default_event_duration_hours": None,
}


def make_configuration(one_event_per_day: bool = False) -> models.SystemConfiguration:
    config = models.SystemConfiguration.objects.create(one_event_per_day=one_event_per_day)
    models.TimeBlock.objects.create(
        configuration=config,
        name="Afternoon",
        days=[3],
        start_time="10:00",
        end_time="18:00",
        duration_hours=2,
        half_hour_break=False,
        max_events_per_block=2,
    )
    models.RestDay.objects.create(configuration=config, day=1, fee=Decimal("1500"), can_be_released=False)
    return config


def make_reservation(when: datetime, time: str = "12:00", **fields) -> models.Reservation:
    defaults = {
        "event_time": time,
        "event_duration_hours": 2,
        "status": models.Reservation.Status.CONFIRMED,
        "customer_name": "Ana",
        "child_name": "Luis",
        "total_amount": Decimal("4500"),
    }
    defaults.update(fields)
    return models.Reservation.objects.create(event_date=when, **defaults)


@pytest.mark.django_db
class TestSystemConfiguration:
    """Tests for GET|PUT /api/admin/system-config"""

    def test_get_without_configuration_returns_404(self, api_client: APIClient):
        """Reading an absent configuration returns 404."""
        response = api_client.get("/api/admin/system-config")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NO_ACTIVE_CONFIGURATION"

    def test_put_then_get_round_trips(self, api_client: APIClient):
        """A stored configuration reads back unchanged."""
        response = api_client.put("/api/admin/system-config", CONFIG_PAYLOAD, format="json")
        assert response.status_code == 200

        body = api_client.get("/api/admin/system-config").json()
        assert body["success"] is True
        assert body["data"]["time_blocks"][0]["start_time"] == "10:00"
        assert body["data"]["rest_days"][0]["fee"] == "1500.00"
        assert body["data"]["one_event_per_day"] is False

    def test_put_replaces_previous_configuration(self, api_client: APIClient):
        """Only one configuration stays active."""
        make_configuration()
        api_client.put("/api/admin/system-config", CONFIG_PAYLOAD, format="json")
        assert models.SystemConfiguration.objects.filter(is_active=True).count() == 1

    def test_put_rejects_malformed_time(self, api_client: APIClient):
        """Malformed block times fail validation."""
        payload = {**CONFIG_PAYLOAD, "time_blocks": [{**CONFIG_PAYLOAD["time_blocks"][0], "end_time": "25:00"}]}
        response = api_client.put("/api/admin/system-config", payload, format="json")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_put_rejects_block_ending_before_start(self, api_client: APIClient):
        """Blocks ending before they start are refused."""
        payload = {
            **CONFIG_PAYLOAD,
            "time_blocks": [{**CONFIG_PAYLOAD["time_blocks"][0], "start_time": "19:00"}],
        }
        response = api_client.put("/api/admin/system-config", payload, format="json")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SCHEDULE"


@pytest.mark.django_db
class TestAvailableBlocks:
    """Tests for GET /api/reservations/available-blocks"""

    def test_slots_reflect_existing_booking(self, api_client: APIClient):
        """Slots show capacity left after a booking."""
        make_configuration()
        make_reservation(datetime(2025, 1, 15, 12, 0, tzinfo=LOCAL))

        response = api_client.get("/api/reservations/available-blocks", {"date": "2025-01-15"})

        assert response.status_code == 200
        slots = response.json()["data"]["blocks"][0]["slots"]
        assert [(s["time"], s["end_time"], s["remaining_capacity"]) for s in slots] == [
            ("10:00", "12:00", 2),
            ("12:00", "14:00", 1),
            ("14:00", "16:00", 2),
            ("16:00", "18:00", 2),
        ]
        assert all(slot["available"] for slot in slots)

    def test_cancelled_booking_ignored(self, api_client: APIClient):
        """Cancelled reservations leave capacity untouched."""
        make_configuration()
        make_reservation(
            datetime(2025, 1, 15, 12, 0, tzinfo=LOCAL),
            status=models.Reservation.Status.CANCELLED,
        )
        response = api_client.get("/api/reservations/available-blocks", {"date": "2025-01-15"})
        slots = response.json()["data"]["blocks"][0]["slots"]
        assert {slot["remaining_capacity"] for slot in slots} == {2}

    def test_blocked_rest_day_returns_no_blocks(self, api_client: APIClient):
        """A blocked rest day returns no blocks and its fee."""
        make_configuration()
        response = api_client.get("/api/reservations/available-blocks", {"date": "2025-01-13"})
        data = response.json()["data"]
        assert data["blocks"] == []
        assert data["is_rest_day"] is True
        assert data["can_be_released"] is False
        assert data["rest_day_fee"] == "1500.00"

    def test_missing_date_returns_400(self, api_client: APIClient):
        """A missing date is a bad request."""
        make_configuration()
        response = api_client.get("/api/reservations/available-blocks")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DATE"


@pytest.mark.django_db
class TestDayDetails:
    """Tests for GET /api/admin/availability/day-details"""

    def test_day_details_lists_reservations(self, api_client: APIClient):
        """Day details list reservations per slot."""
        make_configuration()
        make_reservation(datetime(2025, 1, 15, 12, 0, tzinfo=LOCAL))

        response = api_client.get("/api/admin/availability/day-details", {"date": "2025-01-15"})

        data = response.json()["data"]
        assert data["total_slots"] == 4
        assert data["available_slots"] == 4
        assert data["total_revenue"] == "4500.00"
        assert data["reservations"][0]["customer_name"] == "Ana"
        noon = data["time_blocks"][0]["slots"][1]
        assert noon["remaining_capacity"] == 1
        assert noon["reservations"][0]["event_time"] == "12:00"

    def test_no_configuration_returns_404(self, api_client: APIClient):
        """Day details without a configuration return 404."""
        response = api_client.get("/api/admin/availability/day-details", {"date": "2025-01-15"})
        assert response.status_code == 404


@pytest.mark.django_db
class TestMonthAvailability:
    """Tests for GET /api/admin/availability/month"""

    def test_month_summary(self, api_client: APIClient):
        """The month view summarizes each day."""
        make_configuration(one_event_per_day=True)
        make_reservation(datetime(2025, 1, 15, 12, 0, tzinfo=LOCAL))

        response = api_client.get("/api/admin/availability/month", {"year": 2025, "month": 1})

        data = response.json()["data"]
        assert len(data) == 31
        assert data["2025-01-15"]["available"] is False
        assert data["2025-01-15"]["has_reservations"] is True
        assert data["2025-01-22"]["available_slots"] == 4
        assert data["2025-01-13"]["available"] is False
        assert data["2025-01-13"]["rest_day_fee"] == "1500.00"
        assert data["2025-01-16"]["rest_day_fee"] is None

    def test_invalid_month_returns_400(self, api_client: APIClient):
        """An invalid month is a bad request."""
        make_configuration()
        response = api_client.get("/api/admin/availability/month", {"year": 2025, "month": 13})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_MONTH"


@pytest.mark.django_db
class TestAvailabilityRange:
    """Tests for GET /api/reservations/availability"""

    def test_levels_for_range(self, api_client: APIClient):
        """Each day in the range gets a level."""
        make_configuration()
        make_reservation(datetime(2025, 1, 15, 12, 0, tzinfo=LOCAL))
        make_reservation(datetime(2025, 1, 22, 10, 0, tzinfo=LOCAL))
        make_reservation(datetime(2025, 1, 22, 14, 0, tzinfo=LOCAL))

        response = api_client.get(
            "/api/reservations/availability",
            {"start_date": "2025-01-13", "end_date": "2025-01-22"},
        )

        data = response.json()["data"]
        assert len(data) == 10
        assert data["2025-01-13"] == "unavailable"
        assert data["2025-01-14"] == "available"
        assert data["2025-01-15"] == "limited"
        assert data["2025-01-22"] == "unavailable"

    def test_late_evening_booking_stays_on_local_day(self, api_client: APIClient):
        """A late local booking stays on its local day."""
        make_configuration(one_event_per_day=True)
        make_reservation(datetime(2025, 1, 16, 3, 0, tzinfo=timezone.utc), time="17:00")

        response = api_client.get(
            "/api/reservations/availability",
            {"start_date": "2025-01-15", "end_date": "2025-01-16"},
        )

        data = response.json()["data"]
        assert data["2025-01-15"] == "unavailable"
        assert data["2025-01-16"] == "available"

    def test_reversed_range_returns_400(self, api_client: APIClient):
        """A reversed range is a bad request."""
        make_configuration()
        response = api_client.get(
            "/api/reservations/availability",
            {"start_date": "2025-01-20", "end_date": "2025-01-10"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"


@pytest.mark.django_db
class TestDjangoBookingStore:
    """Tests for the ORM booking store."""

    def test_excludes_cancelled_and_far_away_rows(self):
        """Only active reservations near the range are loaded."""
        kept = make_reservation(datetime(2025, 1, 15, 12, 0, tzinfo=LOCAL))
        make_reservation(
            datetime(2025, 1, 15, 14, 0, tzinfo=LOCAL),
            status=models.Reservation.Status.CANCELLED,
        )
        make_reservation(datetime(2025, 2, 15, 12, 0, tzinfo=LOCAL))

        bookings = DjangoBookingStore().list_active_bookings(
            datetime(2025, 1, 15).date(), datetime(2025, 1, 15).date()
        )

        assert [item.id for item in bookings] == [str(kept.id)]
        assert bookings[0].event_time.minutes == 12 * 60


def add_releasable_tuesday(config: models.SystemConfiguration, fee: str = "800") -> models.RestDay:
    return models.RestDay.objects.create(
        configuration=config, day=2, name="Tuesday", fee=Decimal(fee), can_be_released=True
    )


@pytest.mark.django_db
class TestRestDayFallback:
    """Tests for the schedule offered on a releasable rest day."""

    def test_fallback_schedule_offered_by_default(self, api_client: APIClient):
        """A releasable rest day without blocks gets the configured fallback slots."""
        add_releasable_tuesday(make_configuration())

        response = api_client.get("/api/reservations/available-blocks", {"date": "2025-01-14"})

        blocks = response.json()["data"]["blocks"]
        assert [block["name"] for block in blocks] == ["Rest day"]
        assert [slot["time"] for slot in blocks[0]["slots"]] == ["10:00"]

    def test_empty_fallback_setting_disables_schedule(self, api_client: APIClient, settings):
        """An empty FALLBACK_SCHEDULE leaves a releasable rest day without slots."""
        settings.AVAILABILITY = {**settings.AVAILABILITY, "FALLBACK_SCHEDULE": {}}
        add_releasable_tuesday(make_configuration())

        response = api_client.get("/api/reservations/available-blocks", {"date": "2025-01-14"})

        data = response.json()["data"]
        assert data["is_rest_day"] is True
        assert data["can_be_released"] is True
        assert data["blocks"] == []

    def test_store_keeps_disabled_fallback(self):
        """Passing no fallback block to the store disables the schedule."""
        make_configuration()
        configuration = DjangoConfigurationStore(fallback_block=None).get_active_configuration()
        assert configuration.fallback_block is None


@pytest.mark.django_db
class TestNegativeRestDayFee:
    """Tests for rest-day rows holding a negative fee."""

    def test_model_validation_rejects_negative_fee(self):
        """The admin form validators refuse a negative fee."""
        config = make_configuration()
        row = models.RestDay(configuration=config, day=2, fee=Decimal("-5"))
        with pytest.raises(ValidationError):
            row.full_clean()

    def test_store_raises_schedule_error(self):
        """Loading a stored negative fee raises a schedule error."""
        add_releasable_tuesday(make_configuration(), fee="-5")
        with pytest.raises(InvalidScheduleError):
            DjangoConfigurationStore().get_active_configuration()

    def test_endpoint_returns_400(self, api_client: APIClient):
        """A stored negative fee is reported as an invalid schedule."""
        add_releasable_tuesday(make_configuration(), fee="-5")

        response = api_client.get("/api/reservations/available-blocks", {"date": "2025-01-14"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SCHEDULE"


@pytest.mark.django_db
class TestRestDayFee:
    """Tests for GET /api/reservations/rest-day-fee"""

    def test_fee_for_rest_day(self, api_client: APIClient):
        """A rest day reports its surcharge."""
        make_configuration()
        response = api_client.get("/api/reservations/rest-day-fee", {"date": "2025-01-13"})
        assert response.status_code == 200
        assert response.json()["data"] == {"date": "2025-01-13", "fee": "1500.00"}

    def test_ordinary_day_has_zero_fee(self, api_client: APIClient):
        """A day without a rest-day entry costs nothing extra."""
        make_configuration()
        response = api_client.get("/api/reservations/rest-day-fee", {"date": "2025-01-15"})
        assert response.json()["data"]["fee"] == "0.00"

    def test_compact_date_rejected(self, api_client: APIClient):
        """Only the dashed YYYY-MM-DD form is accepted."""
        make_configuration()
        response = api_client.get("/api/reservations/rest-day-fee", {"date": "20250113"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DATE"


@pytest.mark.django_db
class TestErrorEnvelope:
    """Tests for framework errors wrapped in the response envelope."""

    def test_malformed_json_uses_envelope(self, api_client: APIClient):
        """Unparseable request bodies still return success=false."""
        response = api_client.put(
            "/api/admin/system-config", "{not json", content_type="application/json"
        )
        body = response.json()
        assert response.status_code == 400
        assert body["success"] is False
        assert body["error"]["code"] == "PARSE_ERROR"

    def test_unsupported_method_uses_envelope(self, api_client: APIClient):
        """Unsupported HTTP methods still return success=false."""
        response = api_client.post("/api/reservations/availability", {}, format="json")
        body = response.json()
        assert response.status_code == 405
        assert body["success"] is False
        assert body["error"]["code"] == "METHOD_NOT_ALLOWED"

"""Serializers for transforming domain models to API responses and back."""

from decimal import Decimal

from rest_framework import serializers

from availability.domain import Money, RestDay, SystemConfiguration, TimeBlock, WallClockTime
from availability.domain.value_objects import TIME_PATTERN


class ReservationSummarySerializer(serializers.Serializer):
    id = serializers.CharField()
    customer_name = serializers.CharField()
    child_name = serializers.CharField()
    event_time = serializers.CharField()
    event_duration_hours = serializers.FloatField(allow_null=True)
    status = serializers.CharField(source="status.value")
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2)


class SlotSerializer(serializers.Serializer):
    time = serializers.CharField()
    end_time = serializers.CharField()
    available = serializers.BooleanField()
    remaining_capacity = serializers.IntegerField()
    total_capacity = serializers.IntegerField()


class AdminSlotSerializer(SlotSerializer):
    reservations = ReservationSummarySerializer(many=True)


class BlockAvailabilitySerializer(serializers.Serializer):
    name = serializers.CharField(source="block.name")
    start_time = serializers.CharField(source="block.start_time")
    end_time = serializers.CharField(source="block.end_time")
    duration_hours = serializers.FloatField(source="block.duration_hours")
    half_hour_break = serializers.BooleanField(source="block.half_hour_break")
    slots = SlotSerializer(many=True)


class AdminBlockAvailabilitySerializer(BlockAvailabilitySerializer):
    slots = AdminSlotSerializer(many=True)


class DayAvailabilitySerializer(serializers.Serializer):
    date = serializers.DateField()
    available = serializers.BooleanField()
    total_slots = serializers.IntegerField()
    available_slots = serializers.IntegerField()
    is_rest_day = serializers.BooleanField()
    rest_day_fee = serializers.CharField(allow_null=True)
    has_reservations = serializers.BooleanField()


class DayDetailsSerializer(serializers.Serializer):
    date = serializers.DateField()
    total_slots = serializers.IntegerField(source="summary.total_slots")
    available_slots = serializers.IntegerField(source="summary.available_slots")
    is_rest_day = serializers.BooleanField(source="summary.is_rest_day")
    rest_day_fee = serializers.CharField(source="summary.rest_day_fee", allow_null=True)
    reservations = ReservationSummarySerializer(many=True)
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    average_event_value = serializers.DecimalField(max_digits=12, decimal_places=2)
    time_blocks = AdminBlockAvailabilitySerializer(source="blocks", many=True)


class RestDaySerializer(serializers.Serializer):
    day = serializers.IntegerField(min_value=0, max_value=6)
    name = serializers.CharField(allow_blank=True, default="")
    fee = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), source="fee.amount"
    )
    can_be_released = serializers.BooleanField(default=True)


class AvailableBlocksSerializer(serializers.Serializer):
    date = serializers.DateField()
    weekday = serializers.IntegerField()
    is_rest_day = serializers.BooleanField()
    can_be_released = serializers.BooleanField()
    rest_day_info = RestDaySerializer(source="rest_day", allow_null=True)
    rest_day_fee = serializers.CharField()
    blocks = BlockAvailabilitySerializer(many=True)
    default_event_duration_hours = serializers.FloatField(allow_null=True)


class TimeBlockSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    days = serializers.ListField(
        child=serializers.IntegerField(min_value=0, max_value=6), allow_empty=True
    )
    start_time = serializers.RegexField(TIME_PATTERN)
    end_time = serializers.RegexField(TIME_PATTERN)
    duration_hours = serializers.FloatField(min_value=0.5, max_value=24)
    half_hour_break = serializers.BooleanField(default=True)
    max_events_per_block = serializers.IntegerField(min_value=1)
    one_reservation_per_day = serializers.BooleanField(default=False)

    def to_representation(self, instance: TimeBlock) -> dict:
        return {
            "name": instance.name,
            "days": sorted(instance.days),
            "start_time": str(instance.start_time),
            "end_time": str(instance.end_time),
            "duration_hours": instance.duration_hours,
            "half_hour_break": instance.half_hour_break,
            "max_events_per_block": instance.max_events_per_block,
            "one_reservation_per_day": instance.one_reservation_per_day,
        }


class SystemConfigurationSerializer(serializers.Serializer):
    """Validates admin input and renders the active configuration."""

    time_blocks = TimeBlockSerializer(many=True)
    rest_days = RestDaySerializer(many=True)
    one_event_per_day = serializers.BooleanField(default=True)
    default_event_duration_hours = serializers.FloatField(
        min_value=0.5, max_value=24, allow_null=True, default=None
    )

    def to_domain(self) -> SystemConfiguration:
        """Build the domain configuration from validated data.

        Raises:
            InvalidScheduleError: If a block or rest day breaks its invariants.
        """
        data = self.validated_data
        return SystemConfiguration(
            time_blocks=tuple(
                TimeBlock(
                    name=block["name"],
                    days=frozenset(block["days"]),
                    start_time=WallClockTime.from_string(block["start_time"]),
                    end_time=WallClockTime.from_string(block["end_time"]),
                    duration_hours=block["duration_hours"],
                    half_hour_break=block["half_hour_break"],
                    max_events_per_block=block["max_events_per_block"],
                    one_reservation_per_day=block["one_reservation_per_day"],
                )
                for block in data["time_blocks"]
            ),
            rest_days=tuple(
                RestDay(
                    day=rest_day["day"],
                    name=rest_day.get("name", ""),
                    fee=Money(rest_day["fee"]["amount"]),
                    can_be_released=rest_day["can_be_released"],
                )
                for rest_day in data["rest_days"]
            ),
            one_event_per_day=data["one_event_per_day"],
            default_event_duration_hours=data.get("default_event_duration_hours"),
        )

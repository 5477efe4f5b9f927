"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models

from availability.domain.value_objects import TIME_PATTERN

time_validator = RegexValidator(TIME_PATTERN, "Invalid time format (HH:MM)")
weekday_validators = [MinValueValidator(0), MaxValueValidator(6)]


class SystemConfiguration(models.Model):
    """Persistence model for the scheduling configuration."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    is_active = models.BooleanField(default=True)
    one_event_per_day = models.BooleanField(default=True)
    default_event_duration_hours = models.FloatField(
        null=True, blank=True, validators=[MinValueValidator(0.5), MaxValueValidator(24)]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["is_active", "-updated_at"]),
        ]

    def __str__(self) -> str:
        state = "active" if self.is_active else "inactive"
        return f"System configuration ({state})"


class TimeBlock(models.Model):
    """Persistence model for a bookable time block."""

    configuration = models.ForeignKey(
        SystemConfiguration, on_delete=models.CASCADE, related_name="time_blocks"
    )
    position = models.PositiveIntegerField(default=0)
    name = models.CharField(max_length=100)
    days = models.JSONField(default=list)
    start_time = models.CharField(max_length=5, validators=[time_validator])
    end_time = models.CharField(max_length=5, validators=[time_validator])
    duration_hours = models.FloatField(
        validators=[MinValueValidator(0.5), MaxValueValidator(24)]
    )
    half_hour_break = models.BooleanField(default=True)
    max_events_per_block = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    one_reservation_per_day = models.BooleanField(default=False)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.start_time}-{self.end_time})"


class RestDay(models.Model):
    """Persistence model for a rest day."""

    configuration = models.ForeignKey(
        SystemConfiguration, on_delete=models.CASCADE, related_name="rest_days"
    )
    day = models.PositiveSmallIntegerField(validators=weekday_validators)
    name = models.CharField(max_length=50, blank=True)
    fee = models.DecimalField(
        max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    can_be_released = models.BooleanField(default=True)

    class Meta:
        ordering = ["day"]
        constraints = [
            models.UniqueConstraint(
                fields=["configuration", "day"], name="unique_rest_day_per_configuration"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name or self.day} - {self.fee}"


class Reservation(models.Model):
    """Persistence model for a party reservation."""

    class Status(models.TextChoices):
        PENDING = "pending"
        CONFIRMED = "confirmed"
        CANCELLED = "cancelled"
        COMPLETED = "completed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_date = models.DateTimeField()
    event_time = models.CharField(max_length=5, validators=[time_validator])
    event_duration_hours = models.FloatField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    customer_name = models.CharField(max_length=255)
    child_name = models.CharField(max_length=255, blank=True)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["event_date", "event_time"]
        indexes = [
            models.Index(fields=["event_date", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.customer_name} - {self.event_date:%Y-%m-%d} {self.event_time}"

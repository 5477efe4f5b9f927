from availability.domain.models import (
    AvailabilityLevel,
    AvailableBlocks,
    BlockAvailability,
    Booking,
    BookingStatus,
    DayAvailability,
    DayDetails,
    RestDay,
    Slot,
    SlotWindow,
    SystemConfiguration,
    TimeBlock,
)
from availability.domain.value_objects import Money, WallClockTime

__all__ = [
    "AvailabilityLevel",
    "AvailableBlocks",
    "BlockAvailability",
    "Booking",
    "BookingStatus",
    "DayAvailability",
    "DayDetails",
    "RestDay",
    "Slot",
    "SlotWindow",
    "SystemConfiguration",
    "TimeBlock",
    "Money",
    "WallClockTime",
]

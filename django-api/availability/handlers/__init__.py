from availability.handlers.views import (
    AvailabilityRangeView,
    AvailableBlocksView,
    DayDetailsView,
    MonthAvailabilityView,
    RestDayFeeView,
    SystemConfigurationView,
)

__all__ = [
    "AvailabilityRangeView",
    "AvailableBlocksView",
    "DayDetailsView",
    "MonthAvailabilityView",
    "RestDayFeeView",
    "SystemConfigurationView",
]

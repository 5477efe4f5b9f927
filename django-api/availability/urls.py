from django.urls import path

from availability.handlers import (
    AvailabilityRangeView,
    AvailableBlocksView,
    DayDetailsView,
    MonthAvailabilityView,
    RestDayFeeView,
    SystemConfigurationView,
)

urlpatterns = [
    path(
        "admin/availability/day-details",
        DayDetailsView.as_view(),
        name="availability-day-details",
    ),
    path(
        "admin/availability/month",
        MonthAvailabilityView.as_view(),
        name="availability-month",
    ),
    path("admin/system-config", SystemConfigurationView.as_view(), name="system-config"),
    path(
        "reservations/availability",
        AvailabilityRangeView.as_view(),
        name="reservation-availability",
    ),
    path(
        "reservations/available-blocks",
        AvailableBlocksView.as_view(),
        name="available-blocks",
    ),
    path(
        "reservations/rest-day-fee",
        RestDayFeeView.as_view(),
        name="rest-day-fee",
    ),
]

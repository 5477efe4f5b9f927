"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from availability import conf
from availability.domain.errors import DomainError, NoActiveConfigurationError
from availability.handlers.serializers import (
    AvailableBlocksSerializer,
    DayAvailabilitySerializer,
    DayDetailsSerializer,
    SystemConfigurationSerializer,
)
from availability.services.availability_service import AvailabilityService, parse_year_month
from availability.stores.django_store import DjangoBookingStore, DjangoConfigurationStore

logger = logging.getLogger(__name__)


def build_availability_service() -> AvailabilityService:
    return AvailabilityService(
        configuration_store=DjangoConfigurationStore(fallback_block=conf.fallback_block()),
        booking_store=DjangoBookingStore(),
        tz=conf.business_time_zone(),
        default_range_days=conf.default_range_days(),
    )


def success(data, status_code: int = status.HTTP_200_OK) -> Response:
    return Response({"success": True, "data": data}, status=status_code)


def failure(code: str, message: str, status_code: int, **extra) -> Response:
    error = {"code": code, "message": message, **extra}
    return Response({"success": False, "error": error}, status=status_code)


class AvailabilityAPIView(APIView):
    """Base view that maps domain errors onto the response envelope."""

    def get_service(self) -> AvailabilityService:
        return build_availability_service()

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, NoActiveConfigurationError):
            return failure(exc.code.value, exc.message, status.HTTP_404_NOT_FOUND)
        if isinstance(exc, DomainError):
            return failure(exc.code.value, exc.message, status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, ValidationError):
            return failure(
                "VALIDATION_ERROR",
                "Invalid request data",
                status.HTTP_400_BAD_REQUEST,
                details=exc.detail,
            )
        if isinstance(exc, APIException):
            return failure(exc.default_code.upper(), str(exc.detail), exc.status_code)
        logger.exception("Unhandled error in %s", type(self).__name__)
        return failure(
            "INTERNAL_ERROR",
            "Error computing availability",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


class DayDetailsView(AvailabilityAPIView):
    """Handler for GET /api/admin/availability/day-details?date=YYYY-MM-DD"""

    def get(self, request: Request) -> Response:
        details = self.get_service().get_day_details(request.query_params.get("date"))
        return success(DayDetailsSerializer(details).data)


class MonthAvailabilityView(AvailabilityAPIView):
    """Handler for GET /api/admin/availability/month?year=YYYY&month=M"""

    def get(self, request: Request) -> Response:
        year, month = parse_year_month(
            request.query_params.get("year"), request.query_params.get("month")
        )
        summaries = self.get_service().get_month_availability(year, month)
        return success(
            {key: DayAvailabilitySerializer(summary).data for key, summary in summaries.items()}
        )


class AvailableBlocksView(AvailabilityAPIView):
    """Handler for GET /api/reservations/available-blocks?date=YYYY-MM-DD"""

    def get(self, request: Request) -> Response:
        blocks = self.get_service().get_available_blocks(request.query_params.get("date"))
        return success(AvailableBlocksSerializer(blocks).data)


class AvailabilityRangeView(AvailabilityAPIView):
    """Handler for GET /api/reservations/availability?start_date=&end_date="""

    def get(self, request: Request) -> Response:
        levels = self.get_service().get_availability_range(
            request.query_params.get("start_date"),
            request.query_params.get("end_date"),
        )
        return success({key: level.value for key, level in levels.items()})


class SystemConfigurationView(AvailabilityAPIView):
    """Handler for GET|PUT /api/admin/system-config"""

    def get(self, request: Request) -> Response:
        configuration = self.get_service().get_configuration()
        return success(SystemConfigurationSerializer(configuration).data)

    def put(self, request: Request) -> Response:
        serializer = SystemConfigurationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        stored = self.get_service().update_configuration(serializer.to_domain())
        return success(SystemConfigurationSerializer(stored).data)


class RestDayFeeView(AvailabilityAPIView):
    """Handler for GET /api/reservations/rest-day-fee?date=YYYY-MM-DD"""

    def get(self, request: Request) -> Response:
        date_param = request.query_params.get("date")
        fee = self.get_service().get_rest_day_fee(date_param)
        return success({"date": date_param.strip(), "fee": str(fee)})

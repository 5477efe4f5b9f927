"""Domain error codes for the availability module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    NO_ACTIVE_CONFIGURATION = "NO_ACTIVE_CONFIGURATION"
    INVALID_TIME_FORMAT = "INVALID_TIME_FORMAT"
    INVALID_SCHEDULE = "INVALID_SCHEDULE"
    INVALID_DATE = "INVALID_DATE"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_MONTH = "INVALID_MONTH"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NoActiveConfigurationError(DomainError):
    """Raised when no active system configuration exists."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_ACTIVE_CONFIGURATION,
            message="No active system configuration found",
        )


class InvalidTimeFormatError(DomainError):
    """Raised when a wall-clock time is not a valid HH:MM string."""

    def __init__(self, value: object) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TIME_FORMAT,
            message=f"Invalid time {value!r}, expected HH:MM",
        )
        self.value = value


class InvalidScheduleError(DomainError):
    """Raised when a time block or rest day violates its invariants."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_SCHEDULE, message=message)


class InvalidDateError(DomainError):
    """Raised when a date parameter is not a valid YYYY-MM-DD string."""

    def __init__(self, value: object) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DATE,
            message=f"Invalid date {value!r}, expected YYYY-MM-DD",
        )
        self.value = value


class InvalidDateRangeError(DomainError):
    """Raised when a date range is reversed or too long."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_DATE_RANGE, message=message)


class InvalidMonthError(DomainError):
    """Raised when a year/month pair is out of range."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_MONTH,
            message="Year and month are required and must be valid",
        )

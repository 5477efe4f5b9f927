"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import date

from availability.domain import Booking, SystemConfiguration


class ConfigurationStore(ABC):
    """Interface for system configuration persistence."""

    @abstractmethod
    def get_active_configuration(self) -> SystemConfiguration | None:
        """Return the active configuration, or None if none is active."""
        ...

    @abstractmethod
    def save_configuration(self, configuration: SystemConfiguration) -> SystemConfiguration:
        """Replace the active configuration and return what was stored."""
        ...


class BookingStore(ABC):
    """Interface for reservation lookups."""

    @abstractmethod
    def list_active_bookings(self, start: date, end: date) -> list[Booking]:
        """Return non-cancelled bookings whose event falls between start and end.

        Implementations may return extra bookings just outside the range; the
        engine filters by local calendar day.
        """
        ...

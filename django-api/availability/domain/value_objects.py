"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Self

from availability.domain.errors import InvalidTimeFormatError

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True, order=True)
class WallClockTime:
    """Time of day stored as minutes since midnight."""

    minutes: int

    def __post_init__(self) -> None:
        if not 0 <= self.minutes < MINUTES_PER_DAY:
            raise InvalidTimeFormatError(str(self.minutes))

    @classmethod
    def from_string(cls, value: str) -> Self:
        match = TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise InvalidTimeFormatError(value)
        return cls(minutes=int(match.group(1)) * 60 + int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.minutes // 60:02d}:{self.minutes % 60:02d}"


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0"))

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


def hours_to_minutes(hours: float) -> int:
    """Convert a fractional hour count (e.g. 3.5) to whole minutes."""
    return int(round(float(hours) * 60))

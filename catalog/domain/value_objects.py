"""Domain primitives that enforce validity at creation time."""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Self

from catalog.domain.errors import InvalidCityError


class City(Enum):
    """Cities with a curated catalog."""

    CHICAGO = "chicago"
    MINNEAPOLIS = "minneapolis"

    @classmethod
    def from_string(cls, value: str) -> Self:
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidCityError(value) from None

    @property
    def label(self) -> str:
        return self.value.title()


@dataclass(frozen=True)
class EventId:
    """Opaque unique identifier for an Event within a city's catalog."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("EventId cannot be blank")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UserId:
    """Opaque identifier handed out by the auth provider."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("UserId cannot be blank")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Range:
    """Inclusive numeric range."""

    low: float
    high: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.low) and math.isfinite(self.high)):
            raise ValueError("Range bounds must be finite")
        if self.low > self.high:
            raise ValueError("Range low bound cannot exceed high bound")

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high

    def widen(self, low: float | None = None, high: float | None = None) -> Self:
        """Return a range whose bounds are at least as wide as this one."""
        return type(self)(
            low=self.low if low is None else min(low, self.low),
            high=self.high if high is None else max(high, self.high),
        )

    def __str__(self) -> str:
        return f"[{self.low:g}, {self.high:g}]"


def coerce_number(value: object) -> float:
    """Return ``value`` as a finite, non-negative float.

    Accepts ints, floats, Decimals and numeric text (surrounding whitespace
    is ignored). Raises ValueError for anything else.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(Decimal(value.strip()))
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}") from None
    else:
        raise ValueError(f"Not a number: {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"Not a finite number: {value!r}")
    if number < 0:
        raise ValueError(f"Negative number: {value!r}")
    return number

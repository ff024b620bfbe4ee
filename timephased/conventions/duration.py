"""
Immutable duration value used for work quantities.

Durations carry a magnitude and a unit. Arithmetic keeps the unit of the left
operand; equality and ordering compare the normalized minute value.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Union

from .types import TimeUnit

# Tolerance (in minutes) for "effectively equal" work values
EQUALITY_DELTA = 0.1


@total_ordering
@dataclass(frozen=True, eq=False)
class Duration:
    """A work or elapsed-time quantity."""

    amount: float
    unit: TimeUnit = TimeUnit.MINUTES

    @classmethod
    def of_minutes(cls, minutes: float) -> "Duration":
        return cls(float(minutes), TimeUnit.MINUTES)

    @classmethod
    def of_hours(cls, hours: float) -> "Duration":
        return cls(float(hours), TimeUnit.HOURS)

    @classmethod
    def zero(cls, unit: TimeUnit = TimeUnit.MINUTES) -> "Duration":
        return cls(0.0, unit)

    @property
    def minutes(self) -> float:
        """Magnitude expressed in minutes."""
        return self.amount * self.unit.minutes()

    def to(self, unit: TimeUnit) -> "Duration":
        """Convert to another unit without changing the underlying magnitude."""
        if unit == self.unit:
            return self
        return Duration(self.minutes / unit.minutes(), unit)

    def is_zero(self) -> bool:
        return self.amount == 0

    def equals(self, other: "Duration", delta: float = EQUALITY_DELTA) -> bool:
        """Compare minute values within ``delta`` minutes."""
        return abs(self.minutes - other.minutes) <= delta

    def scale(self, factor: float) -> "Duration":
        return Duration(self.amount * factor, self.unit)

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.amount + other.to(self.unit).amount, self.unit)

    def __sub__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.amount - other.to(self.unit).amount, self.unit)

    def __mul__(self, factor: Union[int, float]) -> "Duration":
        return self.scale(factor)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.minutes == other.minutes

    def __lt__(self, other: "Duration") -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.minutes < other.minutes

    def __hash__(self) -> int:
        return hash(self.minutes)

    def __str__(self) -> str:
        return f"{self.amount:g}{self.unit.value}"

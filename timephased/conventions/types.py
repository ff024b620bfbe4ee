"""
Basic types and enums used across the normalisation pipeline.
"""

from enum import Enum

# Minutes in a canonical working day / week as stored by the scheduling format
MINUTES_PER_HOUR = 60
CANONICAL_DAY_MINUTES = 480.0
CANONICAL_WEEK_MINUTES = 2400.0


class TimeUnit(Enum):
    """Duration units."""

    MINUTES = "m"
    HOURS = "h"
    DAYS = "d"
    WEEKS = "w"

    def minutes(self) -> float:
        """Size of one unit in minutes."""
        return _MINUTES_PER_UNIT[self]


_MINUTES_PER_UNIT = {
    TimeUnit.MINUTES: 1.0,
    TimeUnit.HOURS: float(MINUTES_PER_HOUR),
    TimeUnit.DAYS: CANONICAL_DAY_MINUTES,
    TimeUnit.WEEKS: CANONICAL_WEEK_MINUTES,
}

# Registry
TIME_UNITS = {
    "M": TimeUnit.MINUTES,
    "MIN": TimeUnit.MINUTES,
    "MINUTES": TimeUnit.MINUTES,
    "H": TimeUnit.HOURS,
    "HOURS": TimeUnit.HOURS,
    "D": TimeUnit.DAYS,
    "DAYS": TimeUnit.DAYS,
    "W": TimeUnit.WEEKS,
    "WEEKS": TimeUnit.WEEKS,
}


def get_time_unit(name: str) -> TimeUnit:
    """Get a time unit by name or abbreviation."""
    name_upper = name.upper().strip()
    if name_upper not in TIME_UNITS:
        raise ValueError(
            f"Unknown time unit: {name}. "
            f"Available: {list(TIME_UNITS.keys())}"
        )
    return TIME_UNITS[name_upper]

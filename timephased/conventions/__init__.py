"""
Units, durations and tolerance conventions.
"""

from .duration import EQUALITY_DELTA, Duration
from .types import (
    CANONICAL_DAY_MINUTES,
    CANONICAL_WEEK_MINUTES,
    MINUTES_PER_HOUR,
    TimeUnit,
    get_time_unit,
)

__all__ = [
    "Duration",
    "EQUALITY_DELTA",
    "TimeUnit",
    "get_time_unit",
    "CANONICAL_DAY_MINUTES",
    "CANONICAL_WEEK_MINUTES",
    "MINUTES_PER_HOUR",
]

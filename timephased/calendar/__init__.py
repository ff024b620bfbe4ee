"""
Working-time calendars.
"""

from .base import MAX_NONWORKING_DAYS, BaseCalendar, ProjectCalendar
from .working import (
    ALL_DAY,
    CALENDARS,
    EIGHT_HOUR_DAY,
    STANDARD_HOURS,
    WorkingCalendar,
    get_calendar,
    get_default_calendar,
    set_default_calendar,
)

__all__ = [
    "ProjectCalendar",
    "BaseCalendar",
    "WorkingCalendar",
    "MAX_NONWORKING_DAYS",
    "STANDARD_HOURS",
    "EIGHT_HOUR_DAY",
    "ALL_DAY",
    "CALENDARS",
    "get_calendar",
    "get_default_calendar",
    "set_default_calendar",
]

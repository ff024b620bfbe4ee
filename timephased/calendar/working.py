"""
QuantLib-backed working-time calendars.

Business days come from a QuantLib calendar; working hours are applied on top
of each business day. Extra holidays and working-date exceptions are kept on
the instance because QuantLib calendars of the same type share holiday state.
"""

from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

import QuantLib as ql

from .base import BaseCalendar, WorkingRange
from .date_utils import MIDNIGHT, set_finish_time, set_time, to_date

HoursSpec = Sequence[Tuple[time, time]]

# Standard project hours: 08:00-12:00 and 13:00-17:00
STANDARD_HOURS: HoursSpec = ((time(8, 0), time(12, 0)), (time(13, 0), time(17, 0)))
EIGHT_HOUR_DAY: HoursSpec = ((time(8, 0), time(16, 0)),)
ALL_DAY: HoursSpec = ((MIDNIGHT, MIDNIGHT),)


def _to_ql_date(dt: Union[date, datetime]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    py_date = to_date(dt)
    return ql.Date(py_date.day, py_date.month, py_date.year)


def _validate_hours(hours: HoursSpec) -> Tuple[Tuple[time, time], ...]:
    """Check ranges are ordered and non-overlapping. 00:00 as an end means end of day."""
    previous_end: Optional[time] = None
    for start, end in hours:
        if end != MIDNIGHT and end <= start:
            raise ValueError(f"Working range must end after it starts: {start}-{end}")
        if previous_end is not None and (previous_end == MIDNIGHT or start < previous_end):
            raise ValueError(f"Working ranges overlap or are unordered at {start}")
        previous_end = end
    return tuple(hours)


class WorkingCalendar(BaseCalendar):
    """Working-time calendar on top of a QuantLib business-day calendar."""

    def __init__(
        self,
        name: str,
        ql_calendar: ql.Calendar,
        working_hours: HoursSpec = STANDARD_HOURS,
        weekday_hours: Optional[Dict[int, HoursSpec]] = None,
    ):
        """
        Initialize working calendar.

        Args:
            name: Calendar name
            ql_calendar: QuantLib calendar deciding business days
            working_hours: Default working ranges for every business day
            weekday_hours: Per-weekday overrides (0=Monday); an empty
                sequence makes that weekday non-working
        """
        super().__init__(name)
        self._ql_calendar = ql_calendar
        self.working_hours = _validate_hours(working_hours)
        self.weekday_hours = {
            weekday: _validate_hours(hours)
            for weekday, hours in (weekday_hours or {}).items()
        }
        self._holidays: Set[date] = set()
        self._working_dates: Set[date] = set()

    def add_holiday(self, day: Union[date, datetime]) -> None:
        """Mark a date as non-working."""
        day = to_date(day)
        self._working_dates.discard(day)
        self._holidays.add(day)

    def add_holidays(self, days: Iterable[Union[date, datetime]]) -> None:
        for day in days:
            self.add_holiday(day)

    def add_working_date(self, day: Union[date, datetime]) -> None:
        """Mark a date as working even if QuantLib considers it a holiday."""
        day = to_date(day)
        self._holidays.discard(day)
        self._working_dates.add(day)

    def is_business_day(self, day: Union[date, datetime]) -> bool:
        """Business day according to QuantLib and the local exceptions."""
        day = to_date(day)
        if day in self._holidays:
            return False
        if day in self._working_dates:
            return True
        return self._ql_calendar.isBusinessDay(_to_ql_date(day))

    def hours_for(self, day: Union[date, datetime]) -> Tuple[Tuple[time, time], ...]:
        day = to_date(day)
        if day in self._working_dates:
            # explicit working dates always use the default hours
            return self.working_hours
        return self.weekday_hours.get(day.weekday(), self.working_hours)

    def working_ranges(self, day: Union[date, datetime]) -> List[WorkingRange]:
        if not self.is_business_day(day):
            return []
        return [
            (set_time(day, start), set_finish_time(day, end))
            for start, end in self.hours_for(day)
        ]


def standard_calendar() -> WorkingCalendar:
    """Weekends off, 08:00-12:00 and 13:00-17:00."""
    return WorkingCalendar("STANDARD", ql.WeekendsOnly(), STANDARD_HOURS)


def eight_hour_calendar() -> WorkingCalendar:
    """Weekends off, 08:00-16:00."""
    return WorkingCalendar("EIGHT_HOUR", ql.WeekendsOnly(), EIGHT_HOUR_DAY)


def target_calendar() -> WorkingCalendar:
    """TARGET holidays with standard hours."""
    return WorkingCalendar("TARGET", ql.TARGET(), STANDARD_HOURS)


def twenty_four_hour_calendar() -> WorkingCalendar:
    """Every day, around the clock."""
    return WorkingCalendar("24_HOURS", ql.NullCalendar(), ALL_DAY)


# Calendar registry; calendars carry mutable exceptions so each lookup builds a new one
CALENDARS = {
    "STANDARD": standard_calendar,
    "EIGHT_HOUR": eight_hour_calendar,
    "TARGET": target_calendar,
    "EUR": target_calendar,  # Alias
    "24_HOURS": twenty_four_hour_calendar,
}


def get_calendar(name: str) -> WorkingCalendar:
    """
    Get a calendar by name.

    Args:
        name: Calendar name ("STANDARD", "EIGHT_HOUR", "TARGET", "EUR" or "24_HOURS")
    """
    key = name.upper()
    if key not in CALENDARS:
        raise ValueError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[key]()


# Default calendar used when the caller does not pass one
_DEFAULT_CALENDAR: Optional[WorkingCalendar] = None  # Will be initialized on first use
DEFAULT_CALENDAR = "STANDARD"


def get_default_calendar() -> WorkingCalendar:
    """Get default calendar, initializing if needed."""
    global _DEFAULT_CALENDAR
    if _DEFAULT_CALENDAR is None:
        _DEFAULT_CALENDAR = get_calendar(DEFAULT_CALENDAR)
    return _DEFAULT_CALENDAR


def set_default_calendar(calendar_name: str) -> None:
    """Set the default calendar used by the pipeline."""
    global _DEFAULT_CALENDAR
    _DEFAULT_CALENDAR = get_calendar(calendar_name)

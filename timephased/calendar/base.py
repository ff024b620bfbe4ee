"""
Calendar abstractions consumed by the normalisation pipeline.

The pipeline only ever queries a calendar; it never mutates one. Any object
implementing the ProjectCalendar protocol can be passed in. BaseCalendar
derives every query from a single per-day list of working ranges.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from typing import List, Optional, Protocol, Tuple, Union, runtime_checkable

from timephased.conventions import Duration, TimeUnit

from .date_utils import add_days, day_start, to_date

logger = logging.getLogger(__name__)

# Give up looking for a working day after this many consecutive non-working days
MAX_NONWORKING_DAYS = 1000

WorkingRange = Tuple[datetime, datetime]


@runtime_checkable
class ProjectCalendar(Protocol):
    """
    Protocol for the calendar queries the pipeline depends on.
    """

    def is_working_date(self, day: Union[date, datetime]) -> bool:
        """True if any work can happen on this date."""
        ...

    def get_finish_time(self, day: Union[date, datetime]) -> Optional[time]:
        """Time of day at which work ends on this date, None if non-working."""
        ...

    def get_work(
        self, start: datetime, finish: datetime, unit: TimeUnit = TimeUnit.MINUTES
    ) -> Duration:
        """Working time between two timestamps."""
        ...

    def get_day_work(
        self, day: Union[date, datetime], unit: TimeUnit = TimeUnit.MINUTES
    ) -> Duration:
        """Total working time on a date."""
        ...

    def get_next_work_start(self, timestamp: datetime) -> datetime:
        """Start of the next working period at or after a timestamp."""
        ...


class BaseCalendar(ABC):
    """
    Abstract base class for calendars.

    Subclasses provide ``working_ranges``; all pipeline queries are derived
    from it.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def working_ranges(self, day: Union[date, datetime]) -> List[WorkingRange]:
        """Ordered, non-overlapping working periods on a date (empty if non-working)."""
        pass

    def is_working_date(self, day: Union[date, datetime]) -> bool:
        return bool(self.working_ranges(day))

    def get_finish_time(self, day: Union[date, datetime]) -> Optional[time]:
        ranges = self.working_ranges(day)
        if not ranges:
            return None
        return ranges[-1][1].time()

    def get_work(
        self, start: datetime, finish: datetime, unit: TimeUnit = TimeUnit.MINUTES
    ) -> Duration:
        """Sum the overlap of [start, finish) with every working range in the span."""
        if finish <= start:
            return Duration.zero(unit)

        minutes = 0.0
        current = to_date(start)
        last = to_date(finish)
        while current <= last:
            for range_start, range_finish in self.working_ranges(current):
                overlap_start = max(start, range_start)
                overlap_finish = min(finish, range_finish)
                if overlap_finish > overlap_start:
                    minutes += (overlap_finish - overlap_start).total_seconds() / 60.0
            current = add_days(day_start(current), 1).date()

        return Duration.of_minutes(minutes).to(unit)

    def get_day_work(
        self, day: Union[date, datetime], unit: TimeUnit = TimeUnit.MINUTES
    ) -> Duration:
        start = day_start(day)
        return self.get_work(start, add_days(start, 1), unit)

    def get_next_work_start(self, timestamp: datetime) -> datetime:
        """
        Next working period start at or after ``timestamp``.

        A timestamp inside a working range is returned unchanged; a timestamp
        equal to a range end is not inside that range.
        """
        for range_start, range_finish in self.working_ranges(timestamp):
            if timestamp < range_finish:
                return max(timestamp, range_start)

        day = day_start(timestamp)
        for _ in range(MAX_NONWORKING_DAYS):
            day = add_days(day, 1)
            ranges = self.working_ranges(day)
            if ranges:
                return ranges[0][0]

        logger.warning(
            "No working period found within %s days of %s on calendar %s",
            MAX_NONWORKING_DAYS,
            timestamp,
            self.name,
        )
        return timestamp

    def __str__(self) -> str:
        return self.name

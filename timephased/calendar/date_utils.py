"""
Date and timestamp helpers for day-level arithmetic.
"""

from datetime import date, datetime, time
from typing import Union

from dateutil.relativedelta import relativedelta
from pandas import Timestamp

DATE_FMT = "%Y-%m-%d"
DATETIME_FMTS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M")

MIDNIGHT = time(0, 0)

DateLike = Union[str, date, datetime, Timestamp]


def to_datetime(value: DateLike) -> datetime:
    """
    Convert a string, date, datetime or pandas Timestamp to a naive datetime.
    Dates map to midnight. Strings accept ISO formats with or without seconds.
    """
    if isinstance(value, Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, MIDNIGHT)
    if isinstance(value, str):
        for fmt in DATETIME_FMTS + (DATE_FMT,):
            try:
                return datetime.strptime(value.strip(), fmt)
            except ValueError:
                continue
        raise ValueError(f"Unsupported timestamp format: {value!r}")
    raise TypeError(f"Unsupported type for timestamp: {type(value)}")


def to_date(value: DateLike) -> date:
    """Calendar date of a date-like value."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return to_datetime(value).date()


def day_start(dt: Union[date, datetime]) -> datetime:
    """Midnight at the start of the day containing ``dt``."""
    return datetime.combine(to_date(dt), MIDNIGHT)


def add_days(dt: datetime, days: int) -> datetime:
    """Shift a timestamp by whole calendar days."""
    return dt + relativedelta(days=days)


def set_time(day: Union[date, datetime], tod: time) -> datetime:
    """Combine the date of ``day`` with a time of day."""
    return datetime.combine(to_date(day), tod)


def set_finish_time(day: Union[date, datetime], tod: time) -> datetime:
    """
    Combine the date of ``day`` with a finish time of day.
    A finish time of 00:00 is the end of the day, i.e. midnight of the next day.
    """
    if tod == MIDNIGHT:
        return day_start(day) + relativedelta(days=1)
    return set_time(day, tod)


def start_day_of(start: datetime) -> date:
    return start.date()


def finish_day_of(finish: datetime) -> date:
    """
    Calendar day a finish timestamp belongs to.
    Midnight is an exclusive boundary, so it belongs to the previous day.
    """
    if finish.time() == MIDNIGHT:
        return finish.date() - relativedelta(days=1)
    return finish.date()

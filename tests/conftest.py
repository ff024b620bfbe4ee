"""Shared fixtures for normalisation tests.

All dates fall in the week of Monday 2024-03-04 (weekend 2024-03-09/10).
"""

import pytest

from timephased.calendar import get_calendar
from timephased.calendar.date_utils import to_datetime
from timephased.conventions import Duration
from timephased.schedule import AssignmentSegment


@pytest.fixture
def calendar():
    """Mon-Fri 08:00-16:00, 480 minutes per day."""
    return get_calendar("EIGHT_HOUR")


@pytest.fixture
def standard_calendar():
    """Mon-Fri 08:00-12:00 and 13:00-17:00."""
    return get_calendar("STANDARD")


@pytest.fixture
def make_segment():
    """Build a segment from timestamp strings and minute values."""

    def _make(start, finish, total_work, work_per_day=480.0):
        return AssignmentSegment(
            start=to_datetime(start),
            finish=to_datetime(finish),
            total_work=Duration.of_minutes(total_work),
            work_per_day=None if work_per_day is None else Duration.of_minutes(work_per_day),
        )

    return _make

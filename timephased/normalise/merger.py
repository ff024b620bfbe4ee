"""
Same-day merger: collapse segments falling on the same calendar day.
"""

import logging
from typing import Iterable, List, Optional

from timephased.calendar.base import ProjectCalendar
from timephased.conventions import Duration, TimeUnit
from timephased.schedule.core import AssignmentSegment

logger = logging.getLogger(__name__)


def _with_own_rate(segment: AssignmentSegment) -> AssignmentSegment:
    """A single-day segment's daily rate is its own work."""
    return segment.with_work(segment.total_work, segment.total_work)


def is_calendar_adjacent(
    calendar: ProjectCalendar,
    previous: AssignmentSegment,
    segment: AssignmentSegment,
) -> bool:
    """True if ``segment`` starts where ``previous`` ends, allowing for non-working gaps."""
    if previous.finish == segment.start:
        return True
    return calendar.get_next_work_start(previous.finish) == segment.start


def merge_same_day(
    calendar: ProjectCalendar,
    segments: Iterable[AssignmentSegment],
) -> List[AssignmentSegment]:
    """
    Merge together assignment data for the same day.

    Segments with neither calendar working time nor work are dropped.

    Args:
        calendar: Calendar used for adjacency and working time
        segments: Day-split segments ordered by start

    Returns:
        New list with work_per_day set to each segment's own total work
    """
    result: List[AssignmentSegment] = []
    previous: Optional[AssignmentSegment] = None

    for segment in segments:
        if previous is None:
            segment = _with_own_rate(segment)
            result.append(segment)
        elif previous.start_day != segment.start_day:
            segment = _with_own_rate(segment)
            result.append(segment)
        else:
            previous_work = previous.total_work
            work = segment.total_work

            if not previous_work.is_zero() and work.is_zero():
                logger.debug("Skipping zero-work segment %s", segment)
                continue

            if is_calendar_adjacent(calendar, previous, segment):
                if not previous_work.is_zero() and not work.is_zero():
                    segment = AssignmentSegment(
                        previous.start,
                        segment.finish,
                        Duration.of_minutes(previous_work.minutes + work.minutes),
                    )
                    logger.debug("Merged same-day segments into %s", segment)
                elif work.is_zero():
                    segment = previous
                # previous is result[-1]; the resolved segment takes its place
                segment = _with_own_rate(segment)
                result[-1] = segment
            else:
                segment = _with_own_rate(segment)
                result.append(segment)

        calendar_work = calendar.get_work(segment.start, segment.finish, TimeUnit.MINUTES)
        if calendar_work.is_zero() and segment.total_work.is_zero():
            logger.debug("Dropping empty segment %s", segment)
            result.pop()
        else:
            previous = segment

    return result

"""
Day splitter: break multi-day segments into one segment per calendar day.

Work is pro-rated against the assignment's daily rate using the calendar's
working time. Rates are expressed against a fixed canonical day length
(480 minutes by default), not the calendar's own day length.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from timephased.calendar.base import ProjectCalendar
from timephased.calendar.date_utils import add_days, day_start, set_finish_time
from timephased.conventions import Duration, TimeUnit
from timephased.schedule.core import AssignmentSegment

from .config import NormaliserConfig

logger = logging.getLogger(__name__)

SplitPair = Tuple[Optional[AssignmentSegment], Optional[AssignmentSegment]]


def prorate(
    work_per_day: Duration,
    calendar_work: Duration,
    canonical_day_minutes: float,
) -> Duration:
    """Scale a daily rate by calendar working minutes over the canonical day."""
    minutes = work_per_day.minutes * calendar_work.minutes / canonical_day_minutes
    return Duration.of_minutes(minutes)


def _require_rate(segment: AssignmentSegment) -> Duration:
    if segment.work_per_day is None:
        raise ValueError(f"work_per_day must be set before pro-rating {segment}")
    return segment.work_per_day


def _day_finish(calendar: ProjectCalendar, start: datetime) -> Optional[datetime]:
    """End of work on the start date, never earlier than ``start``."""
    finish_time = calendar.get_finish_time(start)
    if finish_time is None:
        return None
    return max(set_finish_time(start, finish_time), start)


def attributed_work(
    calendar: ProjectCalendar,
    segment: AssignmentSegment,
    canonical_day_minutes: float,
) -> Duration:
    """Pro-rata work carried out on the segment's start date."""
    work_per_day = _require_rate(segment)
    split_finish = _day_finish(calendar, segment.start)
    if split_finish is None:
        return Duration.zero()
    calendar_split_work = calendar.get_work(segment.start, split_finish, TimeUnit.MINUTES)
    return prorate(work_per_day, calendar_split_work, canonical_day_minutes)


def split_first_day(
    calendar: ProjectCalendar,
    segment: AssignmentSegment,
    canonical_day_minutes: float,
) -> SplitPair:
    """
    Split the first day off a segment.

    Returns:
        (first day, remainder); either may be None. Both are None when the
        calendar has no working time over the whole segment.
    """
    calendar_work = calendar.get_work(segment.start, segment.finish, TimeUnit.MINUTES)
    if calendar_work.is_zero():
        logger.debug("No calendar work in %s, dropping", segment)
        return None, None

    first: Optional[AssignmentSegment] = None
    first_minutes = 0.0
    if calendar.is_working_date(segment.start):
        work_per_day = _require_rate(segment)
        split_finish = _day_finish(calendar, segment.start)
        calendar_split_work = calendar.get_work(segment.start, split_finish, TimeUnit.MINUTES)
        calendar_work_per_day = calendar.get_day_work(segment.start, TimeUnit.MINUTES)

        # A full calendar day at exactly the daily rate keeps the rate as-is
        if calendar_split_work == calendar_work_per_day and calendar_split_work == work_per_day:
            split_work = work_per_day.to(TimeUnit.MINUTES)
        else:
            split_work = prorate(work_per_day, calendar_split_work, canonical_day_minutes)

        first = AssignmentSegment(segment.start, split_finish, split_work, work_per_day)
        first_minutes = split_work.minutes
    else:
        split_finish = segment.start

    remainder_start = calendar.get_next_work_start(split_finish)
    if remainder_start > segment.finish:
        return first, None
    if first is None and remainder_start <= segment.start:
        logger.warning("Calendar %s has no working period after %s", calendar, segment.start)
        return None, None

    remainder = AssignmentSegment(
        remainder_start,
        segment.finish,
        Duration.of_minutes(segment.total_work.minutes - first_minutes),
        segment.work_per_day,
    )
    return first, remainder


def _split_single_day(
    calendar: ProjectCalendar,
    segment: AssignmentSegment,
    config: NormaliserConfig,
) -> Tuple[List[AssignmentSegment], bool]:
    """Cap a one-day segment at its pro-rata work, pushing any excess to the next day."""
    total_work = segment.total_work
    assigned = attributed_work(calendar, segment, config.canonical_day_minutes)
    excess = total_work.minutes - assigned.minutes
    if excess <= config.equality_delta:
        return [segment], False

    remainder_start = add_days(day_start(segment.finish_day), 1)
    remainder = AssignmentSegment(
        remainder_start,
        add_days(remainder_start, 1),
        Duration.of_minutes(excess),
        segment.work_per_day,
    )
    logger.debug("Moving %.4f minutes from %s to %s", excess, segment.start_day, remainder.start_day)
    return [segment.with_work(assigned), remainder], True


def split_segment(
    calendar: ProjectCalendar,
    segment: AssignmentSegment,
    config: NormaliserConfig,
    shift_start: bool = False,
) -> Tuple[List[AssignmentSegment], bool]:
    """
    Split one segment into per-day pieces.

    Args:
        calendar: Calendar used for working time
        segment: Segment to split
        config: Pipeline configuration
        shift_start: The previous segment pushed work into the next day, so this
            segment starts one day later

    Returns:
        (pieces, remainder_inserted); the flag is passed as ``shift_start``
        when splitting the following segment
    """
    if shift_start:
        segment = replace(segment, start=add_days(segment.start, 1))

    pieces: List[AssignmentSegment] = []
    current: Optional[AssignmentSegment] = segment
    while current is not None:
        if current.is_single_day():
            day_pieces, remainder_inserted = _split_single_day(calendar, current, config)
            pieces.extend(day_pieces)
            return pieces, remainder_inserted

        first, current = split_first_day(calendar, current, config.canonical_day_minutes)
        if first is not None:
            pieces.append(first)
    return pieces, False


def split_days(
    calendar: ProjectCalendar,
    segments: Iterable[AssignmentSegment],
    config: Optional[NormaliserConfig] = None,
) -> List[AssignmentSegment]:
    """
    Break spans of time into individual days.

    Args:
        calendar: Calendar used for working time
        segments: Segments ordered by start
        config: Pipeline configuration (defaults if omitted)

    Returns:
        New list of segments, each confined to a single day, apart from
        remainder segments which cover the whole following day
    """
    if config is None:
        config = NormaliserConfig()

    result: List[AssignmentSegment] = []
    remainder_inserted = False
    for segment in segments:
        pieces, remainder_inserted = split_segment(calendar, segment, config, remainder_inserted)
        result.extend(pieces)
    return result

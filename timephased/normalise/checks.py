"""
Post-condition checks for normalised segment lists.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from timephased.calendar.base import ProjectCalendar
from timephased.conventions import EQUALITY_DELTA, TimeUnit
from timephased.schedule.core import AssignmentSegment

logger = logging.getLogger(__name__)


class NormalisationError(RuntimeError):
    """Raised when a normalised list fails a post-condition."""


def total_work_minutes(segments: Sequence[AssignmentSegment]) -> float:
    """Sum of total work in minutes."""
    if not segments:
        return 0.0
    minutes = np.fromiter((s.total_work.minutes for s in segments), dtype=float, count=len(segments))
    return float(minutes.sum())


def check_conservation(
    before: Sequence[AssignmentSegment],
    after: Sequence[AssignmentSegment],
    delta: float = EQUALITY_DELTA,
) -> bool:
    """Total work is preserved within ``delta`` minutes per input segment."""
    tolerance = delta * max(len(before), 1)
    drift = total_work_minutes(after) - total_work_minutes(before)
    if not np.isclose(drift, 0.0, rtol=0.0, atol=tolerance):
        logger.warning("Total work drifted by %.4f minutes (tolerance %.4f)", drift, tolerance)
        return False
    return True


def check_single_day(segments: Sequence[AssignmentSegment]) -> bool:
    """Every segment starts and finishes on the same calendar day (midnight finishes count as the previous day)."""
    return all(s.is_single_day() for s in segments)


def check_no_same_day_duplicates(segments: Sequence[AssignmentSegment]) -> bool:
    days = [s.start_day for s in segments]
    return len(days) == len(set(days))


def check_no_noise(calendar: ProjectCalendar, segments: Sequence[AssignmentSegment]) -> bool:
    """No segment has both zero calendar working time and zero work."""
    for segment in segments:
        calendar_work = calendar.get_work(segment.start, segment.finish, TimeUnit.MINUTES)
        if calendar_work.is_zero() and segment.total_work.is_zero():
            return False
    return True


def assert_normalised(
    calendar: ProjectCalendar,
    segments: Sequence[AssignmentSegment],
    original: Optional[Sequence[AssignmentSegment]] = None,
) -> None:
    """
    Check a same-day merged list.

    Raises:
        NormalisationError: naming the first failing property
    """
    if not check_single_day(segments):
        raise NormalisationError("Segment spans more than one day")
    if not check_no_same_day_duplicates(segments):
        raise NormalisationError("More than one segment on the same day")
    if not check_no_noise(calendar, segments):
        raise NormalisationError("Segment with neither calendar work nor work")
    if original is not None and not check_conservation(original, segments):
        raise NormalisationError("Total work not conserved")

"""
Same-rate merger: compact consecutive days worked at the same daily rate.
"""

import logging
from typing import Iterable, List, Optional

from timephased.conventions import Duration
from timephased.schedule.core import AssignmentSegment

from .config import RATE_EQUALITY_DELTA

logger = logging.getLogger(__name__)


def _rate(segment: AssignmentSegment) -> Duration:
    return segment.work_per_day if segment.work_per_day is not None else segment.total_work


def merge_same_work(
    segments: Iterable[AssignmentSegment],
    delta: float = RATE_EQUALITY_DELTA,
) -> List[AssignmentSegment]:
    """
    Merge runs of consecutive segments sharing the same daily rate.

    The merged segment spans the run, sums its total work and keeps the
    run's daily rate.

    Args:
        segments: Per-day segments ordered by start
        delta: Tolerance in minutes when comparing rates

    Returns:
        New, compacted list of segments
    """
    result: List[AssignmentSegment] = []
    previous: Optional[AssignmentSegment] = None

    for segment in segments:
        if previous is not None and _rate(previous).equals(_rate(segment), delta):
            merged = AssignmentSegment(
                previous.start,
                segment.finish,
                Duration.of_minutes(previous.total_work.minutes + segment.total_work.minutes),
                _rate(previous),
            )
            result[-1] = merged
            previous = merged
            continue

        segment = segment.with_work(segment.total_work, _rate(segment))
        result.append(segment)
        previous = segment

    logger.debug("Same-rate merge: %s segments", len(result))
    return result

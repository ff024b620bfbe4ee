"""Unit conversion of normalised segments."""

from typing import Iterable, List

from timephased.conventions import TimeUnit
from timephased.schedule.core import AssignmentSegment


def convert_units(
    segments: Iterable[AssignmentSegment],
    unit: TimeUnit = TimeUnit.HOURS,
) -> List[AssignmentSegment]:
    """Express total work and daily rate of every segment in ``unit``."""
    result: List[AssignmentSegment] = []
    for segment in segments:
        work_per_day = segment.work_per_day
        if work_per_day is not None:
            work_per_day = work_per_day.to(unit)
        result.append(segment.with_work(segment.total_work.to(unit), work_per_day))
    return result


def convert_to_hours(segments: Iterable[AssignmentSegment]) -> List[AssignmentSegment]:
    """Convert work values from minutes to hours."""
    return convert_units(segments, TimeUnit.HOURS)

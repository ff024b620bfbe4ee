"""
Core data structures for timephased assignment data.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Iterable, Optional

from timephased.calendar.date_utils import finish_day_of, start_day_of
from timephased.conventions import Duration


class SegmentValidationError(ValueError):
    """Raised when a segment list violates the upstream producer contract."""


@dataclass(frozen=True)
class AssignmentSegment:
    """Work recorded against an assignment over [start, finish)."""

    start: datetime
    finish: datetime
    total_work: Duration
    work_per_day: Optional[Duration] = None

    @property
    def start_day(self) -> date:
        return start_day_of(self.start)

    @property
    def finish_day(self) -> date:
        """Day of the finish timestamp; a midnight finish belongs to the previous day."""
        return finish_day_of(self.finish)

    def is_single_day(self) -> bool:
        return self.start_day == self.finish_day

    def with_work(
        self,
        total_work: Duration,
        work_per_day: Optional[Duration] = None,
    ) -> "AssignmentSegment":
        """Copy with new work values; ``work_per_day`` is kept unless given."""
        if work_per_day is None:
            work_per_day = self.work_per_day
        return replace(self, total_work=total_work, work_per_day=work_per_day)

    def __str__(self) -> str:
        return (
            f"[start={self.start.isoformat()} finish={self.finish.isoformat()} "
            f"totalWork={self.total_work} workPerDay={self.work_per_day}]"
        )


def validate_segments(segments: Iterable[AssignmentSegment]) -> None:
    """
    Check the upstream producer contract.

    Raises:
        SegmentValidationError: on start > finish, negative work, a missing
            work_per_day or segments out of start order
    """
    previous: Optional[AssignmentSegment] = None
    for index, segment in enumerate(segments):
        if segment.start > segment.finish:
            raise SegmentValidationError(
                f"Segment {index} starts after it finishes: {segment}"
            )
        if segment.total_work.amount < 0:
            raise SegmentValidationError(
                f"Segment {index} has negative total work: {segment.total_work}"
            )
        if segment.work_per_day is None:
            raise SegmentValidationError(f"Segment {index} has no work per day")
        if segment.work_per_day.amount < 0:
            raise SegmentValidationError(
                f"Segment {index} has negative work per day: {segment.work_per_day}"
            )
        if previous is not None and segment.start < previous.start:
            raise SegmentValidationError(
                f"Segment {index} is out of order: {segment.start} < {previous.start}"
            )
        previous = segment

"""
Segment filtering strategies.
"""

from typing import Callable, List

from timephased.calendar.date_utils import DateLike, to_datetime
from timephased.schedule.core import AssignmentSegment

from .base import BaseFilter


class DateRangeFilter(BaseFilter):
    """
    Keep segments overlapping a [start, finish) window.
    """

    def __init__(self, start: DateLike, finish: DateLike):
        """
        Initialize date range filter.

        Args:
            start: Window start (inclusive)
            finish: Window finish (exclusive)
        """
        self.start = to_datetime(start)
        self.finish = to_datetime(finish)
        if self.finish < self.start:
            raise ValueError("finish must not be before start")

    def filter(self, segments: List[AssignmentSegment]) -> List[AssignmentSegment]:
        return [
            s for s in segments
            if s.start < self.finish and (s.finish > self.start or s.start >= self.start)
        ]


class CustomFilter(BaseFilter):
    """
    Filter segments using a custom predicate.
    """

    def __init__(self, predicate: Callable[[AssignmentSegment], bool]):
        self.predicate = predicate

    def filter(self, segments: List[AssignmentSegment]) -> List[AssignmentSegment]:
        return [s for s in segments if self.predicate(s)]


class CompositeFilter(BaseFilter):
    """
    Combine multiple filters using AND logic.
    """

    def __init__(self, filters: List[BaseFilter]):
        self.filters = filters

    def add_filter(self, filter_instance: BaseFilter) -> None:
        self.filters.append(filter_instance)

    def filter(self, segments: List[AssignmentSegment]) -> List[AssignmentSegment]:
        result = segments
        for f in self.filters:
            result = f.filter(result)
        return result

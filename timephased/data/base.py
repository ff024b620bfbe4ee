"""
Base abstractions for segment loading.

Defines interfaces for segment sources and segment filters.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Protocol, runtime_checkable

from timephased.calendar.date_utils import to_datetime
from timephased.conventions import Duration, TimeUnit, get_time_unit
from timephased.schedule.core import AssignmentSegment


@runtime_checkable
class SegmentSource(Protocol):
    """
    Protocol for sources of pre-normalisation segments.
    """

    def load_segments(self) -> List[AssignmentSegment]:
        """
        Load segments ordered by start.

        Returns:
            List of AssignmentSegment objects
        """
        ...


@runtime_checkable
class SegmentFilter(Protocol):
    """
    Protocol for filtering segments.
    """

    def filter(self, segments: List[AssignmentSegment]) -> List[AssignmentSegment]:
        ...


def segment_from_record(record: Mapping[str, Any]) -> AssignmentSegment:
    """
    Build a segment from a flat record.

    Args:
        record: Mapping with ``start``, ``finish``, ``total_work`` and
            optionally ``work_per_day`` and ``unit`` (default minutes)

    Returns:
        AssignmentSegment
    """
    unit = record.get("unit") or TimeUnit.MINUTES.value
    if not isinstance(unit, TimeUnit):
        unit = get_time_unit(str(unit))

    work_per_day = record.get("work_per_day")
    return AssignmentSegment(
        start=to_datetime(record["start"]),
        finish=to_datetime(record["finish"]),
        total_work=Duration(float(record["total_work"]), unit),
        work_per_day=None if work_per_day is None else Duration(float(work_per_day), unit),
    )


class BaseSegmentSource(ABC):
    """
    Abstract base class for segment sources.

    Provides filter registration for concrete implementations.
    """

    def __init__(self):
        """Initialize segment source."""
        self._filters: List[SegmentFilter] = []

    def add_filter(self, filter_instance: SegmentFilter) -> None:
        """
        Add a filter to be applied when loading segments.

        Args:
            filter_instance: Filter to add
        """
        self._filters.append(filter_instance)

    def _apply_filters(self, segments: List[AssignmentSegment]) -> List[AssignmentSegment]:
        result = segments
        for filter_instance in self._filters:
            result = filter_instance.filter(result)
        return result

    def load_segments(self) -> List[AssignmentSegment]:
        """Load, order and filter segments."""
        segments = sorted(self._load_raw(), key=lambda s: s.start)
        return self._apply_filters(segments)

    @abstractmethod
    def _load_raw(self) -> List[AssignmentSegment]:
        """Read segments from the underlying source (to be implemented by subclasses)."""
        pass


class BaseFilter(ABC):
    """
    Abstract base class for segment filters.
    """

    @abstractmethod
    def filter(self, segments: List[AssignmentSegment]) -> List[AssignmentSegment]:
        pass

"""
Factory for creating segment sources.
"""

from enum import Enum
from typing import Optional

from timephased.calendar.date_utils import DateLike

from .base import SegmentSource
from .filters import DateRangeFilter
from .loaders import CSVSegmentSource, JSONSegmentSource


class SourceType(Enum):
    """Supported segment source types."""
    JSON = "json"
    CSV = "csv"


def create_segment_source(
    source_type: SourceType,
    start: Optional[DateLike] = None,
    finish: Optional[DateLike] = None,
    **kwargs
) -> SegmentSource:
    """
    Create segment source with appropriate configuration.

    Args:
        source_type: Type of segment source to create
        start: Optional window start; with ``finish`` adds a DateRangeFilter
        finish: Optional window finish
        **kwargs: Configuration parameters specific to source type

    Returns:
        Configured segment source

    Examples:
        >>> source = create_segment_source(SourceType.JSON, path="segments.json")

        >>> source = create_segment_source(
        ...     SourceType.CSV,
        ...     path="segments.csv",
        ...     start="2024-03-04",
        ...     finish="2024-03-09",
        ... )
    """
    path = kwargs.get("path")
    if not path:
        raise ValueError(f"path required for {source_type} segment source")

    if source_type == SourceType.JSON:
        source = JSONSegmentSource(path)
    elif source_type == SourceType.CSV:
        source = CSVSegmentSource(path)
    else:
        raise ValueError(f"Unsupported segment source type: {source_type}")

    if start is not None and finish is not None:
        source.add_filter(DateRangeFilter(start, finish))
    elif start is not None or finish is not None:
        raise ValueError("start and finish must be given together")

    return source

"""
Segment loading and export.

Provides abstractions and implementations for reading pre-normalisation
segments and exporting normalised ones.
"""

from .base import BaseFilter, BaseSegmentSource, SegmentFilter, SegmentSource, segment_from_record
from .export import daily_totals, segments_to_frame
from .factory import SourceType, create_segment_source
from .filters import CompositeFilter, CustomFilter, DateRangeFilter
from .loaders import CSVSegmentSource, JSONSegmentSource

__all__ = [
    # Base abstractions
    "SegmentSource",
    "SegmentFilter",
    "BaseSegmentSource",
    "BaseFilter",
    "segment_from_record",
    # Concrete implementations
    "JSONSegmentSource",
    "CSVSegmentSource",
    # Filters
    "DateRangeFilter",
    "CustomFilter",
    "CompositeFilter",
    # Factory
    "create_segment_source",
    "SourceType",
    # Export
    "segments_to_frame",
    "daily_totals",
]

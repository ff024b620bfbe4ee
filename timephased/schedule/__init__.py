from .core import AssignmentSegment, SegmentValidationError, validate_segments

__all__ = [
    "AssignmentSegment",
    "SegmentValidationError",
    "validate_segments",
]

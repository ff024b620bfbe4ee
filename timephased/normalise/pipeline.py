"""
Normalisation pipeline for timephased assignment data.

Converts the internal representation of timephased work, as stored by the
scheduling file format, into one segment per working day:

    split days -> merge same day -> merge same rate -> convert units

Each stage returns a new list; the caller's segments are never modified.
"""

import logging
from typing import Iterable, List, Optional

from timephased.calendar.base import ProjectCalendar
from timephased.calendar.working import get_default_calendar
from timephased.schedule.core import AssignmentSegment, validate_segments

from .config import NormaliserConfig
from .merger import merge_same_day
from .rate_merger import merge_same_work
from .splitter import split_days
from .units import convert_units

logger = logging.getLogger(__name__)


def _log_segments(stage: str, segments: List[AssignmentSegment]) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("%s: %s segments", stage, len(segments))
    for segment in segments:
        logger.debug("  %s", segment)


class Normaliser:
    """Run the normalisation stages against one calendar."""

    def __init__(
        self,
        calendar: Optional[ProjectCalendar] = None,
        config: Optional[NormaliserConfig] = None,
    ):
        """
        Initialize normaliser.

        Args:
            calendar: Calendar used for working time (default calendar if None)
            config: Pipeline configuration (optional)
        """
        self.calendar = calendar if calendar is not None else get_default_calendar()
        self.config = config if config is not None else NormaliserConfig()

    def split_days(self, segments: Iterable[AssignmentSegment]) -> List[AssignmentSegment]:
        return split_days(self.calendar, segments, self.config)

    def merge_same_day(self, segments: Iterable[AssignmentSegment]) -> List[AssignmentSegment]:
        return merge_same_day(self.calendar, segments)

    def merge_same_work(self, segments: Iterable[AssignmentSegment]) -> List[AssignmentSegment]:
        return merge_same_work(segments, self.config.rate_equality_delta)

    def convert_units(self, segments: Iterable[AssignmentSegment]) -> List[AssignmentSegment]:
        return convert_units(segments, self.config.output_unit)

    def normalise(self, segments: Iterable[AssignmentSegment]) -> List[AssignmentSegment]:
        """
        Normalise timephased segments.

        Args:
            segments: Segments ordered by start, each with work_per_day set

        Returns:
            New list with one segment per working day (or per run of days at
            the same rate), expressed in the configured output unit

        Raises:
            SegmentValidationError: if ``validate_input`` is enabled and the
                segments break the producer contract
        """
        segments = list(segments)
        if not segments:
            return []

        if self.config.validate_input:
            validate_segments(segments)

        _log_segments("input", segments)
        result = self.split_days(segments)
        _log_segments("split days", result)
        result = self.merge_same_day(result)
        _log_segments("merge same day", result)
        if self.config.merge_same_rate:
            result = self.merge_same_work(result)
            _log_segments("merge same work", result)
        result = self.convert_units(result)
        _log_segments("convert units", result)

        logger.info(
            "Normalised %s segments into %s on calendar %s",
            len(segments),
            len(result),
            self.calendar,
        )
        return result


def normalize(
    calendar: Optional[ProjectCalendar],
    segments: Iterable[AssignmentSegment],
    config: Optional[NormaliserConfig] = None,
) -> List[AssignmentSegment]:
    """Normalise timephased segments against ``calendar``; see Normaliser.normalise."""
    return Normaliser(calendar, config).normalise(segments)

"""
Timephased data normalisation.
"""

from .checks import (
    NormalisationError,
    assert_normalised,
    check_conservation,
    check_no_noise,
    check_no_same_day_duplicates,
    check_single_day,
    total_work_minutes,
)
from .config import RATE_EQUALITY_DELTA, NormaliserConfig
from .merger import is_calendar_adjacent, merge_same_day
from .pipeline import Normaliser, normalize
from .rate_merger import merge_same_work
from .splitter import attributed_work, prorate, split_days, split_first_day, split_segment
from .units import convert_to_hours, convert_units

__all__ = [
    # Pipeline
    "Normaliser",
    "NormaliserConfig",
    "normalize",
    "RATE_EQUALITY_DELTA",
    # Stages
    "split_days",
    "split_segment",
    "split_first_day",
    "attributed_work",
    "prorate",
    "merge_same_day",
    "is_calendar_adjacent",
    "merge_same_work",
    "convert_units",
    "convert_to_hours",
    # Checks
    "NormalisationError",
    "assert_normalised",
    "check_conservation",
    "check_single_day",
    "check_no_same_day_duplicates",
    "check_no_noise",
    "total_work_minutes",
]

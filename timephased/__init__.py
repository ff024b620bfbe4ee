"""Timephased Work Normalisation.

This package converts timephased assignment work, as stored by project
scheduling files, into one segment per calendar working day.

Key modules:
- normalise: Day splitting, same-day and same-rate merging, unit conversion
- calendar: Working-time calendars (QuantLib business days plus working hours)
- schedule: Assignment segment data structures
- conventions: Time units, durations and tolerances
- data: Segment loading and export
"""

from timephased.normalise import Normaliser, NormaliserConfig, normalize

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "normalize",
    "Normaliser",
    "NormaliserConfig",
    # Main modules are imported via subpackages
    "normalise",
    "calendar",
    "schedule",
    "conventions",
    "data",
]

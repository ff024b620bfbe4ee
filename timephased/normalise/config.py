"""Configuration for the normalisation pipeline."""

import os
from dataclasses import dataclass

from timephased.conventions import CANONICAL_DAY_MINUTES, EQUALITY_DELTA, TimeUnit
from timephased.conventions.types import get_time_unit

# Tolerance (in minutes) when comparing daily rates for the same-rate merge
RATE_EQUALITY_DELTA = 0.01


@dataclass
class NormaliserConfig:
    """Configuration for the normalisation pipeline."""

    # Pro-ration baseline; the stored daily rate is expressed against an 8-hour day
    canonical_day_minutes: float = CANONICAL_DAY_MINUTES
    equality_delta: float = EQUALITY_DELTA
    rate_equality_delta: float = RATE_EQUALITY_DELTA
    output_unit: TimeUnit = TimeUnit.HOURS
    merge_same_rate: bool = True
    validate_input: bool = False

    def __post_init__(self):
        if self.canonical_day_minutes <= 0:
            raise ValueError("canonical_day_minutes must be positive")
        if self.equality_delta < 0 or self.rate_equality_delta < 0:
            raise ValueError("Equality tolerances must be non-negative")

    @classmethod
    def from_env(cls) -> "NormaliserConfig":
        """
        Build configuration from environment variables.

        TIMEPHASED_CANONICAL_DAY_MINUTES, TIMEPHASED_EQUALITY_DELTA and
        TIMEPHASED_OUTPUT_UNIT override the defaults when set.
        """
        return cls(
            canonical_day_minutes=float(
                os.getenv("TIMEPHASED_CANONICAL_DAY_MINUTES", CANONICAL_DAY_MINUTES)
            ),
            equality_delta=float(os.getenv("TIMEPHASED_EQUALITY_DELTA", EQUALITY_DELTA)),
            output_unit=get_time_unit(os.getenv("TIMEPHASED_OUTPUT_UNIT", "HOURS")),
        )

"""Export normalised segments for reporting."""

from typing import Iterable, List

import pandas as pd

from timephased.conventions import TimeUnit
from timephased.schedule.core import AssignmentSegment

FRAME_COLUMNS = ["start", "finish", "total_work", "work_per_day", "unit"]


def segments_to_frame(
    segments: Iterable[AssignmentSegment],
    unit: TimeUnit = TimeUnit.HOURS,
) -> pd.DataFrame:
    """One row per segment, work values expressed in ``unit``."""
    rows: List[dict] = []
    for segment in segments:
        work_per_day = segment.work_per_day
        rows.append({
            "start": pd.Timestamp(segment.start),
            "finish": pd.Timestamp(segment.finish),
            "total_work": segment.total_work.to(unit).amount,
            "work_per_day": None if work_per_day is None else work_per_day.to(unit).amount,
            "unit": unit.value,
        })
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def daily_totals(
    segments: Iterable[AssignmentSegment],
    unit: TimeUnit = TimeUnit.HOURS,
) -> pd.Series:
    """Total work per start day, indexed by date."""
    frame = segments_to_frame(segments, unit)
    if frame.empty:
        return pd.Series(dtype=float, name="total_work")
    frame["day"] = frame["start"].dt.date
    return frame.groupby("day")["total_work"].sum()

"""
Concrete segment source implementations.

Provides loaders for JSON and CSV files.
"""

import json
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from timephased.schedule.core import AssignmentSegment

from .base import BaseSegmentSource, segment_from_record

REQUIRED_COLUMNS = ("start", "finish", "total_work")


class JSONSegmentSource(BaseSegmentSource):
    """
    Load segments from a JSON file.

    Expected layout::

        {"segments": [{"start": "2024-03-04T08:00:00",
                       "finish": "2024-03-06T17:00:00",
                       "total_work": 960, "work_per_day": 480}]}
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize JSON segment source.

        Args:
            path: Path to the JSON file
        """
        super().__init__()
        self.path = Path(path)

    def _load_json_file(self) -> Dict:
        with open(self.path, "r") as f:
            return json.load(f)

    def _load_raw(self) -> List[AssignmentSegment]:
        data = self._load_json_file()
        return [segment_from_record(record) for record in data.get("segments", [])]


class CSVSegmentSource(BaseSegmentSource):
    """
    Load segments from a CSV file with columns
    start, finish, total_work[, work_per_day][, unit].
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize CSV segment source.

        Args:
            path: Path to the CSV file
        """
        super().__init__()
        self.path = Path(path)

    def _load_raw(self) -> List[AssignmentSegment]:
        df = pd.read_csv(self.path, dtype={"start": str, "finish": str})
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"CSV file {self.path} is missing columns: {missing}")

        # Empty cells become None rather than NaN
        df = df.astype(object).where(pd.notna(df), None)
        return [segment_from_record(record) for record in df.to_dict("records")]

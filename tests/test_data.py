"""Tests for segment sources, filters and export."""

import json
from datetime import date, datetime

import pandas as pd
import pytest

from timephased.conventions import Duration, TimeUnit
from timephased.data import (
    CompositeFilter,
    CSVSegmentSource,
    CustomFilter,
    DateRangeFilter,
    JSONSegmentSource,
    SegmentSource,
    SourceType,
    create_segment_source,
    daily_totals,
    segment_from_record,
    segments_to_frame,
)


@pytest.fixture
def json_file(tmp_path):
    path = tmp_path / "segments.json"
    path.write_text(json.dumps({
        "segments": [
            {"start": "2024-03-11T08:00:00", "finish": "2024-03-11T16:00:00",
             "total_work": 480, "work_per_day": 480},
            {"start": "2024-03-04T08:00:00", "finish": "2024-03-06T17:00:00",
             "total_work": 960, "work_per_day": 480},
        ]
    }))
    return path


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "segments.csv"
    path.write_text(
        "start,finish,total_work,work_per_day\n"
        "2024-03-04 08:00,2024-03-04 16:00,480,480\n"
        "2024-03-05 08:00,2024-03-05 12:00,240,\n"
    )
    return path


def test_segment_from_record():
    segment = segment_from_record({
        "start": "2024-03-04 08:00",
        "finish": "2024-03-04 16:00",
        "total_work": 8,
        "work_per_day": 8,
        "unit": "h",
    })

    assert segment.start == datetime(2024, 3, 4, 8)
    assert segment.total_work == Duration.of_minutes(480)
    assert segment.total_work.unit == TimeUnit.HOURS
    assert segment.work_per_day.minutes == 480


def test_segment_from_record_defaults_to_minutes():
    segment = segment_from_record({"start": "2024-03-04", "finish": "2024-03-05", "total_work": 0})

    assert segment.total_work.unit == TimeUnit.MINUTES
    assert segment.work_per_day is None


def test_json_source_orders_segments(json_file):
    source = JSONSegmentSource(json_file)

    segments = source.load_segments()

    assert isinstance(source, SegmentSource)
    assert [s.start for s in segments] == [datetime(2024, 3, 4, 8), datetime(2024, 3, 11, 8)]
    assert segments[0].total_work.minutes == 960


def test_csv_source(csv_file):
    segments = CSVSegmentSource(csv_file).load_segments()

    assert len(segments) == 2
    assert segments[0].work_per_day == Duration.of_minutes(480)
    assert segments[1].finish == datetime(2024, 3, 5, 12)
    assert segments[1].total_work.minutes == 240
    assert segments[1].work_per_day is None


def test_csv_source_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("start,finish\n2024-03-04 08:00,2024-03-04 16:00\n")

    with pytest.raises(ValueError, match="missing columns"):
        CSVSegmentSource(path).load_segments()


def test_date_range_filter(make_segment):
    segments = [
        make_segment("2024-03-01 08:00", "2024-03-01 16:00", 480),
        make_segment("2024-03-01 08:00", "2024-03-04 12:00", 960),
        make_segment("2024-03-06 08:00", "2024-03-06 16:00", 480),
        make_segment("2024-03-11 08:00", "2024-03-11 16:00", 480),
    ]

    result = DateRangeFilter("2024-03-04", date(2024, 3, 9)).filter(segments)

    assert [s.start.day for s in result] == [1, 6]
    assert result[0].finish == datetime(2024, 3, 4, 12)

    with pytest.raises(ValueError, match="finish must not be before start"):
        DateRangeFilter("2024-03-09", "2024-03-04")


def test_custom_and_composite_filters(make_segment):
    segments = [
        make_segment("2024-03-04 08:00", "2024-03-04 16:00", 480),
        make_segment("2024-03-05 08:00", "2024-03-05 16:00", 0),
        make_segment("2024-03-12 08:00", "2024-03-12 16:00", 240),
    ]
    has_work = CustomFilter(lambda s: not s.total_work.is_zero())

    composite = CompositeFilter([has_work])
    composite.add_filter(DateRangeFilter("2024-03-04", "2024-03-09"))

    assert len(has_work.filter(segments)) == 2
    assert composite.filter(segments) == segments[:1]


def test_factory(json_file, csv_file):
    assert isinstance(create_segment_source(SourceType.JSON, path=json_file), JSONSegmentSource)
    assert isinstance(create_segment_source(SourceType.CSV, path=str(csv_file)), CSVSegmentSource)

    windowed = create_segment_source(
        SourceType.JSON, start="2024-03-04", finish="2024-03-09", path=json_file
    )
    assert [s.start.day for s in windowed.load_segments()] == [4]


def test_factory_errors(json_file):
    with pytest.raises(ValueError, match="path required"):
        create_segment_source(SourceType.CSV)
    with pytest.raises(ValueError, match="given together"):
        create_segment_source(SourceType.JSON, start="2024-03-04", path=json_file)


def test_segments_to_frame(make_segment):
    segments = [
        make_segment("2024-03-04 08:00", "2024-03-05 16:00", 960, 480),
        make_segment("2024-03-06 08:00", "2024-03-06 12:00", 240, None),
    ]

    frame = segments_to_frame(segments)

    assert list(frame.columns) == ["start", "finish", "total_work", "work_per_day", "unit"]
    assert frame["total_work"].tolist() == pytest.approx([16, 4])
    assert frame.loc[0, "work_per_day"] == pytest.approx(8)
    assert pd.isna(frame.loc[1, "work_per_day"])
    assert frame["unit"].tolist() == ["h", "h"]
    assert frame.loc[0, "start"] == pd.Timestamp("2024-03-04 08:00")


def test_segments_to_frame_empty():
    frame = segments_to_frame([])
    assert frame.empty
    assert list(frame.columns) == ["start", "finish", "total_work", "work_per_day", "unit"]


def test_daily_totals(make_segment):
    segments = [
        make_segment("2024-03-04 08:00", "2024-03-04 12:00", 240),
        make_segment("2024-03-04 13:00", "2024-03-04 16:00", 180),
        make_segment("2024-03-05 08:00", "2024-03-05 16:00", 480),
    ]

    totals = daily_totals(segments, TimeUnit.MINUTES)

    assert totals[date(2024, 3, 4)] == pytest.approx(420)
    assert totals[date(2024, 3, 5)] == pytest.approx(480)
    assert daily_totals([]).empty

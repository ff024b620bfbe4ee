"""Tests for the day splitter."""

import logging
from datetime import datetime

import pytest

from timephased.calendar import ProjectCalendar
from timephased.conventions import Duration, TimeUnit
from timephased.normalise import (
    NormaliserConfig,
    attributed_work,
    check_conservation,
    check_single_day,
    prorate,
    split_days,
    split_first_day,
    split_segment,
)


def _spans(segments):
    return [(s.start, s.finish) for s in segments]


def _work(segments):
    return [s.total_work.minutes for s in segments]


def test_prorate_uses_canonical_day():
    assert prorate(Duration.of_hours(8), Duration.of_minutes(240), 480).minutes == pytest.approx(240)
    assert prorate(Duration.of_minutes(480), Duration.of_minutes(240), 600).minutes == pytest.approx(192)
    assert prorate(Duration.of_minutes(240), Duration.of_minutes(480), 480).minutes == pytest.approx(240)


def test_attributed_work_runs_to_calendar_finish(calendar, make_segment):
    segment = make_segment("2024-03-04 12:00", "2024-03-04 13:00", 60)
    # 12:00 to the 16:00 calendar finish
    assert attributed_work(calendar, segment, 480).minutes == pytest.approx(240)

    weekend = make_segment("2024-03-09 09:00", "2024-03-09 12:00", 180)
    assert attributed_work(calendar, weekend, 480).is_zero()


def test_attributed_work_requires_rate(calendar, make_segment):
    segment = make_segment("2024-03-04 08:00", "2024-03-04 16:00", 480, work_per_day=None)
    with pytest.raises(ValueError, match="work_per_day"):
        attributed_work(calendar, segment, 480)


def test_three_day_span(calendar, make_segment):
    segment = make_segment("2024-03-04 08:00", "2024-03-06 17:00", 960)

    result = split_days(calendar, [segment])

    assert _spans(result) == [
        (datetime(2024, 3, 4, 8), datetime(2024, 3, 4, 16)),
        (datetime(2024, 3, 5, 8), datetime(2024, 3, 5, 16)),
        (datetime(2024, 3, 6, 8), datetime(2024, 3, 6, 17)),
    ]
    assert _work(result) == pytest.approx([480, 480, 0])
    assert sum(_work(result)) == pytest.approx(960, abs=0.1)
    assert check_single_day(result)


def test_partial_first_day_is_prorated(calendar, make_segment):
    segment = make_segment("2024-03-04 12:00", "2024-03-05 16:00", 720)

    result = split_days(calendar, [segment])

    assert _spans(result) == [
        (datetime(2024, 3, 4, 12), datetime(2024, 3, 4, 16)),
        (datetime(2024, 3, 5, 8), datetime(2024, 3, 5, 16)),
    ]
    assert _work(result) == pytest.approx([240, 480])


def test_part_time_rate(calendar, make_segment):
    segment = make_segment("2024-03-04 08:00", "2024-03-05 16:00", 480, work_per_day=240)

    result = split_days(calendar, [segment])

    assert _work(result) == pytest.approx([240, 240])
    assert all(s.work_per_day == Duration.of_minutes(240) for s in result)


def test_weekend_span_is_dropped(calendar, make_segment):
    segment = make_segment("2024-03-09 08:00", "2024-03-10 17:00", 0)

    assert split_first_day(calendar, segment, 480) == (None, None)
    assert split_days(calendar, [segment]) == []


def test_span_starting_on_weekend(calendar, make_segment):
    segment = make_segment("2024-03-09 10:00", "2024-03-11 12:00", 240)

    first, remainder = split_first_day(calendar, segment, 480)
    assert first is None
    assert remainder.start == datetime(2024, 3, 11, 8)
    assert remainder.total_work.minutes == pytest.approx(240)

    result = split_days(calendar, [segment])
    assert _spans(result) == [(datetime(2024, 3, 11, 8), datetime(2024, 3, 11, 12))]
    assert _work(result) == pytest.approx([240])


def test_span_over_weekend(calendar, make_segment):
    segment = make_segment("2024-03-08 08:00", "2024-03-11 16:00", 960)

    result = split_days(calendar, [segment])

    assert [s.start_day.day for s in result] == [8, 11]
    assert _work(result) == pytest.approx([480, 480])


def test_no_remainder_when_next_work_start_is_after_finish(calendar, make_segment):
    segment = make_segment("2024-03-04 08:00", "2024-03-05 06:00", 480)

    first, remainder = split_first_day(calendar, segment, 480)

    assert first.finish == datetime(2024, 3, 4, 16)
    assert first.total_work.minutes == pytest.approx(480)
    assert remainder is None


def test_midnight_finish_belongs_to_previous_day(calendar, make_segment):
    segment = make_segment("2024-03-04 08:00", "2024-03-05 00:00", 480)

    assert segment.is_single_day()
    result = split_days(calendar, [segment])
    assert result == [segment]


def test_excess_work_moves_to_next_day(calendar, make_segment):
    segment = make_segment("2024-03-04 08:00", "2024-03-04 16:00", 600)

    pieces, remainder_inserted = split_segment(calendar, segment, NormaliserConfig())

    assert remainder_inserted
    assert _spans(pieces) == [
        (datetime(2024, 3, 4, 8), datetime(2024, 3, 4, 16)),
        (datetime(2024, 3, 5, 0), datetime(2024, 3, 6, 0)),
    ]
    assert _work(pieces) == pytest.approx([480, 120])
    assert check_single_day(pieces)


def test_excess_within_tolerance_is_kept(calendar, make_segment):
    segment = make_segment("2024-03-04 08:00", "2024-03-04 16:00", 480.05)

    pieces, remainder_inserted = split_segment(calendar, segment, NormaliserConfig())

    assert not remainder_inserted
    assert pieces == [segment]


def test_remainder_shifts_next_segment(calendar, make_segment):
    segments = [
        make_segment("2024-03-04 08:00", "2024-03-04 16:00", 600),
        make_segment("2024-03-05 08:00", "2024-03-07 16:00", 960),
    ]

    result = split_days(calendar, segments)

    assert [s.start for s in result] == [
        datetime(2024, 3, 4, 8),
        datetime(2024, 3, 5, 0),
        datetime(2024, 3, 6, 8),
        datetime(2024, 3, 7, 8),
    ]
    assert _work(result) == pytest.approx([480, 120, 480, 480])
    assert check_conservation(segments, result)


def test_shift_start_state(calendar, make_segment):
    segment = make_segment("2024-03-05 08:00", "2024-03-06 16:00", 480)

    pieces, remainder_inserted = split_segment(calendar, segment, NormaliserConfig(), shift_start=True)

    assert not remainder_inserted
    assert _spans(pieces) == [(datetime(2024, 3, 6, 8), datetime(2024, 3, 6, 16))]


def test_work_on_non_working_day_moves_forward(calendar, make_segment):
    segment = make_segment("2024-03-09 09:00", "2024-03-09 12:00", 180)

    result = split_days(calendar, [segment])

    assert _spans(result) == [
        (datetime(2024, 3, 9, 9), datetime(2024, 3, 9, 12)),
        (datetime(2024, 3, 10, 0), datetime(2024, 3, 11, 0)),
    ]
    assert _work(result) == pytest.approx([0, 180])


def test_custom_canonical_day(calendar, make_segment):
    segment = make_segment("2024-03-04 12:00", "2024-03-05 16:00", 720)
    config = NormaliserConfig(canonical_day_minutes=600)

    result = split_days(calendar, [segment], config)

    assert _work(result) == pytest.approx([192, 384, 144])
    assert check_conservation([segment], result)


def test_missing_rate_raises(calendar, make_segment):
    segment = make_segment("2024-03-04 08:00", "2024-03-05 16:00", 960, work_per_day=None)
    with pytest.raises(ValueError, match="work_per_day"):
        split_days(calendar, [segment])


def test_input_is_not_modified(calendar, make_segment):
    segment = make_segment("2024-03-04 08:00", "2024-03-04 16:00", 600)
    segments = [segment]

    split_days(calendar, segments)

    assert segments == [segment]
    assert segment.total_work.minutes == 600


@pytest.mark.parametrize(
    "start, finish, total, rate",
    [
        ("2024-03-04 08:00", "2024-03-08 16:00", 2400, 480),
        ("2024-03-04 10:30", "2024-03-06 11:15", 900, 480),
        ("2024-03-07 08:00", "2024-03-12 16:00", 1440, 360),
        ("2024-03-04 08:00", "2024-03-04 16:00", 700, 480),
    ],
)
def test_conservation(calendar, make_segment, start, finish, total, rate):
    segments = [make_segment(start, finish, total, rate)]

    result = split_days(calendar, segments)

    assert check_conservation(segments, result)


class StuckCalendar:
    """Reports working time but never advances to a working period."""

    def is_working_date(self, day):
        return False

    def get_finish_time(self, day):
        return None

    def get_work(self, start, finish, unit=TimeUnit.MINUTES):
        return Duration.of_minutes(60).to(unit)

    def get_day_work(self, day, unit=TimeUnit.MINUTES):
        return Duration.zero(unit)

    def get_next_work_start(self, timestamp):
        return timestamp

    def __str__(self):
        return "STUCK"


def test_segment_dropped_when_calendar_cannot_advance(make_segment, caplog):
    calendar = StuckCalendar()
    segment = make_segment("2024-03-04 08:00", "2024-03-06 16:00", 960)

    assert isinstance(calendar, ProjectCalendar)
    with caplog.at_level(logging.WARNING, logger="timephased.normalise"):
        assert split_first_day(calendar, segment, 480) == (None, None)
        assert split_days(calendar, [segment]) == []

    assert "Calendar STUCK has no working period after 2024-03-04 08:00:00" in caplog.text

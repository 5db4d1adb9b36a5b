from datetime import datetime

import pytest

from app.services.date_ranges import Granularity, ReportRange, previous_window, resolve_range

NOW = datetime(2024, 3, 10, 15, 42, 7)


def test_today_covers_whole_local_day():
    window = resolve_range(ReportRange.TODAY, now=NOW)
    assert window.start == datetime(2024, 3, 10, 0, 0, 0)
    assert window.end == datetime(2024, 3, 10, 23, 59, 59, 999999)
    assert window.granularity == Granularity.HOURLY


def test_yesterday_is_today_shifted_one_day():
    window = resolve_range(ReportRange.YESTERDAY, now=NOW)
    assert window.start == datetime(2024, 3, 9, 0, 0, 0)
    assert window.end == datetime(2024, 3, 9, 23, 59, 59, 999999)
    assert window.granularity == Granularity.HOURLY


def test_yesterday_crosses_month_boundary():
    window = resolve_range(ReportRange.YESTERDAY, now=datetime(2024, 3, 1, 0, 5))
    assert window.start == datetime(2024, 2, 29)


@pytest.mark.parametrize("preset,days,start", [
    (ReportRange.LAST_7_DAYS, 7, datetime(2024, 3, 3)),
    (ReportRange.LAST_30_DAYS, 30, datetime(2024, 2, 9)),
])
def test_lookback_ranges_start_n_days_back_at_midnight(preset, days, start):
    window = resolve_range(preset, now=NOW)
    assert window.start == start
    assert window.end == datetime(2024, 3, 10, 23, 59, 59, 999999)
    assert window.granularity == Granularity.DAILY
    assert len(window.days()) == days + 1


@pytest.mark.parametrize("preset", list(ReportRange))
def test_start_never_after_end(preset):
    window = resolve_range(preset, now=NOW)
    assert window.start <= window.end
    assert window.end.date() >= window.start.date()


def test_accepts_plain_string_range():
    assert resolve_range("7days", now=NOW).granularity == Granularity.DAILY


def test_previous_window_of_today_is_yesterday():
    today = resolve_range(ReportRange.TODAY, now=NOW)
    assert previous_window(today) == resolve_range(ReportRange.YESTERDAY, now=NOW)


def test_previous_window_has_equal_length():
    window = resolve_range(ReportRange.LAST_7_DAYS, now=NOW)
    prior = previous_window(window)
    assert len(prior.days()) == len(window.days())
    assert prior.end < window.start

"""Tests for timeframe parsing and small formatting helpers."""

from datetime import date, datetime

import pytest

from obsid.exceptions import TimeframeError
from obsid.utils import format_long_date, format_time_range, parse_timeframe, project_tag

NOW = datetime(2025, 7, 19, 15, 4)


@pytest.mark.parametrize(
    "timeframe,expected",
    [
        ("1h", datetime(2025, 7, 19, 14, 4)),
        ("30m", datetime(2025, 7, 19, 14, 34)),
        ("2h30m", datetime(2025, 7, 19, 12, 34)),
        ("3", datetime(2025, 7, 19, 12, 4)),
        ("today", datetime(2025, 7, 19)),
        ("Yesterday", datetime(2025, 7, 18)),
        (" 2H ", datetime(2025, 7, 19, 13, 4)),
    ],
)
def test_parse_timeframe(timeframe, expected):
    assert parse_timeframe(timeframe, now=NOW) == expected


@pytest.mark.parametrize("timeframe", ["", "h", "two hours", "1d", "-1h"])
def test_parse_timeframe_rejects_garbage(timeframe):
    with pytest.raises(TimeframeError):
        parse_timeframe(timeframe, now=NOW)


def test_format_time_range_under_an_hour():
    assert format_time_range(datetime(2025, 7, 19, 14, 34), now=NOW) == "2:34PM - 3:04PM (30m)"


def test_format_time_range_same_day():
    assert format_time_range(datetime(2025, 7, 19, 9, 0), now=NOW) == "9:00AM - 3:04PM"


def test_format_time_range_midnight_and_noon():
    now = datetime(2025, 7, 19, 12, 5)
    assert format_time_range(datetime(2025, 7, 19, 0, 0), now=now) == "12:00AM - 12:05PM"


def test_format_time_range_across_days():
    since = datetime(2025, 7, 18, 9, 0)
    assert format_time_range(since, now=NOW) == "Jul 18 9:00AM - Jul 19 3:04PM"


def test_format_long_date():
    assert format_long_date(date(2025, 7, 19)) == "Saturday, July 19, 2025"
    assert format_long_date(date(2024, 1, 1)) == "Monday, January 1, 2024"


def test_project_tag():
    assert project_tag("My-Project.v2 beta!") == "my_project_v2_beta"
    assert project_tag("obsid") == "obsid"

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from log_summarizer.core.models import TimeWindow
from log_summarizer.core.time_window import (
    describe_duration,
    line_timestamp,
    lookback_window,
    parse_duration,
    parse_rfc3339,
)


def test_parse_rfc3339_with_offset() -> None:
    dt = parse_rfc3339("2025-12-30T08:12:01+02:00")
    assert dt == datetime(2025, 12, 30, 6, 12, 1, tzinfo=UTC)
    assert dt.utcoffset() == timedelta(hours=2)


def test_parse_rfc3339_negative_offset_and_fraction() -> None:
    dt = parse_rfc3339("2025-12-30T08:12:01.5-05:00")
    assert dt == datetime(2025, 12, 30, 8, 12, 1, 500000, tzinfo=timezone(timedelta(hours=-5)))


@pytest.mark.parametrize(
    "value",
    [
        "2025-12-30T08:12:01",  # no offset
        "2025-13-30T08:12:01+00:00",  # month out of range
        "2025-12-30 08:12:01+00:00",  # space separator
        "2025-12-30T08:12:01Z [INF",  # trailing text
        "not a timestamp at all!!!",
    ],
)
def test_parse_rfc3339_rejects(value: str) -> None:
    assert parse_rfc3339(value) is None


def test_line_timestamp_uses_first_25_characters() -> None:
    line = "2025-12-30T08:12:01+00:00 sshd[1]: Accepted publickey"
    assert line_timestamp(line) == datetime(2025, 12, 30, 8, 12, 1, tzinfo=UTC)


def test_line_timestamp_accepts_padded_fraction_with_z() -> None:
    assert line_timestamp("2025-12-30T08:12:01.1234Z rest") == datetime(
        2025, 12, 30, 8, 12, 1, 123400, tzinfo=UTC
    )


def test_line_timestamp_short_line() -> None:
    assert line_timestamp("2025-12-30T08:12:01Z") is None


def test_window_bounds_are_exclusive() -> None:
    start = datetime(2025, 12, 30, 11, 0, 0, tzinfo=UTC)
    end = datetime(2025, 12, 30, 12, 0, 0, tzinfo=UTC)
    window = TimeWindow(start=start, end=end)

    assert start not in window
    assert end not in window
    assert start + timedelta(seconds=1) in window


def test_lookback_window() -> None:
    now = datetime(2025, 12, 30, 12, 0, 0, tzinfo=UTC)
    window = lookback_window(timedelta(hours=1), now=now)
    assert window.start == now - timedelta(hours=1)
    assert window.end == now


def test_lookback_window_rejects_non_positive() -> None:
    with pytest.raises(ValueError):
        lookback_window(timedelta(0))


def test_parse_duration() -> None:
    assert parse_duration("1h") == timedelta(hours=1)
    assert parse_duration("1h30m") == timedelta(minutes=90)
    assert parse_duration(" 45S ") == timedelta(seconds=45)


@pytest.mark.parametrize("value", ["", "1x", "h1", "1h 30m", "abc"])
def test_parse_duration_invalid(value: str) -> None:
    with pytest.raises(ValueError):
        parse_duration(value)


def test_describe_duration() -> None:
    assert describe_duration(timedelta(hours=1)) == "hour"
    assert describe_duration(timedelta(hours=2)) == "2 hours"
    assert describe_duration(timedelta(minutes=30)) == "30 minutes"
    assert describe_duration(timedelta(seconds=90)) == "90 seconds"

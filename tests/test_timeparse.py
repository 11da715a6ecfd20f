from __future__ import annotations

from datetime import datetime, time, timedelta, timezone

import pytest

from shutdown_timer.timeparse import ParseError, parse_hhmm, resolve

TZ = timezone(timedelta(hours=2))


def test_parse_hhmm_bounds() -> None:
    assert parse_hhmm("00:00") == time(0, 0)
    assert parse_hhmm("23:59") == time(23, 59)


@pytest.mark.parametrize(
    "raw",
    [
        "24:00",
        "25:99",
        "12:60",
        "abc",
        "",
        "9:05",
        "14:05:00",
        " 14:05",
        "１４:０５",
        "١٤:٠٥",
    ],
)
def test_parse_hhmm_rejects_malformed(raw: str) -> None:
    with pytest.raises(ParseError):
        parse_hhmm(raw)


def test_resolve_rejects_non_ascii_digits() -> None:
    now = datetime(2024, 5, 1, 14, 0, tzinfo=TZ)
    with pytest.raises(ParseError):
        resolve("１４:０５", now)


def test_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        resolve("nope", datetime(2024, 5, 1, 14, 0, tzinfo=TZ))


def test_later_time_is_same_day() -> None:
    now = datetime(2024, 5, 1, 14, 0, tzinfo=TZ)
    assert resolve("14:05", now) == datetime(2024, 5, 1, 14, 5, tzinfo=TZ)


def test_earlier_time_rolls_to_next_day() -> None:
    now = datetime(2024, 5, 1, 14, 0, tzinfo=TZ)
    assert resolve("13:59", now) == datetime(2024, 5, 2, 13, 59, tzinfo=TZ)


def test_equal_time_rolls_to_next_day() -> None:
    now = datetime(2024, 5, 1, 14, 5, 0, tzinfo=TZ)
    assert resolve("14:05", now) == datetime(2024, 5, 2, 14, 5, tzinfo=TZ)


def test_same_minute_with_elapsed_seconds_rolls_over() -> None:
    now = datetime(2024, 5, 1, 14, 5, 0, 500_000, tzinfo=TZ)
    assert resolve("14:05", now).date() == datetime(2024, 5, 2).date()


def test_rollover_crosses_month_end() -> None:
    now = datetime(2024, 2, 29, 23, 30, tzinfo=TZ)
    assert resolve("00:15", now) == datetime(2024, 3, 1, 0, 15, tzinfo=TZ)


def test_result_keeps_local_offset() -> None:
    now = datetime(2024, 5, 1, 14, 0, tzinfo=TZ)
    assert resolve("18:00", now).utcoffset() == timedelta(hours=2)


def test_every_time_of_day_resolves_into_the_next_24_hours() -> None:
    now = datetime(2024, 5, 1, 14, 0, 30, tzinfo=TZ)
    for hour in range(24):
        for minute in range(60):
            result = resolve(f"{hour:02d}:{minute:02d}", now)
            assert now < result <= now + timedelta(days=1)
            assert result.time() == time(hour, minute)
            assert result.date() in (now.date(), now.date() + timedelta(days=1))

import math

import pytest

from src.utils.common_utils import (
    calculate_average,
    calculate_summary_statistics,
    format_seconds_to_duration,
    parse_duration_to_seconds,
    parse_time_object_to_seconds,
    truncate_to_decimals,
)


def test_average_of_nothing_is_zero():
    assert calculate_average([]) == 0
    assert calculate_average(None) == 0
    assert calculate_average([1, 2, 3]) == 2
    assert calculate_average(v for v in (10, 20)) == 15


@pytest.mark.parametrize(
    "value, decimals, expected",
    [
        (59.996, 1, 59.9),
        (59.999, 2, 59.99),
        (12.3456, 2, 12.34),
        (80, 2, 80.0),
        (300.9, 0, 300.0),
        (-1, 1, -1.0),
        (-1.05, 1, -1.0),
        ("45.678", 2, 45.67),
        (0.29, 2, 0.29),
    ],
)
def test_truncate_cuts_toward_zero(value, decimals, expected):
    assert truncate_to_decimals(value, decimals) == expected


def test_truncate_keeps_large_values():
    assert truncate_to_decimals(1e30, 2) == 1e30
    assert truncate_to_decimals(-1e30, 2) == -1e30
    assert truncate_to_decimals(123456789012345678901234567.891, 1) == pytest.approx(
        123456789012345678901234567.891
    )


def test_truncate_non_numeric_is_zero():
    assert truncate_to_decimals("abc") == 0.0
    assert truncate_to_decimals(None) == 0.0
    assert truncate_to_decimals(float("nan")) == 0.0


def test_parse_duration():
    assert parse_duration_to_seconds("00:10:00") == 600
    assert parse_duration_to_seconds("1:02:03") == 3723
    assert parse_duration_to_seconds("100:00:00") == 360000


@pytest.mark.parametrize("bad", ["10:00", "a:b:c", "1:2:3:4", "", None, 123])
def test_parse_duration_malformed_is_zero(bad):
    assert parse_duration_to_seconds(bad) == 0


def test_parse_time_object_accepts_mappings_and_strings():
    assert parse_time_object_to_seconds({"hours": 1, "minutes": 30}) == 5400
    assert parse_time_object_to_seconds({"hours": 1, "minutes": 0, "seconds": 30}) == 3630
    assert parse_time_object_to_seconds("00:00:30") == 30
    assert parse_time_object_to_seconds({}) == 0
    assert parse_time_object_to_seconds({"hours": "x", "seconds": 5}) == 5
    assert parse_time_object_to_seconds(None) == 0
    assert parse_time_object_to_seconds(42) == 0


def test_format_seconds():
    assert format_seconds_to_duration(0) == "00:00:00"
    assert format_seconds_to_duration(3723) == "01:02:03"
    assert format_seconds_to_duration(4500.0) == "01:15:00"
    assert format_seconds_to_duration(59.9) == "00:00:59"
    # Hours do not wrap at a day
    assert format_seconds_to_duration(360000) == "100:00:00"


def test_format_seconds_invalid_input():
    assert format_seconds_to_duration(-5) == "00:00:00"
    assert format_seconds_to_duration("abc") == "00:00:00"
    assert format_seconds_to_duration(None) == "00:00:00"


def test_summary_statistics():
    stats = calculate_summary_statistics([1, 2, 3, 4])
    assert stats["count"] == 4
    assert stats["mean"] == 2.5
    assert stats["median"] == 2.5
    assert stats["min"] == 1.0
    assert stats["max"] == 4.0
    assert stats["std_dev"] == pytest.approx(math.sqrt(1.25))

    empty = calculate_summary_statistics([])
    assert empty["count"] == 0
    assert empty["mean"] == 0.0

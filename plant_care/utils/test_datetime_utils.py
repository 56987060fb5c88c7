# plant_care/utils/test_datetime_utils.py
"""
Date/time helper tests.

Usage: python -m pytest plant_care/utils/test_datetime_utils.py -v
"""

import pytest
from datetime import datetime, date, timezone, timedelta
from plant_care.utils.datetime_utils import DateTimeUtils

def test_parse_iso_datetime():
    """Every ISO form is normalized to UTC."""
    test_cases = [
        "2024-01-15T10:30:00Z",
        "2024-01-15T10:30:00+09:00",
        "2024-01-15T10:30:00.123Z",
        "2024-01-15T10:30:00"
    ]

    for iso_string in test_cases:
        dt = DateTimeUtils.parse_iso_datetime(iso_string)
        assert isinstance(dt, datetime)
        assert dt.tzinfo == timezone.utc

    assert DateTimeUtils.parse_iso_datetime("2024-01-15T10:30:00+09:00").hour == 1

def test_parse_date_string():
    assert DateTimeUtils.parse_date_string("2024-01-15") == date(2024, 1, 15)
    # full timestamps use their UTC day
    assert DateTimeUtils.parse_date_string("2024-01-15T23:30:00-02:00") == date(2024, 1, 16)

def test_to_iso_string_uses_z_suffix():
    dt = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert DateTimeUtils.to_iso_string(dt) == "2024-01-15T10:30:00Z"
    assert DateTimeUtils.to_iso_string(datetime(2024, 1, 15, 10, 30)) == "2024-01-15T10:30:00Z"

def test_calendar_day_and_same_day():
    late_evening_kst = datetime(2024, 3, 1, 23, 0, tzinfo=timezone(timedelta(hours=9)))
    assert DateTimeUtils.calendar_day(late_evening_kst) == date(2024, 3, 1)
    assert DateTimeUtils.calendar_day(date(2024, 3, 1)) == date(2024, 3, 1)
    assert DateTimeUtils.is_same_day(datetime(2024, 3, 1, 0, 1, tzinfo=timezone.utc), date(2024, 3, 1))
    assert not DateTimeUtils.is_same_day(datetime(2024, 3, 1, 23, 59, tzinfo=timezone.utc), date(2024, 3, 2))

def test_add_days_crosses_month_and_leap_day():
    assert DateTimeUtils.add_days(date(2024, 2, 27), 3) == date(2024, 3, 1)
    assert DateTimeUtils.add_days(date(2024, 3, 1), -1) == date(2024, 2, 29)

def test_for_firestore():
    test_data = {
        'day': date(2020, 1, 15),
        'timestamp': datetime(2024, 1, 15, 10, 30),
        'nested': {'event_date': date(2023, 12, 25)},
        'list_data': [{'created_at': datetime(2024, 1, 1)}]
    }

    converted = DateTimeUtils.for_firestore(test_data)

    assert isinstance(converted['day'], datetime)
    assert isinstance(converted['nested']['event_date'], datetime)
    assert converted['list_data'][0]['created_at'].tzinfo == timezone.utc
    assert converted['day'].tzinfo == timezone.utc

def test_validate_datetime_field():
    valid_cases = [
        "2024-01-15T10:30:00Z",
        datetime(2024, 1, 15, 10, 30),
        datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    ]

    for case in valid_cases:
        result = DateTimeUtils.validate_datetime_field(case)
        assert isinstance(result, datetime)
        assert result.tzinfo == timezone.utc

def test_validate_date_field():
    valid_cases = [
        "2024-01-15",
        date(2024, 1, 15),
        datetime(2024, 1, 15, 10, 30)
    ]

    for case in valid_cases:
        assert DateTimeUtils.validate_date_field(case) == date(2024, 1, 15)

def test_error_handling():
    with pytest.raises(ValueError):
        DateTimeUtils.parse_iso_datetime("invalid-date")

    with pytest.raises(ValueError):
        DateTimeUtils.parse_iso_datetime("")

    with pytest.raises(ValueError):
        DateTimeUtils.validate_datetime_field(None)

    with pytest.raises(ValueError):
        DateTimeUtils.validate_date_field(12345)

# plant_care/scheduling/calculator.py
"""
Due-date calculator.

A care action recurs every `interval_days` days after it was last performed.
Comparisons happen at calendar-day granularity: the time of day of the last
action never matters. A last action dated in the future (clock skew, bad
input) is not clamped; the arithmetic result is returned as is.
"""

from datetime import date, datetime
from enum import Enum
from typing import Union

from plant_care.core.errors import InvalidDataError
from plant_care.utils.datetime_utils import DateTimeUtils

DateLike = Union[date, datetime]


class CareStatus(Enum):
    OVERDUE = "overdue"
    DUE = "due"
    UPCOMING = "upcoming"


def validate_interval(interval_days) -> int:
    if isinstance(interval_days, bool) or not isinstance(interval_days, int) or interval_days < 1:
        raise InvalidDataError(f"Interval must be a positive number of days, got {interval_days!r}")
    return interval_days


def next_occurrence(last_performed_at: DateLike, interval_days: int) -> date:
    """Calendar day of the next occurrence: last day + interval."""
    validate_interval(interval_days)
    return DateTimeUtils.add_days(DateTimeUtils.calendar_day(last_performed_at), interval_days)


def is_due_today(last_performed_at: DateLike, interval_days: int, today: DateLike) -> bool:
    return next_occurrence(last_performed_at, interval_days) == DateTimeUtils.calendar_day(today)


def is_overdue(last_performed_at: DateLike, interval_days: int, today: DateLike) -> bool:
    return next_occurrence(last_performed_at, interval_days) < DateTimeUtils.calendar_day(today)


def days_until(last_performed_at: DateLike, interval_days: int, today: DateLike) -> int:
    """Days from today to the next occurrence; negative when overdue."""
    return (next_occurrence(last_performed_at, interval_days) - DateTimeUtils.calendar_day(today)).days


def care_status(last_performed_at: DateLike, interval_days: int, today: DateLike) -> CareStatus:
    remaining = days_until(last_performed_at, interval_days, today)
    if remaining < 0:
        return CareStatus.OVERDUE
    if remaining == 0:
        return CareStatus.DUE
    return CareStatus.UPCOMING

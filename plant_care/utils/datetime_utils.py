# plant_care/utils/datetime_utils.py
"""
Central date/time helpers for the whole project.

- every timestamp is a timezone-aware UTC datetime
- a "calendar day" is the UTC date of a timestamp
- ISO strings are produced with a 'Z' suffix and parsed with dateutil
- Firestore timestamps and plain datetimes are converted consistently
"""

import logging
from datetime import datetime, date, timezone, time
from typing import Union, Any
from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """Static helpers for time and date handling."""

    @staticmethod
    def now() -> datetime:
        """Current time as a UTC timezone-aware datetime."""
        return datetime.now(timezone.utc)

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        Parses an ISO-8601 string into a UTC datetime.

        Supported forms:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+09:00
        - 2024-01-15T10:30:00.123Z
        - 2024-01-15T10:30:00  (assumed UTC)
        - 2024-01-15           (midnight UTC)
        """
        try:
            if not iso_string:
                raise ValueError("cannot parse an empty string")

            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'

            dt = dateutil_parser.isoparse(iso_string)

            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)

            return dt.astimezone(timezone.utc)

        except Exception as e:
            logger.error(f"ISO datetime parsing failed: {iso_string} - {e}")
            raise ValueError(f"Invalid ISO datetime: {iso_string}")

    @staticmethod
    def parse_date_string(date_string: str) -> date:
        """
        Parses a calendar date. Accepts 'YYYY-MM-DD' and full ISO timestamps,
        in which case the UTC date part is used.
        """
        try:
            if not date_string:
                raise ValueError("cannot parse an empty string")
            if 'T' in date_string:
                return DateTimeUtils.parse_iso_datetime(date_string).date()
            return dateutil_parser.isoparse(date_string).date()

        except Exception as e:
            logger.error(f"Date string parsing failed: {date_string} - {e}")
            raise ValueError(f"Invalid date: {date_string}")

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime -> ISO string in UTC with a 'Z' suffix."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        else:
            dt = dt.astimezone(timezone.utc)
        return dt.isoformat().replace('+00:00', 'Z')

    @staticmethod
    def to_date_string(d: Union[date, datetime]) -> str:
        """date (or datetime, via its UTC day) -> 'YYYY-MM-DD'."""
        return DateTimeUtils.calendar_day(d).strftime('%Y-%m-%d')

    @staticmethod
    def calendar_day(value: Union[date, datetime]) -> date:
        """Reduces a datetime to its UTC calendar day; dates pass through."""
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.date()
            return value.astimezone(timezone.utc).date()
        return value

    @staticmethod
    def add_days(d: Union[date, datetime], days: int) -> Union[date, datetime]:
        """Adds a (possibly negative) number of days."""
        return d + relativedelta(days=days)

    @staticmethod
    def is_same_day(dt1: Union[date, datetime], dt2: Union[date, datetime]) -> bool:
        """True when both values fall on the same UTC calendar day."""
        return DateTimeUtils.calendar_day(dt1) == DateTimeUtils.calendar_day(dt2)

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Prepares a value for a Firestore write.

        - date -> datetime (00:00:00 UTC)
        - naive datetime -> UTC datetime
        - dicts and lists are converted recursively
        """
        if isinstance(obj, date) and not isinstance(obj, datetime):
            return datetime.combine(obj, time.min).replace(tzinfo=timezone.utc)
        elif isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """
        Converts values read from Firestore back to UTC datetimes.
        Firestore returns DatetimeWithNanoseconds, a datetime subclass.
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return datetime.fromtimestamp(obj.timestamp(), tz=timezone.utc)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.from_firestore(item) for item in obj]
        return obj

    @staticmethod
    def validate_datetime_field(value: Any, field_name: str = "datetime") -> datetime:
        """
        Validates a timestamp coming from a request or a stored document.

        Raises:
            ValueError: missing value or unparseable format
        """
        if value is None:
            raise ValueError(f"{field_name} is required")

        if isinstance(value, str):
            try:
                return DateTimeUtils.parse_iso_datetime(value)
            except ValueError:
                raise ValueError(f"Invalid {field_name} format: {value}")

        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)

        raise ValueError(f"{field_name} must be a string or a datetime")

    @staticmethod
    def validate_date_field(value: Any, field_name: str = "date") -> date:
        """Validates a calendar-day value (string, date or datetime)."""
        if value is None:
            raise ValueError(f"{field_name} is required")

        if isinstance(value, str):
            try:
                return DateTimeUtils.parse_date_string(value)
            except ValueError:
                raise ValueError(f"Invalid {field_name} format: {value}")

        if isinstance(value, (date, datetime)):
            return DateTimeUtils.calendar_day(value)

        raise ValueError(f"{field_name} must be a string or a date/datetime")

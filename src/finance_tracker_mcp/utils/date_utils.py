"""
Date utilities for parsing date bounds, periods and date ranges.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Tuple

from finance_tracker_mcp.core.exceptions import InvalidInputError


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive, optionally one- or two-sided range on record dates.

    An inverted range (start > end) is accepted and matches nothing.
    """

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utc_now() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_date_value(value: Any, field: str = "date") -> Optional[datetime]:
    """
    Parse a date bound or record date.

    Accepts ISO-8601 strings ("YYYY-MM-DD" or full timestamps), datetime,
    date, or epoch milliseconds. A date-only value means midnight UTC.

    Returns:
        Naive UTC datetime, or None for None/empty input

    Raises:
        InvalidInputError: If the value cannot be parsed
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return to_utc_naive(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidInputError(f"Invalid {field}: {value!r}") from e
        return to_utc_naive(parsed)

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return to_utc_naive(datetime.fromisoformat(text))
        except ValueError as e:
            raise InvalidInputError(f"Invalid {field}: {value!r}") from e

    raise InvalidInputError(f"Invalid {field}: {value!r}")


def build_date_range(start_date: Any = None, end_date: Any = None) -> DateRange:
    """
    Build an inclusive date range from two optional bounds.

    No validation that start <= end is performed.
    """
    return DateRange(
        start=parse_date_value(start_date, "start_date"),
        end=parse_date_value(end_date, "end_date"),
    )


def build_period_range(period: str) -> DateRange:
    """
    Build the date range for a period shorthand.

    The last day of the period is included in full, up to 23:59:59.999999.

    Raises:
        InvalidInputError: If period is not recognized
    """
    start_date, end_date = parse_period(period)
    date_range = build_date_range(start_date, end_date)
    return DateRange(
        start=date_range.start,
        end=date_range.end + timedelta(days=1) - timedelta(microseconds=1),
    )


def parse_period(period: str) -> Tuple[str, str]:
    """
    Parse a period string into (start_date, end_date).

    Supported periods:
    - "this_month", "last_month"
    - "this_year", "last_year"
    - "last_7_days", "last_30_days", "last_90_days"
    - "ytd" (year to date)

    Returns:
        Tuple of (start_date, end_date) as "YYYY-MM-DD" strings

    Raises:
        InvalidInputError: If period is not recognized
    """
    today = utc_now()

    if period == "this_month":
        return get_month_range(today.year, today.month)

    elif period == "last_month":
        last_day_last_month = today.replace(day=1) - timedelta(days=1)
        return get_month_range(last_day_last_month.year, last_day_last_month.month)

    elif period == "this_year":
        return f"{today.year}-01-01", f"{today.year}-12-31"

    elif period == "last_year":
        year = today.year - 1
        return f"{year}-01-01", f"{year}-12-31"

    elif period in ("last_7_days", "last_30_days", "last_90_days"):
        days = int(period.split("_")[1])
        start = today - timedelta(days=days)
        return start.strftime("%Y-%m-%d"), today.strftime("%Y-%m-%d")

    elif period == "ytd":
        return f"{today.year}-01-01", today.strftime("%Y-%m-%d")

    else:
        raise InvalidInputError(f"Unknown period: {period}")


def get_month_range(year: int, month: int) -> Tuple[str, str]:
    """
    Get the date range for a specific month.

    Args:
        year: Year (e.g., 2024)
        month: Month (1-12)

    Returns:
        Tuple of (start_date, end_date) as "YYYY-MM-DD" strings

    Raises:
        InvalidInputError: If month is not in valid range (1-12)
    """
    if not 1 <= month <= 12:
        raise InvalidInputError(f"Month must be between 1 and 12, got {month}")

    _, last_day = calendar.monthrange(year, month)

    return f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last_day:02d}"

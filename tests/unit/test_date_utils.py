"""
Unit tests for date utilities.
"""

from datetime import date, datetime, timedelta, timezone

import pytest
from freezegun import freeze_time

from finance_tracker_mcp.core.exceptions import InvalidInputError
from finance_tracker_mcp.utils.date_utils import (
    DateRange,
    build_date_range,
    build_period_range,
    get_month_range,
    parse_date_value,
    parse_period,
)


class TestParseDateValue:
    """Tests for parse_date_value function."""

    @pytest.mark.unit
    def test_date_only_string_is_midnight(self):
        assert parse_date_value("2024-01-31") == datetime(2024, 1, 31)

    @pytest.mark.unit
    def test_full_timestamp(self):
        assert parse_date_value("2024-01-31T18:45:10") == datetime(2024, 1, 31, 18, 45, 10)

    @pytest.mark.unit
    def test_utc_suffix_is_accepted(self):
        assert parse_date_value("2024-01-31T18:45:10Z") == datetime(2024, 1, 31, 18, 45, 10)

    @pytest.mark.unit
    def test_offset_is_converted_to_utc(self):
        assert parse_date_value("2024-01-31T01:00:00+02:00") == datetime(2024, 1, 30, 23, 0)

    @pytest.mark.unit
    def test_aware_datetime_is_converted_to_utc(self):
        value = datetime(2024, 6, 1, 12, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert parse_date_value(value) == datetime(2024, 6, 1, 17, 0)

    @pytest.mark.unit
    def test_date_object(self):
        assert parse_date_value(date(2024, 2, 29)) == datetime(2024, 2, 29)

    @pytest.mark.unit
    def test_epoch_milliseconds(self):
        assert parse_date_value(1704067200000) == datetime(2024, 1, 1)

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values_are_none(self, value):
        assert parse_date_value(value) is None

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["01/15/2024", "yesterday", True, ["2024-01-01"]])
    def test_invalid_values_raise(self, value):
        with pytest.raises(InvalidInputError):
            parse_date_value(value)


class TestDateRange:
    """Tests for DateRange and build_date_range."""

    @pytest.mark.unit
    def test_no_bounds_is_unbounded(self):
        date_range = build_date_range()
        assert date_range.is_unbounded
        assert date_range == DateRange()

    @pytest.mark.unit
    def test_start_only(self):
        date_range = build_date_range(start_date="2024-01-10")
        assert date_range == DateRange(start=datetime(2024, 1, 10))
        assert not date_range.is_unbounded

    @pytest.mark.unit
    def test_end_only_is_midnight(self):
        date_range = build_date_range(end_date="2024-01-10")
        assert date_range == DateRange(end=datetime(2024, 1, 10))

    @pytest.mark.unit
    def test_both_bounds(self):
        date_range = build_date_range("2024-01-01", "2024-01-31T18:00:00")
        assert date_range.start == datetime(2024, 1, 1)
        assert date_range.end == datetime(2024, 1, 31, 18, 0)

    @pytest.mark.unit
    def test_inverted_range_is_accepted(self):
        date_range = build_date_range("2024-02-01", "2024-01-01")
        assert date_range == DateRange(datetime(2024, 2, 1), datetime(2024, 1, 1))

    @pytest.mark.unit
    def test_invalid_bound_names_the_field(self):
        with pytest.raises(InvalidInputError, match="end_date"):
            build_date_range("2024-01-01", "not a date")


class TestBuildPeriodRange:
    """Tests for build_period_range function."""

    @freeze_time("2024-01-31 15:00:00")
    @pytest.mark.unit
    def test_this_month_includes_whole_last_day(self):
        assert build_period_range("this_month") == DateRange(
            datetime(2024, 1, 1), datetime(2024, 1, 31, 23, 59, 59, 999999)
        )

    @freeze_time("2024-05-20 08:00:00")
    @pytest.mark.unit
    def test_ytd_includes_rest_of_today(self):
        date_range = build_period_range("ytd")
        assert date_range.start == datetime(2024, 1, 1)
        assert date_range.end == datetime(2024, 5, 20, 23, 59, 59, 999999)

    @freeze_time("2024-01-15 12:00:00")
    @pytest.mark.unit
    def test_last_7_days(self):
        assert build_period_range("last_7_days") == DateRange(
            datetime(2024, 1, 8), datetime(2024, 1, 15, 23, 59, 59, 999999)
        )

    @freeze_time("2024-01-15 23:30:00", tz_offset=2)
    @pytest.mark.unit
    def test_today_is_taken_in_utc(self):
        # Local time is already 2024-01-16, UTC is still 2024-01-15
        assert build_period_range("ytd").end == datetime(2024, 1, 15, 23, 59, 59, 999999)

    @pytest.mark.unit
    def test_unknown_period_raises(self):
        with pytest.raises(InvalidInputError, match="Unknown period"):
            build_period_range("fortnight")


class TestParsePeriod:
    """Tests for parse_period function."""

    @freeze_time("2024-01-15")
    @pytest.mark.unit
    def test_parse_this_month(self):
        assert parse_period("this_month") == ("2024-01-01", "2024-01-31")

    @freeze_time("2024-01-15")
    @pytest.mark.unit
    def test_parse_last_month(self):
        assert parse_period("last_month") == ("2023-12-01", "2023-12-31")

    @freeze_time("2024-01-15")
    @pytest.mark.unit
    def test_parse_this_year(self):
        assert parse_period("this_year") == ("2024-01-01", "2024-12-31")

    @freeze_time("2024-01-15")
    @pytest.mark.unit
    def test_parse_last_year(self):
        assert parse_period("last_year") == ("2023-01-01", "2023-12-31")

    @freeze_time("2024-01-15")
    @pytest.mark.unit
    def test_parse_last_7_days(self):
        assert parse_period("last_7_days") == ("2024-01-08", "2024-01-15")

    @freeze_time("2024-01-15")
    @pytest.mark.unit
    def test_parse_last_30_days(self):
        assert parse_period("last_30_days") == ("2023-12-16", "2024-01-15")

    @freeze_time("2024-01-15")
    @pytest.mark.unit
    def test_parse_last_90_days(self):
        assert parse_period("last_90_days") == ("2023-10-17", "2024-01-15")

    @freeze_time("2024-05-20")
    @pytest.mark.unit
    def test_parse_ytd(self):
        assert parse_period("ytd") == ("2024-01-01", "2024-05-20")

    @pytest.mark.unit
    def test_unknown_period_raises(self):
        with pytest.raises(InvalidInputError, match="Unknown period"):
            parse_period("next_decade")


class TestGetMonthRange:
    """Tests for get_month_range function."""

    @pytest.mark.unit
    def test_leap_february(self):
        assert get_month_range(2024, 2) == ("2024-02-01", "2024-02-29")

    @pytest.mark.unit
    def test_regular_february(self):
        assert get_month_range(2023, 2) == ("2023-02-01", "2023-02-28")

    @pytest.mark.unit
    def test_december(self):
        assert get_month_range(2024, 12) == ("2024-12-01", "2024-12-31")

    @pytest.mark.unit
    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month_raises(self, month):
        with pytest.raises(InvalidInputError):
            get_month_range(2024, month)

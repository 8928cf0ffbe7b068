from __future__ import annotations

"""
Tests for calendar helpers.
"""

from datetime import date, datetime, timezone

import pytest

from unitfin.model.periods import (
    available_years,
    format_date_long,
    history_range,
    label_for_month,
    month_range,
    parse_month_key,
    parse_timestamp,
    previous_month,
)


class DescribeParseMonthKey:
    def it_should_parse_numeric_year_month(self):
        assert parse_month_key("2025-03") == (2025, 3)
        assert parse_month_key("2025/7") == (2025, 7)

    def it_should_clamp_out_of_range_months(self):
        assert parse_month_key("2025-13") == (2025, 12)
        assert parse_month_key("2025-00") == (2025, 1)

    def it_should_parse_month_name_then_year(self):
        assert parse_month_key("February, 2025") == (2025, 2)
        assert parse_month_key("october 2024") == (2024, 10)

    def it_should_parse_year_then_month_name(self):
        assert parse_month_key("2024 December") == (2024, 12)

    def it_should_fall_back_to_january_for_bare_year(self):
        assert parse_month_key("2023") == (2023, 1)
        assert parse_month_key("Total, 2023") == (2023, 1)

    def it_should_return_none_without_a_year(self):
        assert parse_month_key("March") is None
        assert parse_month_key("") is None


class DescribeMonthArithmetic:
    def it_should_roll_back_over_january(self):
        assert previous_month(2025, 1) == (2024, 12)
        assert previous_month(2025, 10) == (2025, 9)

    def it_should_label_months(self):
        assert label_for_month(2025, 2) == "February, 2025"
        assert label_for_month(2025, 14) == "December, 2025"

    def it_should_cover_whole_month_inclusively(self):
        window = month_range(2024, 2)
        assert window.start == datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert window.end == datetime(2024, 2, 29, 23, 59, 59, 999999, tzinfo=timezone.utc)
        assert window.contains(datetime(2024, 2, 29, 23, 0))
        assert not window.contains(datetime(2024, 3, 1))

    def it_should_handle_december_range(self):
        window = month_range(2024, 12)
        assert window.end == datetime(2024, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)


class DescribeHistoryRange:
    NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)

    def it_should_go_back_seven_days(self):
        window = history_range("7", self.NOW)
        assert window.start == datetime(2025, 6, 8, 12, 0, tzinfo=timezone.utc)
        assert window.end == self.NOW

    def it_should_cover_calendar_year(self):
        window = history_range("year", self.NOW)
        assert window.start == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert window.end.month == 12 and window.end.day == 31

    def it_should_return_none_for_all(self):
        assert history_range("all", self.NOW) is None

    def it_should_reject_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown range preset"):
            history_range("90", self.NOW)


class DescribeFormatting:
    def it_should_format_ordinal_dates(self):
        assert format_date_long("2025-01-01") == "1st January, 2025"
        assert format_date_long("2025-03-22") == "22nd March, 2025"
        assert format_date_long("2025-03-13") == "13th March, 2025"
        assert format_date_long(datetime(2025, 5, 3)) == "3rd May, 2025"

    def it_should_return_empty_for_unreadable_dates(self):
        assert format_date_long("not a date") == ""

    def it_should_parse_zulu_timestamps(self):
        parsed = parse_timestamp("2025-01-05T10:00:00.000Z")
        assert parsed == datetime(2025, 1, 5, 10, 0, tzinfo=timezone.utc)

    def it_should_list_years_most_recent_first(self):
        years = available_years(date(2018, 5, 1))
        assert years == [2018, 2017, 2016]

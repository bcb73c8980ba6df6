"""
Tests for date parsing and week expansion.
"""

from datetime import date, datetime

import pytest

from flight_scheduler.preprocessing.dates import (
    DateFormatError,
    date_label,
    parse_date,
    week_dates,
)


class TestDates:

    @pytest.mark.parametrize(
        "value",
        ["1/2/2006", "01/02/2006", "2006-01-02", "Jan 02 06", date(2006, 1, 2), datetime(2006, 1, 2, 9, 30)],
    )
    def test_accepted_formats(self, value):
        assert parse_date(value) == date(2006, 1, 2)
        assert date_label(value) == "Jan 02 06"

    @pytest.mark.parametrize("value", ["", "13/45/2006", "2006/01/02", "yesterday"])
    def test_rejected_formats(self, value):
        with pytest.raises(DateFormatError):
            parse_date(value)

    def test_date_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            date_label("nope")

    def test_week_crosses_month_end(self):
        assert week_dates("1/29/2006") == [
            "Jan 29 06", "Jan 30 06", "Jan 31 06",
            "Feb 01 06", "Feb 02 06", "Feb 03 06", "Feb 04 06",
        ]

    def test_leap_day(self):
        assert week_dates("2/28/2024", days=2) == ["Feb 28 24", "Feb 29 24"]

    def test_days_must_be_positive(self):
        with pytest.raises(ValueError):
            week_dates("1/2/2006", days=0)

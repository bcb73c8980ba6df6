from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Union

FULL_DATE_FORMAT = "%b %d %y"     # "Jan 02 06"
INPUT_DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d", FULL_DATE_FORMAT)
DAYS_PER_WEEK = 7

DateLike = Union[str, date, datetime]


class DateFormatError(ValueError):
    """Raised when a date value cannot be read in any accepted format."""


def parse_date(value: DateLike) -> date:
    """
    Parse a date given as a date/datetime or as a string in one of:
    "1/2/2006", "2006-01-02" or "Jan 02 06".
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    for fmt in INPUT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise DateFormatError(f"Unrecognised date: {value!r}")


def date_label(value: DateLike) -> str:
    return parse_date(value).strftime(FULL_DATE_FORMAT)


def week_dates(start: DateLike, days: int = DAYS_PER_WEEK) -> List[str]:
    """Canonical labels for `days` consecutive days beginning at `start`."""
    if days <= 0:
        raise ValueError(f"days must be > 0, got {days}")
    d0 = parse_date(start)
    return [(d0 + timedelta(days=i)).strftime(FULL_DATE_FORMAT) for i in range(days)]

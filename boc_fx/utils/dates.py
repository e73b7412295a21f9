"""Date helpers shared by the converter and the console."""

from __future__ import annotations

from datetime import date, datetime

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str | date) -> date:
    """Parse a date string in ISO format to :class:`date`."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()


def is_weekend(day: date) -> bool:
    """Return True for Saturdays and Sundays."""

    return day.weekday() >= 5

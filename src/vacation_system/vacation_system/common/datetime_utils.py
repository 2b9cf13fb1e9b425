from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Union

from ..core.exceptions import MalformedDateError

DateLike = Union[date, str]

_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")


def parse_date(value: DateLike, field_name: str = "date") -> date:
    """Parse a registry/store date.

    Accepts ``date`` objects, ISO ``YYYY-MM-DD`` and Brazilian ``dd/mm/yyyy``.
    Raises MalformedDateError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        v = value.strip()
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(v, fmt).date()
            except ValueError:
                continue
    raise MalformedDateError(value, field_name)


def format_iso(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def format_br(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def add_years(value: date, years: int) -> date:
    """Shift a date by whole calendar years.

    29 February falls back to 28 February in non-leap target years.
    """
    year = value.year + years
    day = value.day
    if value.month == 2 and day == 29 and not calendar.isleap(year):
        day = 28
    return value.replace(year=year, day=day)


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days in [start, end], both ends counted."""
    return (end - start).days + 1


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start <= b_end and a_end >= b_start


def today_local() -> date:
    """Current local date, used when a caller does not pass ``today``."""
    return datetime.now().date()

"""
Date and time helpers shared by windows, codecs and forms.
"""

import math
import re
from datetime import date, datetime, tzinfo
from typing import Optional

from timesheet.domain.models.base import ParseError

DATE_FORMAT = "%Y-%m-%d"
DATE_FORMAT_DE = "%d.%m.%Y"
DATE_TIME_FORMAT_FORM = "%d.%m.%Y %H:%M"
TIME_FORMAT = "%H:%M"

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def quarter_of(value: date) -> int:
    """Quarter of the year (1-4) a date falls into."""
    return math.ceil(value.month / 3)


def first_month_of_quarter(quarter: int) -> int:
    return 3 * (quarter - 1) + 1


def parse_date(value: str, tz: Optional[tzinfo] = None) -> datetime:
    """
    Parse a 'YYYY-MM-DD' string into midnight of that day.

    Raises:
        ParseError: if the value is not a valid date
    """
    if not value or not _DATE_PATTERN.match(value):
        raise ParseError(f"could not parse date from '{value}'")
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        raise ParseError(f"could not parse date from '{value}'")
    return parsed.replace(tzinfo=tz) if tz is not None else parsed


def parse_date_time_form(value: str, tz: Optional[tzinfo] = None) -> datetime:
    """Parse a form value like '21.11.2020 16:46'."""
    try:
        parsed = datetime.strptime(value, DATE_TIME_FORMAT_FORM)
    except (TypeError, ValueError):
        raise ParseError(f"could not parse date time from '{value}'")
    return parsed.replace(tzinfo=tz) if tz is not None else parsed


def format_date(value: date) -> str:
    """ISO date of a date or datetime, zero padded for any year."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def format_date_de(value: date) -> str:
    return value.strftime(DATE_FORMAT_DE)


def format_date_de_short(value: date) -> str:
    """Short German date without zero padding (e.g. '1.11.')."""
    return f"{value.day}.{value.month}."


def format_time(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def complete_time_value(value: str) -> str:
    """
    Complete a loosely typed time of day to 'HH:MM'.

    '9' becomes '09:00', '10/12' becomes '10:12' and decimal hours are
    converted to minutes ('10,5' becomes '10:30', '10,75' becomes '10:45').
    Values that cannot be completed are returned unchanged.
    """
    completed = value.replace(",,", ":").replace("/", ":").replace(";", ",").replace(".", ":")

    if "," in completed:
        hh, mm = completed.split(",")[:2]
        if len(mm) < 2:
            mm = mm + "0"
        try:
            fraction = float(mm)
        except ValueError:
            return value
        # Hundredths of an hour to minutes
        minutes = round(fraction * 0.6)
        return f"{hh.zfill(2)}:{minutes:02d}"

    if ":" in completed:
        return completed

    if not completed.isdigit():
        return value

    return f"{completed.zfill(2)}:00"

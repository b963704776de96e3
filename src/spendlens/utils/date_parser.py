"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from dateutil import parser as date_parser
from dateutil import tz as dateutil_tz
from dateutil.relativedelta import relativedelta

_NUMERIC_DATE = re.compile(r"^(\d{1,4})[/.\-](\d{1,2})[/.\-](\d{1,4})$")
_ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


def get_timezone(name: Optional[str]) -> tzinfo:
    """Resolve a time zone name, defaulting to UTC.

    Raises:
        ValueError: If the name is not a known time zone
    """
    if not name or name.upper() == "UTC":
        return dateutil_tz.UTC
    zone = dateutil_tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown time zone '{name}'")
    return zone


def month_key_for(timestamp: datetime) -> str:
    """Return the "YYYY-MM" bucket of a timestamp in its own time zone."""
    return f"{timestamp.year:04d}-{timestamp.month:02d}"


def parse_timestamp(value, zone: tzinfo, day_first: bool = False) -> datetime:
    """Parse a timestamp into an aware datetime in ``zone``.

    ISO-8601 strings are accepted directly. Purely numeric ``a/b/c`` dates are
    read with a fixed field order chosen by ``day_first`` so one batch is never
    resolved row-by-row differently. Other strings go through dateutil.

    Naive values are taken to be in ``zone``; aware values are converted.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        numeric = _NUMERIC_DATE.match(text)
        try:
            if _ISO_PREFIX.match(text):
                parsed = date_parser.isoparse(text)
            elif numeric:
                parsed = _parse_numeric_date(numeric.groups(), day_first)
            else:
                parsed = date_parser.parse(text, dayfirst=day_first)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Could not parse date '{text}': {e}")
    else:
        raise ValueError(f"Could not parse date {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=zone)
    return parsed.astimezone(zone)


def _parse_numeric_date(parts: tuple[str, str, str], day_first: bool) -> datetime:
    first, second, third = (int(p) for p in parts)
    if len(parts[0]) == 4:
        return datetime(first, second, third)
    year = third + 2000 if len(parts[2]) == 2 else third
    if day_first:
        return datetime(year, second, first)
    return datetime(year, first, second)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month_key(month_key: str) -> date:
    """Parse a "YYYY-MM" key into the first day of that month.

    Raises:
        ValueError: If the key is malformed
    """
    try:
        return datetime.strptime(month_key.strip(), "%Y-%m").date()
    except ValueError:
        raise ValueError(f"Invalid month '{month_key}', expected YYYY-MM")

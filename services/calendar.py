"""
Calendar Service

Date key formatting and the window of upcoming Sundays.
"""

import calendar
from datetime import date, datetime, timedelta, timezone

from .errors import ValidationError

SUNDAY = 6  # date.weekday() value


def date_key(d):
    """Format a date as its YYYY-MM-DD document key."""
    return d.isoformat()


def parse_date_key(key):
    """
    Parse a YYYY-MM-DD key into a date.

    Only keys that format back to exactly the same string are accepted,
    so '2026-1-4' or '2026-01-04T00:00' are rejected.
    """
    if not isinstance(key, str) or len(key) != 10:
        raise ValidationError(f"Invalid date key: {key!r}")
    try:
        parsed = date.fromisoformat(key)
    except ValueError:
        raise ValidationError(f"Invalid date key: {key!r}")
    if parsed.isoformat() != key:
        raise ValidationError(f"Invalid date key: {key!r}")
    return parsed


def utc_today():
    return datetime.now(timezone.utc).date()


def add_months(d, months):
    """Add calendar months, clamping the day to the end of the target month."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def next_sunday(d):
    """Return d if it is a Sunday, otherwise the following Sunday."""
    return d + timedelta(days=(SUNDAY - d.weekday()) % 7)


def upcoming_sundays(today=None, months_ahead=3):
    """
    List every Sunday from today (rolled forward) through months_ahead months.

    The end date is inclusive.
    """
    if today is None:
        today = utc_today()
    end = add_months(today, months_ahead)
    sundays = []
    current = next_sunday(today)
    while current <= end:
        sundays.append(current)
        current += timedelta(days=7)
    return sundays


def month_name(key):
    """English month name for a date key, e.g. 'October'."""
    return calendar.month_name[parse_date_key(key).month]

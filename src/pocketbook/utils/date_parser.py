"""Date parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
PERIODS = ["this-month", "this-year", "this-week", "last-month", "last-year", "last-week"]
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def month_start(value: date) -> date:
    """First day of the month containing value."""
    return value.replace(day=1)


def year_start(value: date) -> date:
    """First day of the year containing value."""
    return value.replace(month=1, day=1)


def week_start(value: date) -> date:
    """Monday of the week containing value."""
    return value - timedelta(days=value.weekday())


def _relative_start(anchor: str, unit: str, today: date) -> date | None:
    """Start of the month, year or week named by 'last/this/next <unit>'."""
    step = {"last": -1, "this": 0, "next": 1}[anchor]
    if unit == "month":
        return month_start(today) + relativedelta(months=step)
    if unit == "year":
        return year_start(today) + relativedelta(years=step)
    if unit == "week":
        return week_start(today) + timedelta(weeks=step)
    if anchor == "last" and unit in WEEKDAYS:
        # Strictly before today, so "last monday" on a Monday is a week ago
        days_ago = (today.weekday() - WEEKDAYS.index(unit)) % 7 or 7
        return today - timedelta(days=days_ago)
    return None


def parse_date(date_str: str) -> date:
    """Parse a user-supplied date for the command line.

    Accepts ISO and free-form absolute dates ("2024-01-15",
    "January 15, 2024") plus "today", "yesterday", "tomorrow" and
    "last/this/next month|year|week". The month, year and week forms
    resolve to the first day of that period.

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in fixed:
        return fixed[text]

    anchor, _, unit = text.partition(" ")
    if anchor in ("last", "this", "next") and unit:
        resolved = _relative_start(anchor, unit, today)
        if resolved is not None:
            return resolved

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Inclusive (start, end) of a named period.

    "this-*" periods end today; "last-*" periods are complete.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return month_start(today), today
    if period == "this-year":
        return year_start(today), today
    if period == "this-week":
        return week_start(today), today
    if period == "last-month":
        start = month_start(today) - relativedelta(months=1)
        return start, month_start(today) - timedelta(days=1)
    if period == "last-year":
        start = year_start(today) - relativedelta(years=1)
        return start, year_start(today) - timedelta(days=1)
    if period == "last-week":
        start = week_start(today) - timedelta(weeks=1)
        return start, start + timedelta(days=6)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")


def parse_iso_date(value: object) -> date:
    """Parse a strict ISO calendar date (YYYY-MM-DD).

    Unlike parse_date, no relative or free-form input is accepted.

    Raises:
        ValueError: If value is not a YYYY-MM-DD string naming a real date
    """
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date {value!r}: expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid date {value!r}: {e}") from e

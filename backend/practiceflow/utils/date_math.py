"""
Calendar arithmetic shared by template instantiation and recurrence scheduling.
"""

import calendar
from datetime import date, datetime, timedelta, timezone


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def add_days(d: date, days: int) -> date:
    """Shift a date by a (possibly negative) number of calendar days."""
    return d + timedelta(days=days)


def add_months(d: date, months: int) -> date:
    """
    Shift a date by a (possibly negative) number of calendar months.

    The day of month is kept where the target month has it and clamped to the
    target month's last day otherwise, so Jan 31 + 1 month is Feb 28 (or 29).

    Args:
        d: Date to shift
        months: Number of months, negative to move backwards

    Returns:
        Shifted date
    """
    month_index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def add_years(d: date, years: int) -> date:
    """Shift a date by whole years; Feb 29 clamps to Feb 28 in non-leap years."""
    return add_months(d, years * 12)

"""
Stateless calendar-date arithmetic.

Every helper returns a new ``date``; nothing here is mutated in place.
"""

import calendar
from datetime import date
from datetime import datetime
from datetime import timedelta

from dateutil.relativedelta import relativedelta


def last_day_of_month(year: int, month: int) -> int:
    """Return the number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def add_months(day: date, months: int) -> date:
    """Move ``day`` by whole months, clamping the day-of-month to the target month.

    Jan 31 + 1 month → Feb 28 (or 29).  Callers that only care about the month
    should anchor on the first of the month.
    """
    return day + relativedelta(months=months)


def add_years(day: date, years: int) -> date:
    """Move ``day`` by whole years; Feb 29 clamps to Feb 28 in non-leap years."""
    return day + relativedelta(years=years)


def month_days(year: int, month: int):
    """Yield every date of the given month in order."""
    for dom in range(1, last_day_of_month(year, month) + 1):
        yield date(year, month, dom)


def as_date(value: date) -> date:
    """Reduce a ``datetime`` to its calendar date; plain dates pass through.

    Membership and range checks compare year, month and day only, so
    time-of-day and timezone offsets never matter.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(value: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` string; raises ValueError on bad input."""
    return date.fromisoformat(value.strip())

"""
Recurrence expansion: enumerate every date a rule produces within a range.

``expand`` is pure: the same (rule, range) always yields the same tuple.
Each per-pattern loop advances its cursor by at least one day per iteration
and stops at the (explicit or default-horizon) end date, so expansion always
terminates.
"""

import logging
from collections.abc import Iterator
from datetime import date

from recurrence_preview.dates import add_days
from recurrence_preview.dates import add_months
from recurrence_preview.dates import add_years
from recurrence_preview.dates import month_days
from recurrence_preview.models import DEFAULT_HORIZON_YEARS
from recurrence_preview.models import DateRange
from recurrence_preview.models import Pattern
from recurrence_preview.models import RecurrenceRule
from recurrence_preview.models import RuleContractError
from recurrence_preview.models import Weekday

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def _daily(rule: RecurrenceRule, start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current = add_days(current, rule.interval)


def _weekly(rule: RecurrenceRule, start: date, end: date) -> Iterator[date]:
    """Walk day by day; after every 7 days processed, skip the idle weeks.

    The week cycle is anchored at ``start``: a day at offset ``d`` from start
    is eligible iff ``(d // 7) % interval == 0``.
    """
    if not rule.weekdays:
        return
    skip = DAYS_PER_WEEK * (rule.interval - 1)
    current = start
    elapsed = 0
    while current <= end:
        if Weekday.of(current) in rule.weekdays:
            yield current
        current = add_days(current, 1)
        elapsed += 1
        if elapsed % DAYS_PER_WEEK == 0 and skip:
            current = add_days(current, skip)


def _scan_month(
    rule: RecurrenceRule, year: int, month: int, start: date, end: date
) -> Iterator[date]:
    for day in month_days(year, month):
        if start <= day <= end and rule.matches_day(day):
            yield day


def _monthly(rule: RecurrenceRule, start: date, end: date) -> Iterator[date]:
    # Anchor on the 1st so month stepping never clamps (Jan 31 + 1 month).
    cursor = start.replace(day=1)
    while cursor <= end:
        yield from _scan_month(rule, cursor.year, cursor.month, start, end)
        cursor = add_months(cursor, rule.interval)


def _yearly(rule: RecurrenceRule, start: date, end: date) -> Iterator[date]:
    cursor = date(start.year, 1, 1)
    while cursor <= end:
        for month in range(1, 13):
            yield from _scan_month(rule, cursor.year, month, start, end)
        cursor = add_years(cursor, rule.interval)


_EXPANDERS = {
    Pattern.DAILY: _daily,
    Pattern.WEEKLY: _weekly,
    Pattern.MONTHLY: _monthly,
    Pattern.YEARLY: _yearly,
}


def iter_occurrences(
    rule: RecurrenceRule,
    date_range: DateRange,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> Iterator[date]:
    """Lazily yield occurrences in increasing order.

    Raises RuleContractError if the rule was not normalised (interval < 1).
    """
    if rule.interval < 1:
        raise RuleContractError(f"interval must be >= 1, got {rule.interval}")
    start = date_range.start
    end = date_range.resolved_end(horizon_years)
    if start > end:
        return iter(())
    if not rule.weekdays and rule.nth_day is None and rule.pattern in (
        Pattern.MONTHLY,
        Pattern.YEARLY,
    ):
        return iter(())
    return _EXPANDERS[rule.pattern](rule, start, end)


def expand(
    rule: RecurrenceRule,
    date_range: DateRange,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> tuple[date, ...]:
    """Return every date ``rule`` produces within ``date_range``, strictly increasing.

    An empty tuple is a valid result (filters select nothing, or start > end).
    """
    dates = tuple(iter_occurrences(rule, date_range, horizon_years))
    logger.debug(
        "Expanded %s every %d from %s to %s: %d date(s)",
        rule.pattern.value,
        rule.interval,
        date_range.start,
        date_range.resolved_end(horizon_years),
        len(dates),
    )
    return dates


def expand_set(
    rule: RecurrenceRule,
    date_range: DateRange,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> frozenset[date]:
    """Occurrences as a frozenset, for calendar-cell membership tests."""
    return frozenset(expand(rule, date_range, horizon_years))

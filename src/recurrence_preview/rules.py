"""
Build normalised RecurrenceRule / DateRange values from raw form input.

Form fields arrive as strings, ints or None.  Out-of-range numbers are clamped
or dropped; only input that cannot be interpreted at all is rejected with a
ValidationError naming the offending field.
"""

import calendar
import logging
from collections.abc import Iterable
from datetime import date

from recurrence_preview.dates import as_date
from recurrence_preview.dates import parse_date
from recurrence_preview.models import DateRange
from recurrence_preview.models import Pattern
from recurrence_preview.models import RecurrenceRule
from recurrence_preview.models import ValidationError
from recurrence_preview.models import Weekday

logger = logging.getLogger(__name__)

NTH_DAY_MIN = 1
NTH_DAY_MAX = 31

# Short tag ("mon") or full name ("monday"), lower-cased.
_WEEKDAY_BY_NAME = {wd.value.lower(): wd for wd in Weekday}
_WEEKDAY_BY_NAME.update({calendar.day_name[wd.python_weekday].lower(): wd for wd in Weekday})


def parse_pattern(value: str | Pattern) -> Pattern:
    if isinstance(value, Pattern):
        return value
    if not isinstance(value, str):
        raise ValidationError("pattern", f"expected a pattern name, got {value!r}")
    try:
        return Pattern(value.strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in Pattern)
        message = f"unknown pattern {value!r} (choose from {choices})"
        raise ValidationError("pattern", message) from None


def parse_weekday(value: str | Weekday) -> Weekday:
    """Accept the short tag or the full day name in any case: ``Mon``, ``MON``, ``monday``."""
    if isinstance(value, Weekday):
        return value
    tag = str(value).strip().lower()
    weekday = _WEEKDAY_BY_NAME.get(tag)
    if weekday is None:
        raise ValidationError("weekdays", f"unknown weekday {value!r}")
    return weekday


def parse_weekdays(values: Iterable[str | Weekday] | str | None) -> frozenset[Weekday]:
    """Parse weekday tags; a single string may hold a comma-separated list."""
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [v for v in values.split(",") if v.strip()]
    return frozenset(parse_weekday(v) for v in values)


def _parse_int(field: str, value) -> int | None:
    """Return an int, None for an empty field, or raise for non-numeric text."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(field, f"expected a whole number, got {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise ValidationError(field, f"expected a whole number, got {value!r}") from None


def normalize_interval(value) -> int:
    """Unset or non-positive intervals become 1."""
    interval = _parse_int("interval", value)
    if interval is None or interval < 1:
        return 1
    return interval


def normalize_nth_day(value) -> int | None:
    """Days outside 1–31 are cleared rather than rejected."""
    nth_day = _parse_int("nth_day", value)
    if nth_day is None or not NTH_DAY_MIN <= nth_day <= NTH_DAY_MAX:
        return None
    return nth_day


def build_rule(
    pattern: str | Pattern,
    interval=None,
    weekdays: Iterable[str | Weekday] | str | None = None,
    nth_day=None,
) -> RecurrenceRule:
    """Return a normalised RecurrenceRule or raise ValidationError."""
    rule = RecurrenceRule(
        pattern=parse_pattern(pattern),
        interval=normalize_interval(interval),
        weekdays=parse_weekdays(weekdays),
        nth_day=normalize_nth_day(nth_day),
    )
    logger.debug("Built rule: %s", rule)
    return rule


def _coerce_date(field: str, value: date | str | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, date):
        return as_date(value)
    if not str(value).strip():
        return None
    try:
        return parse_date(str(value))
    except ValueError:
        raise ValidationError(field, f"invalid date {value!r} (expected YYYY-MM-DD)") from None


def build_range(start: date | str | None, end: date | str | None = None) -> DateRange:
    """Return a DateRange; ``start`` is required, ``end`` optional.

    ``start > end`` is accepted: it simply expands to nothing.
    """
    start_date = _coerce_date("start", start)
    if start_date is None:
        raise ValidationError("start", "a start date is required")
    return DateRange(start=start_date, end=_coerce_date("end", end))

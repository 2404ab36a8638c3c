"""
Pure data models — no rendering or CLI imports.
"""

import calendar
import enum
from dataclasses import dataclass
from dataclasses import field
from datetime import date
from pathlib import Path

from dateutil.relativedelta import relativedelta

DEFAULT_CONFIG = Path.home() / ".config/recurrence-preview.conf"

# Expansion horizon used when a range has no explicit end: December 31 of
# start.year + DEFAULT_HORIZON_YEARS.  Policy, not correctness.
DEFAULT_HORIZON_YEARS = 10


class RecurrencePreviewError(Exception):
    """Base exception for recurrence preview errors."""

    pass


class ValidationError(RecurrencePreviewError):
    """Malformed rule or range input, reported against a single form field."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class RuleContractError(RecurrencePreviewError):
    """A rule reached the expander without being normalised first."""

    pass


class ConfigError(RecurrencePreviewError):
    """Invalid value in the configuration file."""

    pass


class Pattern(enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Weekday(enum.Enum):
    """Weekday tags, Sunday first, valued by their short display name."""

    SUN = "Sun"
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Return the tag for a calendar date."""
        return _BY_ISO_WEEKDAY[day.isoweekday()]

    @property
    def python_weekday(self) -> int:
        """Monday=0 … Sunday=6, as used by ``date.weekday()`` and ``calendar``."""
        return (list(Weekday).index(self) - 1) % 7


# date.isoweekday(): Monday=1 … Sunday=7
_BY_ISO_WEEKDAY = {
    7: Weekday.SUN,
    1: Weekday.MON,
    2: Weekday.TUE,
    3: Weekday.WED,
    4: Weekday.THU,
    5: Weekday.FRI,
    6: Weekday.SAT,
}


@dataclass(frozen=True)
class RecurrenceRule:
    """Normalised recurrence pattern.

    Build instances with ``rules.build_rule`` so raw form input is validated
    and clamped; the expander assumes ``interval >= 1``.
    """

    pattern: Pattern
    interval: int = 1
    weekdays: frozenset[Weekday] = field(default_factory=frozenset)
    nth_day: int | None = None  # 1–31, OR'd with weekdays for monthly/yearly

    def matches_day(self, day: date) -> bool:
        """Monthly/yearly filter: weekday in ``weekdays`` OR day-of-month == ``nth_day``."""
        return Weekday.of(day) in self.weekdays or day.day == self.nth_day


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-date range.

    When ``end`` is None the range is bounded by a default horizon (see
    ``resolved_end``) so that expansion always terminates.  The horizon is a
    policy choice and callers that care about far-future dates should pass an
    explicit end.
    """

    start: date
    end: date | None = None

    def resolved_end(self, horizon_years: int = DEFAULT_HORIZON_YEARS) -> date:
        if self.end is not None:
            return self.end
        return date(self.start.year + horizon_years, 12, 31)


@dataclass(frozen=True)
class DisplayMonth:
    """Year+month cursor used only for rendering."""

    year: int
    month: int

    @classmethod
    def containing(cls, day: date) -> "DisplayMonth":
        return cls(day.year, day.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def label(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    def shift(self, months: int = 0, years: int = 0) -> "DisplayMonth":
        """Return the cursor moved by the given number of months and years."""
        return DisplayMonth.containing(self.first_day + relativedelta(months=months, years=years))


@dataclass
class PreviewConfig:
    """Effective defaults for the CLI, merged from the config file."""

    pattern: str = "daily"
    interval: int = 1
    weekdays: list[str] = field(default_factory=list)
    nth_day: int | None = None
    horizon_years: int = DEFAULT_HORIZON_YEARS
    first_weekday: str = "Sun"
    months: int = 1

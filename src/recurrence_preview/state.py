"""
RuleState — the single owned, mutable holder of the rule being edited.

Form controls call ``update(**changes)``; the holder rebuilds the rule and
range from the merged raw fields, recomputes the full occurrence set and
swaps it in wholesale.  Renderers either subscribe for callbacks or compare
``version`` between polls.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from datetime import date

from recurrence_preview.expander import expand
from recurrence_preview.models import DEFAULT_HORIZON_YEARS
from recurrence_preview.models import DateRange
from recurrence_preview.models import RecurrenceRule
from recurrence_preview.rules import build_range
from recurrence_preview.rules import build_rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleFields:
    """Raw form values, exactly as entered."""

    pattern: object = "daily"
    interval: object = 1
    weekdays: object = field(default_factory=tuple)
    nth_day: object = None
    start: object = None
    end: object = None


Subscriber = Callable[["RuleState"], None]


class RuleState:
    """Owns the rule/range and the occurrences derived from them."""

    def __init__(self, horizon_years: int = DEFAULT_HORIZON_YEARS, **fields):
        self.horizon_years = horizon_years
        self.fields = RuleFields()
        self.rule: RecurrenceRule | None = None
        self.date_range: DateRange | None = None
        self.occurrences: tuple[date, ...] = ()
        self.matches: frozenset[date] = frozenset()
        self.version = 0
        self._subscribers: list[Subscriber] = []
        self.update(**fields)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Run ``callback`` after every successful update; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def update(self, **changes) -> "RuleState":
        """Merge field changes, rebuild and recompute.

        Raises ValidationError (leaving the previous state untouched) when the
        merged fields are malformed.
        """
        fields = replace(self.fields, **changes)
        rule = build_rule(fields.pattern, fields.interval, fields.weekdays, fields.nth_day)
        if fields.start is None:
            # Nothing to expand until a start date is picked.
            date_range = None
            occurrences: tuple[date, ...] = ()
        else:
            date_range = build_range(fields.start, fields.end)
            occurrences = expand(rule, date_range, self.horizon_years)

        self.fields = fields
        self.rule = rule
        self.date_range = date_range
        self.occurrences = occurrences
        self.matches = frozenset(occurrences)
        self.version += 1
        logger.debug("RuleState v%d: %d occurrence(s)", self.version, len(occurrences))

        for callback in list(self._subscribers):
            callback(self)
        return self

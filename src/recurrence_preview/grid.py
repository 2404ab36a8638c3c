"""Month-grid model — no rendering dependencies."""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from recurrence_preview.dates import as_date
from recurrence_preview.models import DisplayMonth
from recurrence_preview.models import Weekday


@dataclass(frozen=True)
class GridCell:
    """One cell of a month grid; ``day`` is None for leading/trailing padding."""

    day: date | None
    recurring: bool = False


def weekday_headers(first_weekday: Weekday = Weekday.SUN) -> list[Weekday]:
    """Column order of the grid, starting at ``first_weekday``."""
    days = list(Weekday)
    start = days.index(first_weekday)
    return days[start:] + days[:start]


def month_grid(
    display: DisplayMonth,
    matches: Iterable[date],
    first_weekday: Weekday = Weekday.SUN,
) -> list[list[GridCell]]:
    """Return the weeks of ``display`` as rows of 7 cells.

    A cell is recurring iff its date is in ``matches``; comparison is by
    calendar date only, so ``datetime`` members match on their date.
    """
    match_days = {as_date(d) for d in matches}
    cal = calendar.Calendar(firstweekday=first_weekday.python_weekday)

    weeks: list[list[GridCell]] = []
    for week in cal.monthdatescalendar(display.year, display.month):
        row = []
        for day in week:
            if day.month != display.month:
                row.append(GridCell(day=None))
            else:
                row.append(GridCell(day=day, recurring=day in match_days))
        weeks.append(row)
    return weeks

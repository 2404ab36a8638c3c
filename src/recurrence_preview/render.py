"""
Rich rendering for month grids and occurrence lists.

Importable functions:
  render_rule(rule, date_range, count, console)  — summary panel for a rule
  render_month(grid, display, console)  — one month as a 7-column table
  render_dates(dates, console, limit=None)  — occurrences as a numbered table
"""

from collections.abc import Sequence
from datetime import date

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from recurrence_preview.grid import GridCell
from recurrence_preview.grid import weekday_headers
from recurrence_preview.models import DEFAULT_HORIZON_YEARS
from recurrence_preview.models import DateRange
from recurrence_preview.models import DisplayMonth
from recurrence_preview.models import Pattern
from recurrence_preview.models import RecurrenceRule
from recurrence_preview.models import Weekday

RECURRING_STYLE = "bold white on blue"

_UNITS = {
    Pattern.DAILY: "day",
    Pattern.WEEKLY: "week",
    Pattern.MONTHLY: "month",
    Pattern.YEARLY: "year",
}


def describe_rule(rule: RecurrenceRule) -> str:
    """Human-readable one-liner, e.g. ``every 2 weeks on Mon, Wed``."""
    unit = _UNITS[rule.pattern]
    text = f"every {unit}" if rule.interval == 1 else f"every {rule.interval} {unit}s"
    filters = []
    if rule.weekdays and rule.pattern is not Pattern.DAILY:
        ordered = [wd.value for wd in Weekday if wd in rule.weekdays]
        filters.append("on " + ", ".join(ordered))
    if rule.nth_day is not None and rule.pattern in (Pattern.MONTHLY, Pattern.YEARLY):
        filters.append(f"on day {rule.nth_day}")
    if filters:
        text += " " + " or ".join(filters)
    return text


def render_rule(
    rule: RecurrenceRule,
    date_range: DateRange,
    count: int,
    console: Console,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> None:
    """Render the rule, its range and the number of occurrences as a Panel."""
    info = Text()
    info.append("  Pattern:     ", style="bold")
    info.append(f"{rule.pattern.value} ", style="cyan")
    info.append(f"({describe_rule(rule)})\n", style="dim")
    info.append("  From:        ", style="bold")
    info.append(f"{date_range.start.isoformat()}\n")
    info.append("  Until:       ", style="bold")
    if date_range.end is not None:
        info.append(date_range.end.isoformat())
    else:
        info.append(date_range.resolved_end(horizon_years).isoformat())
        info.append(f"  (default {horizon_years}-year horizon)", style="yellow")
    info.append("\n  Occurrences: ", style="bold")
    info.append(str(count), style="green" if count else "red")

    console.print(Panel(info, title="[bold]Recurrence Preview[/bold]", expand=False))


def render_month(
    grid: list[list[GridCell]],
    display: DisplayMonth,
    console: Console,
    first_weekday: Weekday = Weekday.SUN,
) -> None:
    """Render one month grid; recurring days are highlighted."""
    table = Table(title=f"[bold]{display.label}[/bold]", show_header=True, header_style="bold cyan")
    for wd in weekday_headers(first_weekday):
        table.add_column(wd.value, justify="center", width=4)

    for week in grid:
        cells = []
        for cell in week:
            if cell.day is None:
                cells.append("")
            elif cell.recurring:
                cells.append(Text(f"{cell.day.day:>2}", style=RECURRING_STYLE))
            else:
                cells.append(Text(f"{cell.day.day:>2}"))
        table.add_row(*cells)

    console.print(table)


def render_dates(dates: Sequence[date], console: Console, limit: int | None = None) -> None:
    """Render occurrences as a numbered table, optionally truncated to ``limit`` rows."""
    shown = dates if limit is None else dates[:limit]

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="bold", justify="right")
    table.add_column("Date")
    table.add_column("Weekday", style="dim")

    for i, day in enumerate(shown, 1):
        table.add_row(str(i), day.isoformat(), Weekday.of(day).value)

    console.print(table)
    if len(shown) < len(dates):
        console.print(f"[dim]… {len(dates) - len(shown)} more not shown[/dim]")

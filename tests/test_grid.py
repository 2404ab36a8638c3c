"""
Unit tests for the month-grid model and its Rich rendering.
"""

from datetime import date
from datetime import datetime

from rich.console import Console

from conftest import make_range
from conftest import make_rule
from recurrence_preview.expander import expand_set
from recurrence_preview.grid import month_grid
from recurrence_preview.grid import weekday_headers
from recurrence_preview.models import DisplayMonth
from recurrence_preview.models import Weekday
from recurrence_preview.render import describe_rule
from recurrence_preview.render import render_dates
from recurrence_preview.render import render_month
from recurrence_preview.render import render_rule


def _recurring_days(grid):
    """Dates marked recurring in a grid, in order."""
    return [cell.day for week in grid for cell in week if cell.recurring]


class TestMonthGrid:
    def test_sunday_first_padding(self):
        """March 2024 starts on a Friday: five blank cells before the 1st."""
        grid = month_grid(DisplayMonth(2024, 3), [])
        first_week = grid[0]
        assert [cell.day for cell in first_week[:5]] == [None] * 5
        assert first_week[5].day == date(2024, 3, 1)
        assert all(len(week) == 7 for week in grid)

    def test_monday_first(self):
        grid = month_grid(DisplayMonth(2024, 1), [], first_weekday=Weekday.MON)
        assert grid[0][0].day == date(2024, 1, 1)

    def test_trailing_padding(self):
        """Cells after the last day of the month are blank."""
        grid = month_grid(DisplayMonth(2024, 2), [])
        days = [cell.day for week in grid for cell in week if cell.day is not None]
        assert days[-1] == date(2024, 2, 29)
        assert grid[-1][-1].day is None

    def test_marks_members(self):
        rule = make_rule("weekly", weekdays=["Mon"])
        matches = expand_set(rule, make_range("2024-01-01", "2024-12-31"))
        grid = month_grid(DisplayMonth(2024, 1), matches)
        assert _recurring_days(grid) == [date(2024, 1, d) for d in (1, 8, 15, 22, 29)]

    def test_other_months_not_marked(self):
        """Matches outside the displayed month never appear in its grid."""
        grid = month_grid(DisplayMonth(2024, 2), {date(2024, 1, 31), date(2024, 3, 1)})
        assert _recurring_days(grid) == []

    def test_membership_by_calendar_date(self):
        """A datetime late in the day still marks its calendar date."""
        grid = month_grid(DisplayMonth(2024, 5), [datetime(2024, 5, 10, 23, 30)])
        assert _recurring_days(grid) == [date(2024, 5, 10)]

    def test_headers_rotate(self):
        headers = weekday_headers(Weekday.MON)
        assert headers[0] is Weekday.MON
        assert headers[-1] is Weekday.SUN


class TestRender:
    def _console(self):
        return Console(record=True, width=100, color_system=None)

    def test_render_month_contains_title_and_days(self):
        console = self._console()
        display = DisplayMonth(2024, 2)
        render_month(month_grid(display, [date(2024, 2, 14)]), display, console)
        out = console.export_text()
        assert "February 2024" in out
        assert "29" in out
        assert "Sun" in out

    def test_render_rule_default_horizon(self):
        console = self._console()
        render_rule(make_rule("monthly", nth_day=1), make_range("2024-06-15"), 126, console)
        out = console.export_text()
        assert "2034-12-31" in out
        assert "10-year horizon" in out

    def test_render_dates_truncated(self):
        console = self._console()
        dates = [date(2024, 1, d) for d in range(1, 11)]
        render_dates(dates, console, limit=3)
        out = console.export_text()
        assert "2024-01-03" in out
        assert "2024-01-04" not in out
        assert "7 more" in out

    def test_describe_rule(self):
        assert describe_rule(make_rule("daily")) == "every day"
        assert (
            describe_rule(make_rule("weekly", interval=2, weekdays=["Wed", "Mon"]))
            == "every 2 weeks on Mon, Wed"
        )
        assert (
            describe_rule(make_rule("monthly", weekdays=["Fri"], nth_day=15))
            == "every month on Fri or on day 15"
        )

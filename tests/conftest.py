"""
Shared pytest fixtures and date helpers.
"""

from datetime import date

import pytest
from typer.testing import CliRunner

from recurrence_preview.models import DateRange
from recurrence_preview.models import PreviewConfig
from recurrence_preview.rules import build_rule


def d(iso: str) -> date:
    """Shorthand for date.fromisoformat in expected-value lists."""
    return date.fromisoformat(iso)


def make_rule(pattern: str = "daily", interval=1, weekdays=(), nth_day=None):
    """Return a normalised rule, as the form layer would build it."""
    return build_rule(pattern, interval, list(weekdays), nth_day)


def make_range(start: str, end: str | None = None) -> DateRange:
    return DateRange(start=d(start), end=d(end) if end else None)


def assert_well_formed(dates, date_range: DateRange) -> None:
    """Strictly increasing, duplicate-free and inside the (resolved) range."""
    end = date_range.resolved_end()
    assert list(dates) == sorted(set(dates))
    assert all(date_range.start <= day <= end for day in dates)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "recurrence-preview.conf"


@pytest.fixture
def write_config(config_path):
    """Write an INI body under the [recurrence-preview] section and return the path."""

    def _write(body: str, section: str = "recurrence-preview"):
        config_path.write_text(f"[{section}]\n{body}\n")
        return config_path

    return _write


@pytest.fixture
def preview_config():
    return PreviewConfig()

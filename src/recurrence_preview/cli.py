"""
Command-line interface for Recurrence Preview.
"""

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from recurrence_preview.config import load_config
from recurrence_preview.dates import parse_date
from recurrence_preview.grid import month_grid
from recurrence_preview.models import DEFAULT_CONFIG
from recurrence_preview.models import ConfigError
from recurrence_preview.models import DisplayMonth
from recurrence_preview.models import PreviewConfig
from recurrence_preview.models import ValidationError
from recurrence_preview.render import render_dates
from recurrence_preview.render import render_month
from recurrence_preview.render import render_rule
from recurrence_preview.rules import parse_weekday
from recurrence_preview.state import RuleState

# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Preview the dates a recurrence rule produces on a month calendar.",
)

console = Console()


# ---------------------------------------------------------------------------
# Global state shared across subcommands
# ---------------------------------------------------------------------------


@dataclass
class _State:
    config_path: Path = field(default_factory=lambda: DEFAULT_CONFIG)
    verbose: bool = False


state = _State()


@app.callback()
def _global(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help=f"Config file path (default: {DEFAULT_CONFIG})"),
    ] = DEFAULT_CONFIG,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose debug output"),
    ] = False,
) -> None:
    state.config_path = config
    state.verbose = verbose
    _setup_logging(verbose)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False, console=console)],
    )


def _load_config() -> PreviewConfig:
    try:
        return load_config(state.config_path)
    except ConfigError as e:
        console.print(f"[bold red]Config error:[/] {state.config_path}: {e}")
        raise typer.Exit(1) from None


def _validation_failed(e: ValidationError) -> typer.Exit:
    console.print(f"[bold red]Error:[/] [cyan]{e.field}[/]: {e.message}")
    return typer.Exit(2)


def _build_state(
    cfg: PreviewConfig,
    pattern: str | None,
    every: int | None,
    days: list[str] | None,
    nth: int | None,
    start: str,
    end: str | None,
) -> RuleState:
    """Merge command-line values over config defaults and expand once."""
    try:
        return RuleState(
            horizon_years=cfg.horizon_years,
            pattern=pattern if pattern is not None else cfg.pattern,
            interval=every if every is not None else cfg.interval,
            weekdays=days if days else cfg.weekdays,
            nth_day=nth if nth is not None else cfg.nth_day,
            start=start,
            end=end,
        )
    except ValidationError as e:
        raise _validation_failed(e) from None


def _parse_month(value: str | None, rule_state: RuleState) -> DisplayMonth:
    if value is None:
        return DisplayMonth.containing(rule_state.date_range.start)
    try:
        return DisplayMonth.containing(parse_date(f"{value}-01"))
    except ValueError:
        raise _validation_failed(
            ValidationError("month", f"invalid month {value!r} (expected YYYY-MM)")
        ) from None


def _show_month(rule_state: RuleState, display: DisplayMonth, cfg: PreviewConfig) -> None:
    first_weekday = parse_weekday(cfg.first_weekday)
    grid = month_grid(display, rule_state.matches, first_weekday)
    render_month(grid, display, console, first_weekday)


def _show_summary(rule_state: RuleState, cfg: PreviewConfig) -> None:
    if rule_state.date_range is None:
        console.print("[yellow]No start date set.[/]")
        return
    render_rule(
        rule_state.rule,
        rule_state.date_range,
        len(rule_state.occurrences),
        console,
        horizon_years=cfg.horizon_years,
    )


# ---------------------------------------------------------------------------
# Subcommands: preview / dates / browse share the same rule options
# ---------------------------------------------------------------------------

_PATTERN = Annotated[
    str | None,
    typer.Option("--pattern", "-p", help="daily, weekly, monthly or yearly (overrides config)"),
]
_EVERY = Annotated[
    int | None,
    typer.Option("--every", "-e", help="Interval: every N days/weeks/months/years"),
]
_DAYS = Annotated[
    list[str] | None,
    typer.Option("--day", "-d", help="Weekday filter (repeatable): Sun, Mon … Sat"),
]
_NTH = Annotated[
    int | None,
    typer.Option("--nth", "-n", help="Day of month 1–31, OR'd with --day for monthly/yearly"),
]
_START = Annotated[str, typer.Option("--start", "-s", help="First date YYYY-MM-DD (inclusive)")]
_END = Annotated[
    str | None,
    typer.Option(
        "--end",
        help="Last date YYYY-MM-DD (inclusive); without it expansion stops at "
        "Dec 31, [bold]horizon_years[/] after the start year (default 10)",
    ),
]


@app.command()
def preview(
    start: _START,
    pattern: _PATTERN = None,
    every: _EVERY = None,
    day: _DAYS = None,
    nth: _NTH = None,
    end: _END = None,
    month: Annotated[
        str | None, typer.Option("--month", "-m", help="First month to show, YYYY-MM")
    ] = None,
    months: Annotated[
        int | None, typer.Option("--months", help="Number of months to show (overrides config)")
    ] = None,
) -> None:
    """Show the rule summary and month grid(s) with recurring days highlighted."""
    cfg = _load_config()
    rule_state = _build_state(cfg, pattern, every, day, nth, start, end)
    display = _parse_month(month, rule_state)

    _show_summary(rule_state, cfg)
    for offset in range(max(months if months is not None else cfg.months, 1)):
        _show_month(rule_state, display.shift(months=offset), cfg)


@app.command()
def dates(
    start: _START,
    pattern: _PATTERN = None,
    every: _EVERY = None,
    day: _DAYS = None,
    nth: _NTH = None,
    end: _END = None,
    limit: Annotated[
        int | None, typer.Option("--limit", "-l", min=0, help="Show at most this many dates")
    ] = None,
    plain: Annotated[
        bool, typer.Option("--plain", help="One ISO date per line, no table")
    ] = False,
) -> None:
    """List the dates a rule produces."""
    cfg = _load_config()
    rule_state = _build_state(cfg, pattern, every, day, nth, start, end)
    occurrences = rule_state.occurrences

    if plain:
        for d in occurrences[:limit]:
            typer.echo(d.isoformat())
        return

    _show_summary(rule_state, cfg)
    if not occurrences:
        console.print("[yellow]No dates match this rule in the range.[/]")
        return
    render_dates(occurrences, console, limit=limit)


# Browse key → (months, years)
_NAV_KEYS = {
    "n": (1, 0),
    "p": (-1, 0),
    "N": (0, 1),
    "P": (0, -1),
}

# Field aliases accepted by the browse "e" command
_EDIT_FIELDS = {
    "pattern": "pattern",
    "every": "interval",
    "interval": "interval",
    "day": "weekdays",
    "days": "weekdays",
    "weekdays": "weekdays",
    "nth": "nth_day",
    "nth_day": "nth_day",
    "start": "start",
    "end": "end",
}

_BROWSE_HELP = (
    "[dim]n/p: next/previous month  N/P: next/previous year  "
    "e FIELD=VALUE: edit rule  q: quit[/dim]"
)


def _apply_edit(rule_state: RuleState, command: str) -> None:
    """Apply ``e FIELD=VALUE`` to the state; report bad input without leaving the loop."""
    key, sep, value = command[1:].strip().partition("=")
    name = _EDIT_FIELDS.get(key.strip().lower())
    if not sep or name is None:
        fields = ", ".join(_EDIT_FIELDS)
        console.print(f"[bold red]Error:[/] expected FIELD=VALUE, fields: {fields}")
        return
    value = value.strip()
    if name == "weekdays":
        new_value = [v for v in value.split(",") if v.strip()]
    else:
        new_value = value or None
    try:
        rule_state.update(**{name: new_value})
    except ValidationError as e:
        console.print(f"[bold red]Error:[/] [cyan]{e.field}[/]: {e.message}")


@app.command()
def browse(
    start: _START,
    pattern: _PATTERN = None,
    every: _EVERY = None,
    day: _DAYS = None,
    nth: _NTH = None,
    end: _END = None,
) -> None:
    """Page through months interactively; navigation reuses the computed dates."""
    cfg = _load_config()
    rule_state = _build_state(cfg, pattern, every, day, nth, start, end)
    display = DisplayMonth.containing(rule_state.date_range.start)

    rule_state.subscribe(lambda s: _show_summary(s, cfg))
    _show_summary(rule_state, cfg)

    while True:
        _show_month(rule_state, display, cfg)
        console.print(_BROWSE_HELP)
        choice = typer.prompt("Command", default="q", show_default=False).strip()
        if choice == "q":
            break
        if choice in _NAV_KEYS:
            months, years = _NAV_KEYS[choice]
            display = display.shift(months=months, years=years)
        elif choice.startswith("e"):
            _apply_edit(rule_state, choice)
        else:
            console.print(f"[yellow]Unknown command:[/] {choice!r}")


# ---------------------------------------------------------------------------
# Subcommand: config
# ---------------------------------------------------------------------------


@app.command("config")
def show_config() -> None:
    """Show the config file location and the effective defaults."""
    config_exists = state.config_path.exists()
    cfg = _load_config()

    info = Text()
    info.append("  Config:        ", style="bold")
    info.append(str(state.config_path) + " ")
    info.append(
        "✓" if config_exists else "(not found)", style="green" if config_exists else "yellow"
    )
    rows = [
        ("Pattern", cfg.pattern),
        ("Interval", str(cfg.interval)),
        ("Weekdays", ", ".join(cfg.weekdays) or "—"),
        ("Nth day", str(cfg.nth_day) if cfg.nth_day is not None else "—"),
        ("Horizon", f"{cfg.horizon_years} years"),
        ("Week starts", cfg.first_weekday),
        ("Months shown", str(cfg.months)),
    ]
    for label, value in rows:
        info.append(f"\n  {label + ':':<15}", style="bold")
        info.append(value)

    console.print(Panel(info, title="[bold]Recurrence Preview — Config[/bold]"))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    app()

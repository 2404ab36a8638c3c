"""
Config file loading.

The file is optional INI with a single ``[recurrence-preview]`` section; any
key left out keeps its built-in default.
"""

import logging
from configparser import ConfigParser
from configparser import Error as ConfigParserError
from pathlib import Path

from recurrence_preview.models import ConfigError
from recurrence_preview.models import PreviewConfig
from recurrence_preview.models import ValidationError
from recurrence_preview.models import Weekday
from recurrence_preview.rules import parse_pattern
from recurrence_preview.rules import parse_weekday
from recurrence_preview.rules import parse_weekdays

logger = logging.getLogger(__name__)

SECTION = "recurrence-preview"


def _get_int(section, key: str, default: int | None) -> int | None:
    try:
        return section.getint(key, fallback=default)
    except ValueError:
        raise ConfigError(f"{key}: expected a whole number, got {section.get(key)!r}") from None


def load_config(config_path: Path) -> PreviewConfig:
    """Return the effective PreviewConfig; a missing file or section means defaults."""
    cfg = PreviewConfig()
    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return cfg

    parser = ConfigParser()
    try:
        parser.read(config_path)
    except ConfigParserError as e:
        raise ConfigError(f"{config_path}: {e}") from e
    if SECTION not in parser:
        logger.debug("Config file %s has no [%s] section", config_path, SECTION)
        return cfg

    section = parser[SECTION]
    logger.debug("Loading config from %s", config_path)

    try:
        if "pattern" in section:
            cfg.pattern = parse_pattern(section["pattern"]).value
        if "weekdays" in section:
            selected = parse_weekdays(section["weekdays"])
            cfg.weekdays = [wd.value for wd in Weekday if wd in selected]
        if "first_weekday" in section:
            cfg.first_weekday = parse_weekday(section["first_weekday"]).value
    except ValidationError as e:
        raise ConfigError(str(e)) from None

    cfg.interval = _get_int(section, "interval", cfg.interval)
    cfg.nth_day = _get_int(section, "nth_day", cfg.nth_day)
    cfg.horizon_years = _get_int(section, "horizon_years", cfg.horizon_years)
    cfg.months = _get_int(section, "months", cfg.months)

    if cfg.horizon_years < 0:
        raise ConfigError(f"horizon_years: must not be negative, got {cfg.horizon_years}")
    if cfg.months < 1:
        raise ConfigError(f"months: must be at least 1, got {cfg.months}")
    return cfg

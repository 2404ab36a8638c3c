"""
Unit tests for config file loading in recurrence_preview.config.
"""

import pytest

from recurrence_preview.config import load_config
from recurrence_preview.models import ConfigError


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, config_path, preview_config):
        assert load_config(config_path) == preview_config

    def test_missing_section_gives_defaults(self, write_config, preview_config):
        path = write_config("pattern = weekly", section="other-tool")
        assert load_config(path) == preview_config

    def test_values_parsed(self, write_config):
        path = write_config(
            "pattern = Weekly\n"
            "interval = 2\n"
            "weekdays = wed, Mon\n"
            "nth_day = 15\n"
            "horizon_years = 3\n"
            "first_weekday = monday\n"
            "months = 4"
        )
        cfg = load_config(path)
        assert cfg.pattern == "weekly"
        assert cfg.interval == 2
        assert cfg.weekdays == ["Mon", "Wed"]
        assert cfg.nth_day == 15
        assert cfg.horizon_years == 3
        assert cfg.first_weekday == "Mon"
        assert cfg.months == 4

    @pytest.mark.parametrize(
        "body",
        [
            "pattern = hourly",
            "interval = lots",
            "weekdays = Mon, Someday",
            "horizon_years = -1",
            "months = 0",
        ],
    )
    def test_invalid_values(self, write_config, body):
        """Bad values raise ConfigError instead of being silently dropped."""
        with pytest.raises(ConfigError):
            load_config(write_config(body))

    def test_unparseable_file(self, config_path):
        config_path.write_text("no section header here\n")
        with pytest.raises(ConfigError):
            load_config(config_path)

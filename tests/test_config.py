"""Tests for settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError
from rich.logging import RichHandler

from cronx.config import Settings
from cronx.log import setup_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("TIME_FORMAT", "USE_OXFORD_COMMA", "STRICT_PARSING", "DAY_BASE", "UTC_OFFSET"):
            monkeypatch.delenv(f"CRONX_{name}", raising=False)

        config = Settings(_env_file=None)

        assert config.time_format == "12h"
        assert config.use_oxford_comma is False
        assert config.strict_parsing is False
        assert config.day_base == 0
        assert config.utc_offset is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CRONX_TIME_FORMAT", "24h")
        monkeypatch.setenv("CRONX_USE_OXFORD_COMMA", "true")
        monkeypatch.setenv("CRONX_STRICT_PARSING", "1")
        monkeypatch.setenv("CRONX_DAY_BASE", "1")
        monkeypatch.setenv("CRONX_UTC_OFFSET", "-3.5")

        config = Settings(_env_file=None)

        assert config.time_format == "24h"
        assert config.use_oxford_comma is True
        assert config.strict_parsing is True
        assert config.day_base == 1
        assert config.utc_offset == -3.5

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CRONX_TIME_FORMAT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("CRONX_TIME_FORMAT=24h\nOTHER_SETTING=ignored\n")

        assert Settings(_env_file=env_file).time_format == "24h"

    @pytest.mark.parametrize("name,value", [("TIME_FORMAT", "13h"), ("DAY_BASE", "2")])
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(f"CRONX_{name}", value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestSetupLogging:
    """Tests for the rich logging setup."""

    def test_verbose(self):
        setup_logging(verbose=True)
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in root.handlers)

    def test_quiet(self):
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

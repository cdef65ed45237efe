"""
Tests for configuration loading and logging setup.
"""

import sys

import pytest
from loguru import logger
from pydantic import ValidationError

from fightscout.config import (
    AppConfig,
    LoggingConfig,
    ParsingConfig,
    get_config,
    reset_config,
    set_config,
)
from fightscout.logging_setup import configure_logging


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.parsing.summary_max_chars == 1500
        assert config.parsing.max_techniques == 5
        assert config.logging.level == "INFO"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("FIGHTSCOUT_MAX_TECHNIQUES", "3")
        monkeypatch.setenv("FIGHTSCOUT_LOG_LEVEL", "debug")
        monkeypatch.setenv("FIGHTSCOUT_NORMALIZE_MARKDOWN", "false")
        config = AppConfig.from_env()
        assert config.parsing.max_techniques == 3
        assert config.logging.level == "DEBUG"
        assert config.parsing.normalize_markdown is False

    def test_bad_int_keeps_default(self, monkeypatch):
        monkeypatch.setenv("FIGHTSCOUT_SUMMARY_MAX_CHARS", "lots")
        assert AppConfig.from_env().parsing.summary_max_chars == 1500

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "fightscout.yaml"
        path.write_text("parsing:\n  max_improvements: 4\nlogging:\n  level: warning\n", encoding="utf-8")
        config = AppConfig.from_yaml(path)
        assert config.parsing.max_improvements == 4
        assert config.logging.level == "WARNING"

    def test_to_dict(self):
        data = AppConfig().to_dict()
        assert data["parsing"]["game_plan_max_chars"] == 1500
        assert "format" in data["logging"]

    def test_limits_must_be_positive(self):
        with pytest.raises(ValidationError):
            ParsingConfig(max_techniques=0)


class TestGlobalConfig:
    def test_singleton(self):
        assert get_config() is get_config()

    def test_set_and_reset(self):
        custom = AppConfig(parsing=ParsingConfig(max_techniques=2))
        set_config(custom)
        assert get_config() is custom
        reset_config()
        assert get_config() is not custom


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_logger(self):
        yield
        logger.remove()
        logger.add(sys.stderr)

    def test_plain_and_serialized_sinks(self):
        configure_logging(LoggingConfig(level="debug"))
        configure_logging(LoggingConfig(serialize=True))
        logger.info("still works")

"""Tests for settings and logging setup."""

import logging

from finance_engine.config import Settings, get_settings
from finance_engine.logging_config import configure_logging


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.engine_version == "1.0.0"
        assert settings.strict_proration is False
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("FINANCE_ENGINE_VERSION", "2.1.0")
        monkeypatch.setenv("FINANCE_ENGINE_STRICT_PRORATION", "TRUE")
        monkeypatch.setenv("FINANCE_ENGINE_LOG_LEVEL", "debug")

        settings = Settings.from_env()
        assert settings.engine_version == "2.1.0"
        assert settings.strict_proration is True
        assert settings.log_level == "DEBUG"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Test logging setup."""

    def test_sets_level_and_single_handler(self):
        logger = configure_logging("DEBUG")
        handlers = len(logger.handlers)
        configure_logging(logging.ERROR)

        assert logger.name == "finance_engine"
        assert logger.level == logging.ERROR
        assert len(logger.handlers) == handlers

    def test_level_from_settings(self, monkeypatch):
        monkeypatch.setenv("FINANCE_ENGINE_LOG_LEVEL", "INFO")
        get_settings.cache_clear()

        assert configure_logging().level == logging.INFO

"""Tests for the logging configuration module."""

import logging
from logging.handlers import RotatingFileHandler

import pytest
from structlog.stdlib import ProcessorFormatter

from scriptpanel.config import get_logger, reset_settings
from scriptpanel.config.logging import configure_logging
from scriptpanel.config.settings import ScriptPanelSettings


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Reset logging state before each test to ensure isolation."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers.copy()

    yield

    root_logger.setLevel(original_level)
    for handler in root_logger.handlers.copy():
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)


class TestConfigureLogging:
    """Test the configure_logging function."""

    @pytest.mark.parametrize(
        ("level_str", "level_const"),
        [
            ("DEBUG", logging.DEBUG),
            ("info", logging.INFO),
            ("WARNING", logging.WARNING),
            ("Error", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_log_levels(self, level_str, level_const):
        """Test that the root logger follows the configured level."""
        configure_logging(ScriptPanelSettings(log_level=level_str))

        assert logging.getLogger().level == level_const

    def test_console_handler(self):
        """Test that a single stderr handler is installed by default."""
        configure_logging(ScriptPanelSettings())

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, ProcessorFormatter)

    def test_log_file(self, tmp_path):
        """Test that a rotating file handler is added for log_file."""
        log_file = tmp_path / "logs" / "scriptpanel.log"

        configure_logging(
            ScriptPanelSettings(log_file=log_file, log_format="json")
        )

        handlers = logging.getLogger().handlers
        assert log_file.parent.is_dir()
        assert any(isinstance(handler, RotatingFileHandler) for handler in handlers)

    def test_invalid_level(self):
        """Test that an unknown level raises ValueError."""
        settings = ScriptPanelSettings.model_construct(
            log_level="LOUD", log_format="console", log_file=None, debug=False
        )

        with pytest.raises(ValueError, match="Invalid log level 'LOUD'"):
            configure_logging(settings)

    def test_debug_mode(self):
        """Test that debug mode still configures the root logger."""
        configure_logging(ScriptPanelSettings(debug=True, log_level="DEBUG"))

        assert logging.getLogger().level == logging.DEBUG


class TestGetLogger:
    """Test the cached logger factory."""

    def test_logger_is_cached(self):
        """Test that loggers are cached per name."""
        assert get_logger("scriptpanel.test") is get_logger("scriptpanel.test")

    def test_reset_clears_cache(self):
        """Test that resetting settings drops cached loggers."""
        first = get_logger("scriptpanel.test.reset")
        reset_settings()

        assert get_logger("scriptpanel.test.reset") is not first

    def test_logger_accepts_key_values(self):
        """Test that loggers take structured keyword arguments."""
        logger = get_logger("scriptpanel.test.kv")

        logger.info("Parsed script", pages=2, panels=3)

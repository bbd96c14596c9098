"""Tests for logging configuration."""

import logging

import colorlog
import pytest

from src.helpers.logging import get_logger


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_logger(self) -> None:
        """Test that get_logger returns a logger instance."""
        logger = get_logger("test_module")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "test_module"

    def test_get_logger_same_name_returns_same_instance(self) -> None:
        """Test that getting logger with same name returns same instance."""
        logger1 = get_logger("test_same")
        logger2 = get_logger("test_same")

        assert logger1 is logger2

    @pytest.mark.parametrize(
        ("level_name", "level"),
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_get_logger_levels(self, level_name: str, level: int) -> None:
        """Test get_logger with each supported level."""
        logger = get_logger(f"test_level_{level_name}", log_level=level_name)

        assert logger.level == level

    def test_get_logger_lowercase_level(self) -> None:
        """Test that level names are case-insensitive."""
        logger = get_logger("test_lowercase", log_level="warning")

        assert logger.level == logging.WARNING

    def test_get_logger_default_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test get_logger with default level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        logger = get_logger("test_default")

        # Default should be INFO
        assert logger.level == logging.INFO

    def test_get_logger_env_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that LOG_LEVEL is used when no level is given."""
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        logger = get_logger("test_env_level")

        assert logger.level == logging.ERROR

    def test_get_logger_invalid_level_raises(self) -> None:
        """Test that invalid log level raises ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            get_logger("test_invalid", log_level="INVALID")

    def test_get_logger_invalid_handler_raises(self) -> None:
        """Test that invalid handler raises ValueError."""
        with pytest.raises(ValueError, match="Invalid handler"):
            get_logger("test_invalid_handler", log_handler="invalid")

    def test_get_logger_stderr_handler(self) -> None:
        """Test get_logger with stderr handler."""
        logger = get_logger("test_stderr", log_handler="stderr")

        assert len(logger.handlers) > 0

    def test_get_logger_with_color(self) -> None:
        """Test get_logger with color enabled."""
        logger = get_logger("test_color", log_color=True)

        assert any(
            isinstance(handler.formatter, colorlog.ColoredFormatter)
            for handler in logger.handlers
        )

    def test_logger_can_log_messages(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that configured logger can log messages."""
        logger = get_logger("test_log_messages", log_level="DEBUG")

        with caplog.at_level(logging.DEBUG, logger="test_log_messages"):
            logger.debug("Debug message")
            logger.error("Error message")

        assert any("Debug message" in record.message for record in caplog.records)
        assert any("Error message" in record.message for record in caplog.records)

    def test_logger_caching(self) -> None:
        """Test that loggers are cached correctly."""
        # First call creates and caches logger
        logger1 = get_logger("cached_logger", log_level="DEBUG")

        # Second call should return cached logger
        logger2 = get_logger("cached_logger", log_level="INFO")

        assert logger1 is logger2
        # And should have the original level (DEBUG)
        assert logger1.level == logging.DEBUG

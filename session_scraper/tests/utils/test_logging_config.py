"""Tests for logging configuration."""

import io
import logging
import sys

import pytest

from session_scraper.utils.logging_config import setup_logging, get_logger


def _console_handlers(logger):
    return [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_default_name(self):
        """Test default logger name is the package name."""
        logger = setup_logging()
        assert logger.name == "session_scraper"

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR"])
    def test_sets_log_level(self, level):
        logger = setup_logging(level=level, name=f"test_level_{level}")
        assert logger.level == getattr(logging, level)

    def test_lowercase_and_invalid_levels(self):
        """Test lowercase names work and unknown names fall back to INFO."""
        assert setup_logging(level="debug", name="test_lower").level == logging.DEBUG
        assert setup_logging(level="LOUD", name="test_invalid").level == logging.INFO

    def test_console_writes_to_stderr(self):
        """Test log output stays off stdout, where page bodies are printed."""
        logger = setup_logging(name="test_console_stream")

        (handler,) = _console_handlers(logger)
        assert handler.stream is sys.stderr

    def test_console_stream_by_name(self):
        logger = setup_logging(name="test_stdout_stream", stream="stdout")

        (handler,) = _console_handlers(logger)
        assert handler.stream is sys.stdout

    def test_unknown_stream_name(self):
        with pytest.raises(ValueError):
            setup_logging(name="test_bad_stream", stream="printer")

    def test_custom_console_format(self):
        """Test records are written to a given stream in the given format."""
        buffer = io.StringIO()
        logger = setup_logging(
            name="test_custom_format", stream=buffer, console_format="%(levelname)s:%(message)s"
        )

        logger.warning("Relogin failed")

        assert buffer.getvalue() == "WARNING:Relogin failed\n"

    def test_transport_logger_follows_debug(self):
        """Test urllib3 is only verbose when the scraper is debugging."""
        setup_logging(level="DEBUG", name="test_transport_debug")
        assert logging.getLogger("urllib3").level == logging.DEBUG

        setup_logging(level="INFO", name="test_transport_info")
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_no_file_handler_without_log_file(self):
        logger = setup_logging(log_file=None, name="test_no_file_handler")
        assert _file_handlers(logger) == []

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path):
        log_file = tmp_path / "repeat.log"
        first = setup_logging(log_file=log_file, name="test_repeat")
        for handler in _file_handlers(first):
            handler.close()

        logger = setup_logging(log_file=log_file, name="test_repeat")

        assert len(logger.handlers) == 2

        for handler in _file_handlers(logger):
            handler.close()

    def test_writes_to_log_file(self, tmp_path):
        """Test messages reach the log file with the logger name."""
        log_file = tmp_path / "session.log"
        logger = setup_logging(level="DEBUG", log_file=log_file, name="test_file_write")

        logger.info("Relogging in at login.php")

        for handler in _file_handlers(logger):
            handler.close()

        content = log_file.read_text(encoding="utf-8")
        assert "Relogging in at login.php" in content
        assert "test_file_write" in content


class TestGetLogger:
    """Tests for get_logger function."""

    def test_default_name(self):
        assert get_logger().name == "session_scraper"

    def test_returns_configured_logger(self):
        configured = setup_logging(name="test_existing")
        assert get_logger("test_existing") is configured

"""Tests for the logging configuration system."""

import json
import logging
from pathlib import Path

import pytest

from portfolio_analytics.core.logger import (
    AnalyticsLogger,
    LogLevel,
    StructuredFormatter,
    get_analytics_logger,
)


class TestGetLogger:
    """Test suite for logger creation and caching."""

    def test_logger_is_cached(self) -> None:
        """Test repeated calls return the configured instance."""
        first = get_analytics_logger("portfolio_analytics.test_cache")
        second = get_analytics_logger("portfolio_analytics.test_cache", level="DEBUG")

        assert first is second
        assert first.level == logging.INFO

    def test_level_applied(self) -> None:
        """Test the requested level is set on a new logger."""
        logger = get_analytics_logger("portfolio_analytics.test_level", level="warning")
        assert logger.level == logging.WARNING

    def test_console_handler(self) -> None:
        """Test a console handler is attached by default and can be disabled."""
        with_console = get_analytics_logger("portfolio_analytics.test_console")
        without_console = get_analytics_logger("portfolio_analytics.test_quiet", console=False)

        assert len(with_console.handlers) == 1
        assert without_console.handlers == []

    def test_file_handler(self, tmp_path: Path) -> None:
        """Test records are written to a rotating log file."""
        log_file = tmp_path / "logs" / "analytics.log"
        logger = get_analytics_logger(
            "portfolio_analytics.test_file", file_path=str(log_file), console=False
        )

        logger.info("written to file")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "written to file" in log_file.read_text()

    def test_reset_clears_registry(self) -> None:
        """Test reset forgets configured loggers and their handlers."""
        logger = get_analytics_logger("portfolio_analytics.test_reset")
        AnalyticsLogger.reset()

        assert logger.handlers == []
        assert get_analytics_logger("portfolio_analytics.test_reset", console=False) is logger


class TestStructuredFormatter:
    """Test suite for JSON log formatting."""

    def test_json_output(self) -> None:
        """Test records render as JSON with extra fields."""
        record = logging.LogRecord(
            name="portfolio_analytics",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="assessment %s",
            args=("done",),
            exc_info=None,
        )
        record.portfolio_id = "pf-1"

        payload = json.loads(StructuredFormatter().format(record))

        assert payload['message'] == "assessment done"
        assert payload['level'] == "INFO"
        assert payload['portfolio_id'] == "pf-1"


class TestAnalyticsLogger:
    """Test suite for the AnalyticsLogger wrapper."""

    def test_log_assessment(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the assessment helper logs score and category."""
        wrapper = AnalyticsLogger("portfolio_analytics.test_wrapper")

        with caplog.at_level(logging.INFO, logger="portfolio_analytics.test_wrapper"):
            wrapper.log_assessment("pf-1", 42.0, "medium")

        assert "Assessment[pf-1]: score=42.0 category=medium" in caplog.text

    def test_log_analytics(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the analytics helper logs the summary."""
        wrapper = AnalyticsLogger("portfolio_analytics.test_summary")

        with caplog.at_level(logging.INFO, logger="portfolio_analytics.test_summary"):
            wrapper.log_analytics("pf-1", {'risk_score': 3.5})

        assert "Analytics[pf-1]" in caplog.text
        assert "'risk_score': 3.5" in caplog.text

    def test_set_level(self) -> None:
        """Test only LogLevel values are accepted."""
        wrapper = AnalyticsLogger("portfolio_analytics.test_set_level")
        wrapper.info("init")
        wrapper.set_level(LogLevel.ERROR)

        assert wrapper._get_logger().level == logging.ERROR
        with pytest.raises(ValueError):
            wrapper.set_level("DEBUG")  # type: ignore[arg-type]

    def test_level_ordering(self) -> None:
        """Test log levels compare by severity."""
        assert LogLevel.DEBUG < LogLevel.ERROR
        assert not LogLevel.CRITICAL < LogLevel.INFO


if __name__ == "__main__":
    pytest.main([__file__])

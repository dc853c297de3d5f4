"""
Logging Configuration System.

This module provides logging for the analytics core with support for file
rotation, different log levels, and structured (JSON) logging.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from enum import Enum
from typing import Any


class LogLevel(Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def __lt__(self, other: 'LogLevel') -> bool:
        """Enable comparison between log levels."""
        if self.__class__ is other.__class__:
            order = list(LogLevel)
            return order.index(self) < order.index(other)
        return NotImplemented


_STANDARD_RECORD_KEYS = frozenset(
    [
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
        'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
        'thread', 'threadName', 'processName', 'process', 'getMessage',
        'exc_info', 'exc_text', 'stack_info', 'taskName',
    ]
)


class StructuredFormatter(logging.Formatter):
    """Formatter that renders each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry: dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_KEYS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class AnalyticsLogger:
    """Named logger registry plus a thin wrapper for report logging."""

    _loggers: dict[str, logging.Logger] = {}

    def __init__(self, name: str = "portfolio_analytics", level: LogLevel = LogLevel.INFO) -> None:
        """Initialize the wrapper.

        Args:
            name: Logger name
            level: Log level
        """
        self.name = name
        self.level = level
        self._logger: logging.Logger | None = None

    @classmethod
    def get_logger(
        cls,
        name: str,
        level: str = "INFO",
        file_path: str | None = None,
        max_file_size: int = 10485760,  # 10MB
        backup_count: int = 5,
        console: bool = True,
        structured: bool = False,
    ) -> logging.Logger:
        """Get or create a logger with the specified configuration."""
        if name in cls._loggers:
            return cls._loggers[name]

        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level.upper()))
        logger.handlers.clear()

        if structured:
            formatter: logging.Formatter = StructuredFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
            )

        if console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if file_path:
            directory = os.path.dirname(file_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                file_path, maxBytes=max_file_size, backupCount=backup_count
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        cls._loggers[name] = logger
        return logger

    @classmethod
    def reset(cls) -> None:
        """Forget all configured loggers (used by tests and the CLI)."""
        for logger in cls._loggers.values():
            logger.handlers.clear()
        cls._loggers.clear()

    def set_level(self, level: LogLevel) -> None:
        """Set the log level."""
        if not isinstance(level, LogLevel):
            raise ValueError("Invalid log level")
        self.level = level
        if self._logger:
            self._logger.setLevel(getattr(logging, level.value))

    def _get_logger(self) -> logging.Logger:
        if self._logger is None:
            self._logger = AnalyticsLogger.get_logger(self.name, level=self.level.value)
        return self._logger

    def info(self, message: str, extra_data: dict[str, Any] | None = None) -> None:
        """Log info message."""
        if extra_data:
            self._get_logger().info(f"{message} | Extra: {extra_data}")
        else:
            self._get_logger().info(message)

    def warning(self, message: str) -> None:
        """Log warning message."""
        self._get_logger().warning(message)

    def error(self, message: str, exception: Exception | None = None) -> None:
        """Log error message."""
        if exception:
            self._get_logger().error(f"{message} | Exception: {exception}")
        else:
            self._get_logger().error(message)

    def debug(self, message: str) -> None:
        """Log debug message."""
        self._get_logger().debug(message)

    def log_analytics(self, portfolio_id: str, summary: dict[str, Any]) -> None:
        """Log a condensed analytics summary for a portfolio."""
        self.info(f"Analytics[{portfolio_id}]: {summary}")

    def log_assessment(self, portfolio_id: str, score: float, category: str) -> None:
        """Log the headline result of a risk assessment."""
        self.info(f"Assessment[{portfolio_id}]: score={score:.1f} category={category}")


def get_analytics_logger(name: str = "portfolio_analytics", **kwargs: Any) -> logging.Logger:
    """Get an analytics logger with default settings.

    Args:
        name: Logger name
        **kwargs: Additional arguments for logger configuration

    Returns:
        Configured logger
    """
    return AnalyticsLogger.get_logger(name, **kwargs)

"""
Logger Utility
==============

Context-aware console logging shared by every agent, fetch tool and the
design scheduler.

Each module owns a named logger so a log line can be traced back to the
agent or collaborator that produced it:

    [2025-06-01T08:00:00] [INFO] [AssessmentGenerator] Generating assessment...
    [2025-06-01T08:00:01] [WARN] [BtcPrice] Price fetch failed, using cache

Levels are filtered with the LOG_LEVEL environment variable (DEBUG, INFO,
WARNING, ERROR). Errors go to stderr, everything else to stdout. Optional
structured data is printed below the message as indented JSON.

Usage:
    from src.utils.logger import Logger, logger

    logger.info("CLI started")

    tutor_logger = Logger("SocraticTutor")
    tutor_logger.debug("Cache hit", {"key": "socratic_fees_beginner_5"})
"""

import json
import os
import sys
from datetime import datetime
from enum import IntEnum
from typing import Any


class LogLevel(IntEnum):
    """
    Log levels with numeric values for comparison.
    Higher values = more severe = always shown.
    """
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


# ANSI color codes for terminal output
class Colors:
    """ANSI escape codes for colored terminal output."""
    RESET = "\033[0m"
    DEBUG = "\033[36m"    # Cyan
    INFO = "\033[32m"     # Green
    WARNING = "\033[33m"  # Yellow
    ERROR = "\033[31m"    # Red
    DIM = "\033[2m"       # Dimmed text


_LEVEL_NAMES = {
    "DEBUG": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "WARNING": LogLevel.WARNING,
    "WARN": LogLevel.WARNING,
    "ERROR": LogLevel.ERROR,
}


def _get_log_level_from_env() -> LogLevel:
    """
    Parse the LOG_LEVEL environment variable.

    Returns:
        LogLevel: The configured log level, defaults to INFO
    """
    level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    return _LEVEL_NAMES.get(level_str, LogLevel.INFO)


class Logger:
    """
    A context-aware logger with colored output.

    Example:
        logger = Logger("CanvaAutoDesigner")
        logger.info("Writing bulk create CSV")

        fetch_logger = logger.child("Fetch")
        fetch_logger.debug("Fees loaded", {"fastestFee": 12})
        # Logs show [CanvaAutoDesigner:Fetch]
    """

    def __init__(self, context: str = ""):
        """
        Initialize a logger with an optional context.

        Args:
            context: A string prefix for all log messages (e.g., "DevRadar")
        """
        self.context = context
        self._min_level = _get_log_level_from_env()

    def child(self, child_context: str) -> "Logger":
        """
        Create a child logger with additional context.

        Args:
            child_context: Additional context to append

        Returns:
            A new Logger with combined context
        """
        new_context = f"{self.context}:{child_context}" if self.context else child_context
        return Logger(new_context)

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check whether messages at this level would be printed."""
        return level >= self._min_level

    def _format_message(
        self,
        level: str,
        message: str,
        color: str
    ) -> str:
        """
        Format a log message with timestamp, level, and context.

        Output format: [TIMESTAMP] [LEVEL] [context] message
        """
        timestamp = datetime.now().isoformat(timespec="seconds")
        context_str = f"[{self.context}] " if self.context else ""

        return (
            f"{Colors.DIM}[{timestamp}]{Colors.RESET} "
            f"{color}[{level}]{Colors.RESET} "
            f"{context_str}{message}"
        )

    def _log(
        self,
        level: LogLevel,
        level_name: str,
        color: str,
        message: str,
        data: dict[str, Any] | None = None
    ) -> None:
        """
        Internal logging method.

        Args:
            level: The log level for filtering
            level_name: Display name of the level
            color: ANSI color code for the level
            message: The log message
            data: Optional structured data to include
        """
        if not self.is_enabled_for(level):
            return

        formatted = self._format_message(level_name, message, color)

        stream = sys.stderr if level >= LogLevel.ERROR else sys.stdout
        print(formatted, file=stream)

        if data:
            data_str = json.dumps(data, indent=2, default=str)
            print(f"{Colors.DIM}{data_str}{Colors.RESET}", file=stream)

    def debug(self, message: str, data: dict[str, Any] | None = None) -> None:
        """
        Log a debug message.

        Only shown when LOG_LEVEL=DEBUG. Used for cache hits and raw
        upstream payload sizes.
        """
        self._log(LogLevel.DEBUG, "DEBUG", Colors.DEBUG, message, data)

    def info(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Log an info message (the default level)."""
        self._log(LogLevel.INFO, "INFO", Colors.INFO, message, data)

    def warning(self, message: str, data: dict[str, Any] | None = None) -> None:
        """
        Log a warning message.

        Fetch fallbacks are reported here: the caller keeps working with
        default values but the degradation is visible in the logs.
        """
        self._log(LogLevel.WARNING, "WARN", Colors.WARNING, message, data)

    def error(
        self,
        message: str,
        error: BaseException | None = None,
        data: dict[str, Any] | None = None
    ) -> None:
        """
        Log an error message.

        Args:
            message: The error message
            error: Optional exception to include details from
            data: Optional extra structured data
        """
        details: dict[str, Any] = dict(data or {})
        if error is not None:
            details["error_type"] = type(error).__name__
            details["error_message"] = str(error)
        self._log(LogLevel.ERROR, "ERROR", Colors.ERROR, message, details or None)


# Default logger instance for the CLI and one-off scripts
logger = Logger("BitcoinEdu")

"""
================================================================================
Autotest Tools Common Utilities
================================================================================

Shared configuration, logging setup and structured logging for the Goodbudget
UI and API suites.

Exports:
    - ConfigLoader / ApiSettings / UiSettings: YAML + environment configuration
    - init_logger: configure the loguru console sinks once per process
    - StructuredLogger and its factories: context-scoped structured logging

Usage:
    from autotest_tools.common import init_logger, create_page_logger

    init_logger()
    log = create_page_logger("LoginPage")

================================================================================
"""

import sys
from typing import Optional

from loguru import logger

from .config_loader import ApiSettings, ConfigLoader, ConfigurationError, UiSettings
from .structured_logger import (
    LogEntry,
    LogLevel,
    StructuredLogger,
    create_logger,
    create_page_logger,
    create_test_logger,
    create_util_logger,
)


# ============================================================
# Logging Setup
# ============================================================

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Records below WARNING go to stdout, WARNING and above go to stderr.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    config = ConfigLoader()
    level = (level or config.get("logging.level", "INFO")).upper()
    format_string = format_string or config.get("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stdout,
        format=format_string,
        level=level,
        colorize=True,
        filter=lambda record: record["level"].no < logger.level("WARNING").no,
    )
    logger.add(
        sys.stderr,
        format=format_string,
        level=max(logger.level(level).no, logger.level("WARNING").no),
        colorize=True,
    )

    log_file = log_file or config.get("logging.file")
    if log_file:
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


__all__ = [
    "ApiSettings",
    "ConfigLoader",
    "ConfigurationError",
    "LogEntry",
    "LogLevel",
    "StructuredLogger",
    "UiSettings",
    "create_logger",
    "create_page_logger",
    "create_test_logger",
    "create_util_logger",
    "init_logger",
]

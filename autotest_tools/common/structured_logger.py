"""
================================================================================
Structured Logger
================================================================================

Leveled, context-scoped logging for page objects, the API client and tests.

Each entry is:
    - kept in an in-memory ordered list (exportable as JSON)
    - written to the console through loguru
    - mirrored into the Allure report as a step (best-effort)

There is no process-wide instance: loggers are created explicitly and handed
to the components that use them.

Usage:
    log = create_page_logger("HomePage")
    log.action_start("Log Out")
    log.action_success("Log Out")

    child = log.child("Modal")      # context "Page.HomePage.Modal", same entry list

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import allure
from loguru import logger


class LogLevel(IntEnum):
    """Severity levels, ordered."""
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4


# LogLevel -> loguru level name
_LOGURU_LEVELS: Dict[LogLevel, str] = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARN: "WARNING",
    LogLevel.ERROR: "ERROR",
    LogLevel.FATAL: "CRITICAL",
}


@dataclass
class LogEntry:
    """A single recorded log line."""
    timestamp: str
    level: LogLevel
    message: str
    context: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["level"] = self.level.name
        return data


class StructuredLogger:
    """
    Context-scoped structured logger.

    Entries below the minimum level are dropped. Everything else is appended
    to the in-memory log and fanned out to the console and the Allure report.
    """

    def __init__(
        self,
        context: str = "Default",
        level: LogLevel = LogLevel.INFO,
    ) -> None:
        self.context = context
        self.level = level
        self._logs: List[LogEntry] = []
        self._console_enabled = True
        self._report_enabled = True

    # =========================================================================
    # Configuration
    # =========================================================================

    def set_level(self, level: LogLevel) -> None:
        self.level = level

    def set_context(self, context: str) -> None:
        self.context = context

    def set_console_logging(self, enabled: bool) -> None:
        self._console_enabled = enabled

    def set_report_logging(self, enabled: bool) -> None:
        """Enable or disable mirroring entries into the Allure report."""
        self._report_enabled = enabled

    def child(self, name: str) -> "StructuredLogger":
        """
        Create a logger whose context extends this one.

        The child inherits the level and records into this logger's entry list,
        so a test logger also holds what its page objects logged.
        """
        child = StructuredLogger(f"{self.context}.{name}", self.level)
        child._console_enabled = self._console_enabled
        child._report_enabled = self._report_enabled
        child._logs = self._logs
        return child

    # =========================================================================
    # Leveled Logging
    # =========================================================================

    def debug(self, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogLevel.DEBUG, message, metadata)

    def info(self, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogLevel.INFO, message, metadata)

    def warn(self, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogLevel.WARN, message, metadata)

    def error(self, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogLevel.ERROR, message, metadata)

    def fatal(self, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogLevel.FATAL, message, metadata)

    def log(
        self,
        level: LogLevel,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Record an entry if it passes the level filter.

        Args:
            level: Severity of the entry
            message: Human-readable message
            metadata: Optional structured details (JSON-serialisable)
        """
        if level < self.level:
            return

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            message=message,
            context=self.context,
            metadata=metadata,
        )
        self._logs.append(entry)

        if self._console_enabled:
            self._log_to_console(entry)
        if self._report_enabled:
            self._log_to_report(entry)

    # =========================================================================
    # Convenience Wrappers
    # =========================================================================

    def action_start(self, action: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.info(f"🚀 Starting: {action}", details)

    def action_success(self, action: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.info(f"✅ Success: {action}", details)

    def action_failure(
        self,
        action: str,
        error: Union[BaseException, str],
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.error(f"❌ Failed: {action} - {error}", details)

    def page_navigation(self, url: str, page_name: Optional[str] = None) -> None:
        self.info(f"🔗 Navigating to {page_name or 'page'}: {url}")

    def element_interaction(self, action: str, element: str, value: Optional[str] = None) -> None:
        value_text = f" with value: {value}" if value else ""
        self.info(f"🎯 {action} on element: {element}{value_text}")

    def assertion(
        self,
        description: str,
        passed: bool,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        if passed:
            self.info(f"✅ Assertion passed: {description}")
        else:
            self.error(
                f"❌ Assertion failed: {description}",
                {"expected": expected, "actual": actual},
            )

    def step(self, step_name: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.info(f"📋 Step: {step_name}", details)

    # =========================================================================
    # Sinks
    # =========================================================================

    def _format(self, entry: LogEntry) -> str:
        context_text = f"[{entry.context}]" if entry.context else ""
        metadata_text = (
            f" {json.dumps(entry.metadata, default=str, ensure_ascii=False)}"
            if entry.metadata else ""
        )
        return f"{entry.level.name} {context_text} {entry.message}{metadata_text}"

    def _log_to_console(self, entry: LogEntry) -> None:
        logger.bind(context=entry.context).log(
            _LOGURU_LEVELS[entry.level], self._format(entry)
        )

    def _log_to_report(self, entry: LogEntry) -> None:
        try:
            with allure.step(self._format(entry)):
                pass
        except Exception as e:
            logger.debug(f"Allure step not recorded: {e}")

    # =========================================================================
    # Accumulated Logs
    # =========================================================================

    def get_logs(self) -> List[LogEntry]:
        return list(self._logs)

    def get_logs_by_level(self, level: LogLevel) -> List[LogEntry]:
        return [entry for entry in self._logs if entry.level == level]

    def clear_logs(self) -> None:
        self._logs.clear()

    def export_logs_as_json(self) -> str:
        return json.dumps(
            [entry.to_dict() for entry in self._logs],
            indent=2,
            default=str,
            ensure_ascii=False,
        )

    def save_logs(self, file_path: Union[str, Path] = "test-logs.json") -> Path:
        """
        Write the accumulated logs to a JSON file.

        Not used by any suite; kept as a manual escape hatch for debugging.
        """
        path = Path(file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.export_logs_as_json(), encoding="utf-8")
        except OSError as e:
            self.error(f"Failed to save logs: {e}")
            raise
        self.info(f"Logs saved as: {path}")
        return path


# =============================================================================
# Factories
# =============================================================================

def create_logger(context: str, level: LogLevel = LogLevel.INFO) -> StructuredLogger:
    return StructuredLogger(context, level)


def create_page_logger(page_name: str) -> StructuredLogger:
    return create_logger(f"Page.{page_name}")


def create_test_logger(test_name: str) -> StructuredLogger:
    return create_logger(f"Test.{test_name}")


def create_util_logger(util_name: str) -> StructuredLogger:
    return create_logger(f"Util.{util_name}")


__all__ = [
    "LogEntry",
    "LogLevel",
    "StructuredLogger",
    "create_logger",
    "create_page_logger",
    "create_test_logger",
    "create_util_logger",
]

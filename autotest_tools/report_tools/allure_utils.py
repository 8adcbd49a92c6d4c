"""
================================================================================
Allure Report Utilities
================================================================================

Small attachment helpers shared by the API client, the UI fixtures and the
structured logger.

================================================================================
"""

import json
from typing import Any

import allure


# Maximum text length attached to a report entry
MAX_ATTACHMENT_LENGTH = 3000


def truncate(text: str, limit: int = MAX_ATTACHMENT_LENGTH) -> str:
    """Cut long text and note the original length."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}\n\n... [Truncated, full length: {len(text)} chars] ..."


def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str, ensure_ascii=False)
    allure.attach(
        truncate(json_str),
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        truncate(text),
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(data: bytes, name: str = "Screenshot"):
    """Attach a PNG screenshot to Allure report."""
    allure.attach(
        data,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


def attach_logs(structured_logger, name: str = "Structured Log"):
    """Attach everything a StructuredLogger has recorded as one JSON document."""
    allure.attach(
        structured_logger.export_logs_as_json(),
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


__all__ = [
    "MAX_ATTACHMENT_LENGTH",
    "attach_json",
    "attach_logs",
    "attach_png",
    "attach_text",
    "truncate",
]

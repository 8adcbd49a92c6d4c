"""Allure reporting helpers."""

from .allure_utils import attach_json, attach_logs, attach_png, attach_text, truncate

__all__ = [
    "attach_json",
    "attach_logs",
    "attach_png",
    "attach_text",
    "truncate",
]

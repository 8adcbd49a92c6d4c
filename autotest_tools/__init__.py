"""
================================================================================
Autotest Tools
================================================================================

Shared infrastructure for the Goodbudget UI and API test suites.

Modules:
    - common: configuration (YAML + environment), loguru setup and the
      StructuredLogger used by page objects, the API client and tests
    - report_tools: Allure attachment helpers

Example:
    from autotest_tools.common import UiSettings, create_page_logger

    settings = UiSettings.from_config()
    log = create_page_logger("HomePage")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]

"""
================================================================================
Unit Test Fixtures
================================================================================

Offline doubles for the UI framework: a mocked Playwright page, mocked
locators and a PageActions whose interactions are AsyncMocks while its
`flow()` stays real.

================================================================================
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from autotest_tools.common.structured_logger import LogLevel, StructuredLogger
from testsuites.ui_testing.framework.page_actions import PageActions


STUBBED_ACTIONS = (
    "click_element",
    "fill_input",
    "press_key",
    "navigate",
    "check_url",
    "expect_visible",
    "expect_hidden",
    "expect_enabled",
    "expect_text",
    "verify_validation_error",
    "wait_until_visible",
)


def _make_locator(text: str = "") -> MagicMock:
    locator = MagicMock(name="locator")
    for method in ("wait_for", "click", "fill", "press"):
        setattr(locator, method, AsyncMock())
    locator.input_value = AsyncMock(return_value=text)
    locator.text_content = AsyncMock(return_value=text)
    locator.first = locator
    return locator


@pytest.fixture
def locator_factory():
    """Build a mocked Locator; `text` is its input value and text content."""
    return _make_locator


@pytest.fixture
def quiet_logger() -> StructuredLogger:
    log = StructuredLogger("Unit", LogLevel.DEBUG)
    log.set_console_logging(False)
    log.set_report_logging(False)
    return log


@pytest.fixture
def fake_page() -> MagicMock:
    page = MagicMock(name="page")
    page.url = "https://goodbudget.com/home"
    for method in ("goto", "wait_for_url", "wait_for_load_state", "pause", "screenshot"):
        setattr(page, method, AsyncMock())
    return page


@pytest.fixture
def stub_actions(fake_page, quiet_logger) -> PageActions:
    actions = PageActions(fake_page, quiet_logger)
    for name in STUBBED_ACTIONS:
        setattr(actions, name, AsyncMock())
    actions.verify_validation_error.return_value = True
    actions.wait_until_visible.return_value = True
    return actions

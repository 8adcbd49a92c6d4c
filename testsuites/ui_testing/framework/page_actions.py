"""
================================================================================
Page Actions
================================================================================

Shared element interaction capability injected into every page object.

Every action:
    - waits with an explicit, bounded timeout
    - logs the interaction through the page's StructuredLogger
    - on failure logs structured context and raises PageActionError naming
      the action and the element, chained to the Playwright error

There are no retries: a single failed wait fails the action.

Usage:
    actions = PageActions(page, create_page_logger("LoginPage"))
    await actions.fill_input(email_input, "user@example.com", "Email")
    await actions.click_element(login_button, "Login button")
    await actions.check_url(re.compile(r".*goodbudget.com/home"), "Home")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Pattern, Union

import allure
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from autotest_tools.common.structured_logger import StructuredLogger, create_page_logger

from .flow import run_flow


UrlPattern = Union[str, Pattern[str]]

# Default timeouts in milliseconds
DEFAULT_ELEMENT_TIMEOUT = 5000
DEFAULT_URL_TIMEOUT = 10000


class PageActionError(Exception):
    """Raised when a single page interaction fails."""

    def __init__(self, action: str, element: str, detail: str):
        self.action = action
        self.element = element
        super().__init__(f"Failed to {action} {element}. {detail}")


def _pattern_text(pattern: UrlPattern) -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else str(pattern)


class PageActions:
    """
    Element interaction helpers bound to one Playwright page.

    Page objects hold an instance instead of inheriting behaviour, so any
    page can share the same logger/timeouts or receive a test double.
    """

    def __init__(
        self,
        page: Page,
        logger: Optional[StructuredLogger] = None,
        default_timeout: int = DEFAULT_ELEMENT_TIMEOUT,
    ):
        """
        Args:
            page: Playwright Page object
            logger: Logger receiving interaction records
            default_timeout: Element timeout in milliseconds
        """
        self.page = page
        self.logger = logger or create_page_logger("Page")
        self.default_timeout = default_timeout

    def _fail(self, action: str, element: str, error: BaseException, **details: Any) -> PageActionError:
        self.logger.action_failure(f"{action} {element}", error, details or None)
        return PageActionError(action, element, f"Underlying error: {error}")

    # =========================================================================
    # Interactions
    # =========================================================================

    async def click_element(
        self,
        locator: Locator,
        element_name: str,
        timeout: Optional[int] = None,
    ) -> None:
        """Wait for the element to be visible, then click it."""
        timeout = timeout or self.default_timeout
        with allure.step(f"Click: {element_name}"):
            try:
                await locator.wait_for(state="visible", timeout=timeout)
                await locator.click(timeout=timeout)
            except Exception as e:
                raise self._fail("click", element_name, e, timeout=timeout) from e
        self.logger.element_interaction("Click", element_name)

    async def fill_input(
        self,
        locator: Locator,
        value: str,
        element_name: str,
        timeout: Optional[int] = None,
        sensitive: bool = False,
    ) -> None:
        """
        Wait for an input field to be visible, then fill it.

        Args:
            locator: Input locator
            value: Text to enter (may be empty to clear the field)
            element_name: Human-readable element name
            timeout: Timeout in milliseconds
            sensitive: Mask the value in logs and report steps
        """
        timeout = timeout or self.default_timeout
        shown = "*" * len(value) if sensitive else value
        with allure.step(f"Fill {element_name}: {shown}"):
            try:
                await locator.wait_for(state="visible", timeout=timeout)
                await locator.fill(value, timeout=timeout)
            except Exception as e:
                raise self._fail("fill", element_name, e, timeout=timeout) from e
        self.logger.element_interaction("Fill", element_name, shown)

    async def press_key(
        self,
        locator: Locator,
        key: str,
        element_name: str,
        timeout: Optional[int] = None,
    ) -> None:
        """Press a keyboard key while the element has focus."""
        timeout = timeout or self.default_timeout
        try:
            await locator.press(key, timeout=timeout)
        except Exception as e:
            raise self._fail(f"press {key} in", element_name, e, timeout=timeout) from e
        self.logger.element_interaction(f"Press {key}", element_name)

    async def navigate(
        self,
        url: str,
        page_name: Optional[str] = None,
        wait_until: str = "domcontentloaded",
    ) -> None:
        """Navigate the page to an absolute URL."""
        self.logger.page_navigation(url, page_name)
        with allure.step(f"Navigate to {url}"):
            await self.page.goto(url, wait_until=wait_until)

    # =========================================================================
    # Verifications
    # =========================================================================

    async def check_url(
        self,
        pattern: UrlPattern,
        page_name: str,
        timeout: int = DEFAULT_URL_TIMEOUT,
    ) -> None:
        """
        Wait until the current URL matches the pattern.

        Args:
            pattern: Compiled regex (searched) or Playwright glob string
            page_name: Page name used in logs and errors
            timeout: Timeout in milliseconds

        Raises:
            PageActionError: with expected pattern and actual URL
        """
        expected = _pattern_text(pattern)
        with allure.step(f"Check URL of {page_name or 'current'} page: {expected}"):
            try:
                await self.page.wait_for_url(pattern, timeout=timeout)
            except Exception as e:
                actual = self.page.url
                self.logger.action_failure(
                    f"Verify URL of {page_name} page", e,
                    {"expected": expected, "actual": actual},
                )
                raise PageActionError(
                    "verify URL of",
                    f"{page_name} page",
                    f"Expected pattern: {expected}, Actual URL: {actual}. Underlying error: {e}",
                ) from e
        self.logger.info(
            f"Successfully navigated to {page_name} page. URL matches: {expected}"
        )

    async def expect_visible(
        self,
        locator: Locator,
        element_name: str,
        timeout: Optional[int] = None,
    ) -> None:
        timeout = timeout or self.default_timeout
        try:
            await expect(locator).to_be_visible(timeout=timeout)
        except (AssertionError, PlaywrightError) as e:
            raise self._fail("confirm visibility of", element_name, e, timeout=timeout) from e
        self.logger.assertion(f"{element_name} is visible", True)

    async def expect_hidden(
        self,
        locator: Locator,
        element_name: str,
        timeout: Optional[int] = None,
    ) -> None:
        timeout = timeout or self.default_timeout
        try:
            await expect(locator).not_to_be_visible(timeout=timeout)
        except (AssertionError, PlaywrightError) as e:
            raise self._fail("confirm absence of", element_name, e, timeout=timeout) from e
        self.logger.assertion(f"{element_name} is not visible", True)

    async def expect_enabled(
        self,
        locator: Locator,
        element_name: str,
        timeout: Optional[int] = None,
    ) -> None:
        timeout = timeout or self.default_timeout
        try:
            await expect(locator).to_be_enabled(timeout=timeout)
        except (AssertionError, PlaywrightError) as e:
            raise self._fail("confirm enabled state of", element_name, e, timeout=timeout) from e

    async def expect_text(
        self,
        locator: Locator,
        expected: str,
        element_name: str,
        exact: bool = False,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Assert element text.

        Args:
            exact: Full text match instead of substring match
        """
        timeout = timeout or self.default_timeout
        try:
            if exact:
                await expect(locator).to_have_text(expected, timeout=timeout)
            else:
                await expect(locator).to_contain_text(expected, timeout=timeout)
        except (AssertionError, PlaywrightError) as e:
            actual = await self.text_of(locator)
            self.logger.assertion(f"{element_name} text", False, expected, actual)
            raise self._fail("verify text of", element_name, e, expected=expected, actual=actual) from e
        self.logger.assertion(f"{element_name} text matches: {expected}", True)

    async def verify_validation_error(
        self,
        locator: Locator,
        expected: str,
        timeout: Optional[int] = None,
    ) -> bool:
        """
        Check that a validation message is shown.

        Returns:
            True if the locator contains the expected text within the timeout
        """
        timeout = timeout or self.default_timeout
        try:
            await expect(locator).to_be_visible(timeout=timeout)
            await expect(locator).to_contain_text(expected, timeout=timeout)
        except (AssertionError, PlaywrightError):
            actual = await self.text_of(locator)
            self.logger.assertion("Validation error shown", False, expected, actual)
            return False
        self.logger.assertion(f"Validation error shown: {expected}", True)
        return True

    async def wait_until_visible(self, locator: Locator, timeout: int) -> bool:
        """Return whether the element became visible; a timeout is not an error."""
        try:
            await locator.wait_for(state="visible", timeout=timeout)
            return True
        except PlaywrightTimeoutError:
            return False

    async def text_of(self, locator: Locator) -> Optional[str]:
        """Best-effort trimmed text content, for failure messages."""
        try:
            text = await locator.first.text_content(timeout=1000)
        except PlaywrightError:
            return None
        return text.strip() if text else text

    # =========================================================================
    # Flows
    # =========================================================================

    def flow(self, name: str, details: Optional[Dict[str, Any]] = None):
        """Start a named multi-step flow logged through this page's logger."""
        return run_flow(name, self.logger, details)


__all__ = [
    "DEFAULT_ELEMENT_TIMEOUT",
    "DEFAULT_URL_TIMEOUT",
    "PageActionError",
    "PageActions",
]

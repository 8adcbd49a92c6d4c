"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle for the Goodbudget UI suite.

One browser is launched per test session; every test gets its own context so
cookies and local storage never leak between tests.

Headless mode follows the runtime settings: CI or Docker runs are headless,
local runs open a visible window unless forced otherwise.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from autotest_tools.common.config_loader import UiSettings


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class BrowserManager:
    """
    Owns the Playwright driver, one browser and the contexts created from it.

    Usage:
        async with BrowserManager.from_settings(UiSettings.from_config()) as manager:
            page = await manager.new_page()
            await page.goto("https://www.goodbudget.com")
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": ["--ignore-certificate-errors"],
    }

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: bool = True,
        browser_type: str = "chromium",
        base_url: Optional[str] = None,
    ):
        """
        Args:
            headless: Run browser in headless mode
            browser_type: 'chromium', 'firefox' or 'webkit'
            base_url: Base URL applied to every new context
        """
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser '{browser_type}', expected one of {SUPPORTED_BROWSERS}"
            )
        self.headless = headless
        self.browser_type = browser_type
        self.base_url = base_url

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    @classmethod
    def from_settings(cls, settings: UiSettings, headless: Optional[bool] = None) -> "BrowserManager":
        """Build a manager from UI settings; `headless` overrides the CI/Docker default."""
        return cls(
            headless=settings.headless if headless is None else headless,
            browser_type=settings.browser,
            base_url=settings.base_url,
        )

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch the browser."""
        self._playwright = await async_playwright().start()
        browser_launcher = getattr(self._playwright, self.browser_type)

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }
        self._browser = await browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts, the browser and the Playwright driver."""
        for context in self._contexts:
            try:
                await context.close()
            except Exception as e:
                logger.warning(f"Failed to close browser context: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create an isolated browser context.

        Args:
            **options: Extra Playwright context options

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {**self.DEFAULT_CONTEXT_OPTIONS, **options}
        if self.base_url and "base_url" not in context_options:
            context_options["base_url"] = self.base_url

        context = await self._browser.new_context(**context_options)
        self._contexts.append(context)
        return context

    async def close_context(self, context: BrowserContext) -> None:
        """Close one context created by this manager."""
        if context in self._contexts:
            self._contexts.remove(context)
        await context.close()

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """Create a page in the given context, or in a new one."""
        if context is None:
            context = await self.new_context(**context_options)
        return await context.new_page()

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


__all__ = [
    "BrowserManager",
    "SUPPORTED_BROWSERS",
]

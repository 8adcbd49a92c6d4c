"""
================================================================================
Landing Page Object
================================================================================

Public marketing page at https://www.goodbudget.com with the header
"Log in" and "Sign up" links.

================================================================================
"""

from __future__ import annotations

import re
from typing import Optional

import allure
from playwright.async_api import Page

from autotest_tools.common.structured_logger import StructuredLogger, create_page_logger
from testsuites.ui_testing.framework.page_actions import PageActions, UrlPattern


DEFAULT_BASE_URL = "https://www.goodbudget.com"


class LandingPage:
    """Landing page object."""

    LOGIN_LINK = "(//a[@class='elementor-item'][normalize-space()='Log in'])[1]"
    SIGN_UP_LINK = "(//a[@class='elementor-item'][normalize-space()='Sign up'])[1]"

    LOGIN_URL = re.compile(r".*goodbudget.com/login")
    SIGN_UP_URL = re.compile(r".*goodbudget.com/signup")

    def __init__(
        self,
        page: Page,
        logger: Optional[StructuredLogger] = None,
        actions: Optional[PageActions] = None,
        base_url: str = DEFAULT_BASE_URL,
    ):
        self.page = page
        self.logger = logger or create_page_logger("LandingPage")
        self.actions = actions or PageActions(page, self.logger)
        self.base_url = base_url.rstrip("/")

        self.login_link = page.locator(self.LOGIN_LINK)
        self.sign_up_link = page.locator(self.SIGN_UP_LINK)

    @allure.step("Open landing page")
    async def open(self) -> "LandingPage":
        await self.actions.navigate(self.base_url, "Landing")
        return self

    @allure.step("Navigate to Sign Up page")
    async def navigate_to_sign_up_page(self) -> None:
        await self.actions.click_element(self.sign_up_link, "Sign Up")
        await self.actions.check_url(self.SIGN_UP_URL, "Sign Up")

    @allure.step("Navigate to Log In page")
    async def navigate_login_page(self) -> None:
        await self.actions.click_element(self.login_link, "Log In")
        await self.actions.check_url(self.LOGIN_URL, "Log In")

    async def check_url(self, pattern: UrlPattern, page_name: str) -> None:
        await self.actions.check_url(pattern, page_name)

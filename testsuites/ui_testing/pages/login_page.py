"""
================================================================================
Login Page Object
================================================================================

Login form at /login. Every credential failure (empty fields, malformed or
unknown e-mail, wrong password) surfaces the same general error label.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from playwright.async_api import Locator, Page

from autotest_tools.common.structured_logger import StructuredLogger, create_page_logger
from testsuites.ui_testing.framework.flow import FlowResult
from testsuites.ui_testing.framework.page_actions import PageActions

from .landing_page import DEFAULT_BASE_URL


class LoginPage:
    """Login page object."""

    URL_PATH = "/login"

    EMAIL_INPUT = "#username"
    PASSWORD_INPUT = "#password"
    LOGIN_BUTTON = ".elementor-button-text"
    GENERAL_ERROR = 'label[class="error"]'

    LOGIN_ERROR = "Hm... that username and/or password didn't work."

    def __init__(
        self,
        page: Page,
        logger: Optional[StructuredLogger] = None,
        actions: Optional[PageActions] = None,
        base_url: str = DEFAULT_BASE_URL,
    ):
        self.page = page
        self.logger = logger or create_page_logger("LoginPage")
        self.actions = actions or PageActions(page, self.logger)
        self.base_url = base_url.rstrip("/")

        self.email_input = page.locator(self.EMAIL_INPUT)
        self.password_input = page.locator(self.PASSWORD_INPUT)
        self.login_button = page.locator(self.LOGIN_BUTTON)
        self.general_error = page.locator(self.GENERAL_ERROR)

    @allure.step("Open login page")
    async def open(self, base_url: Optional[str] = None) -> "LoginPage":
        """Go straight to the login form without using the landing page header."""
        url = f"{(base_url or self.base_url).rstrip('/')}{self.URL_PATH}"
        await self.actions.navigate(url, "Log In")
        return self

    async def provide_login_details(
        self,
        email: Optional[str],
        password: Optional[str],
        click_login: bool = True,
    ) -> FlowResult:
        """
        Fill the login form.

        Args:
            email: E-mail to enter; None leaves the field untouched, "" clears it
            password: Password to enter; None leaves the field untouched
            click_login: Submit the form at the end

        Returns:
            FlowResult listing the completed steps
        """
        async with self.actions.flow("Provide Login Details", {"email": email}) as flow:
            if email is not None:
                await flow.step(
                    "Enter email",
                    self.actions.fill_input(self.email_input, email, "Email"),
                )
            if password is not None:
                await flow.step(
                    "Enter password",
                    self.actions.fill_input(self.password_input, password, "Password", sensitive=True),
                )
            if click_login:
                await flow.step(
                    "Click Login",
                    self.actions.click_element(self.login_button, "Login button"),
                )
        return flow.result

    async def verify_validation_error(self, locator: Locator, expected: str) -> bool:
        return await self.actions.verify_validation_error(locator, expected)

    @allure.step("Verify login error is displayed")
    async def verify_login_error(self, expected: str = LOGIN_ERROR) -> None:
        await self.actions.expect_text(self.general_error, expected, "Login error")

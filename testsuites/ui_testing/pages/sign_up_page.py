"""
================================================================================
Sign Up Page Object
================================================================================

Household registration form at /signup.

The form is protected by a reCAPTCHA. There is no bypass: with
`pause_for_captcha=True` the flow stops on `page.pause()` so a person can solve
the CAPTCHA in the Playwright Inspector and resume the test.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from playwright.async_api import Locator, Page

from autotest_tools.common.structured_logger import StructuredLogger, create_page_logger
from testsuites.ui_testing.framework.flow import FlowResult
from testsuites.ui_testing.framework.page_actions import PageActions


class SignUpPage:
    """Sign up page object."""

    EMAIL_INPUT = "#new_household_email"
    PASSWORD_INPUT = "#new_household_new_password"
    FREE_PLAN_RADIO = "#new_household_plan_0"
    TERMS_OF_USE_CHECKBOX = "#new_household_terms_of_use"
    GET_STARTED_BUTTON = '//span[@class="elementor-button-text"]'
    EMAIL_ERROR = 'label[class="error"][for="new_household_email"]'

    EMAIL_TAKEN_ERROR = "Email is already taken. Already have a Household? Log in »"

    def __init__(
        self,
        page: Page,
        logger: Optional[StructuredLogger] = None,
        actions: Optional[PageActions] = None,
    ):
        self.page = page
        self.logger = logger or create_page_logger("SignUpPage")
        self.actions = actions or PageActions(page, self.logger)

        self.email_input = page.locator(self.EMAIL_INPUT)
        self.password_input = page.locator(self.PASSWORD_INPUT)
        self.free_plan_radio = page.locator(self.FREE_PLAN_RADIO)
        self.terms_of_use_checkbox = page.locator(self.TERMS_OF_USE_CHECKBOX)
        self.get_started_button = page.locator(self.GET_STARTED_BUTTON)
        self.email_error = page.locator(self.EMAIL_ERROR)

    async def enter_email(self, email: str) -> None:
        await self.actions.fill_input(self.email_input, email, "Email")

    async def enter_password(self, password: str) -> None:
        await self.actions.fill_input(self.password_input, password, "Password", sensitive=True)

    async def verify_validation_error(self, locator: Locator, expected: str) -> bool:
        return await self.actions.verify_validation_error(locator, expected)

    @allure.step("Verify email is already taken")
    async def verify_email_taken(self) -> None:
        await self.actions.expect_text(self.email_error, self.EMAIL_TAKEN_ERROR, "Email error")

    async def provide_sign_up_details(
        self,
        email: str,
        password: str,
        select_plan: bool = True,
        accept_terms: bool = True,
        pause_for_captcha: bool = True,
        submit: bool = True,
    ) -> FlowResult:
        """
        Fill in the registration form.

        Args:
            email: Household e-mail address
            password: Account password
            select_plan: Choose the free plan radio button
            accept_terms: Tick the terms of use checkbox
            pause_for_captcha: Stop on the Playwright Inspector for a manual CAPTCHA
            submit: Click "Get Started" at the end

        Returns:
            FlowResult listing the completed steps

        Raises:
            FlowError: a step failed; the error carries the partial result
        """
        async with self.actions.flow("Provide Sign Up Details", {"email": email}) as flow:
            await flow.step("Wait for page load", self.page.wait_for_load_state("domcontentloaded"))
            await flow.step("Enter email", self.enter_email(email))
            await flow.step("Enter password", self.enter_password(password))
            if select_plan:
                await flow.step(
                    "Select free plan",
                    self.actions.click_element(self.free_plan_radio, "Select Free Plan"),
                )
            if accept_terms:
                await flow.step(
                    "Accept terms of use",
                    self.actions.click_element(self.terms_of_use_checkbox, "Accept Terms of Use"),
                )
            if pause_for_captcha:
                self.logger.warn(
                    ">>> Pausing for manual CAPTCHA completion. Solve the CAPTCHA in the "
                    "browser, then resume the test from the Playwright Inspector. <<<"
                )
                await flow.step("Solve CAPTCHA manually", self.page.pause())
                self.logger.info(">>> Resuming test. Assuming CAPTCHA was solved. <<<")
            if submit:
                await flow.step(
                    "Click Get Started",
                    self.actions.click_element(self.get_started_button, "Get Started Button"),
                )
        return flow.result

"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the Goodbudget browser suites.

Key Features:
- One browser per session, a fresh context + page per test
- A class-scoped shared page for suites that keep state between tests
- Page Object fixtures bound to the per-test page, logging into `test_logger`
- Screenshot and structured log attachment on failure, for both kinds of page

All async fixtures run on the session event loop, so test modules declare
`pytestmark = pytest.mark.asyncio(loop_scope="session")`.

================================================================================
"""

from __future__ import annotations

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import Page

from autotest_tools.common import StructuredLogger, UiSettings, create_test_logger
from autotest_tools.report_tools import attach_logs, attach_png
from testsuites.ui_testing.framework import BrowserManager
from testsuites.ui_testing.pages import (
    EnvelopePage,
    HomePage,
    LandingPage,
    LoginPage,
    SignUpPage,
)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (`item.rep_call`, ...) for fixtures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def _test_failed(request: pytest.FixtureRequest) -> bool:
    report = getattr(request.node, "rep_call", None)
    return bool(report and report.failed)


async def _attach_screenshot(page: Page, name: str) -> None:
    try:
        attach_png(await page.screenshot(full_page=True), name=name)
    except Exception as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")


# ================================================================================
# Settings & Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_settings() -> UiSettings:
    return UiSettings.from_config()


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_manager(
    ui_settings: UiSettings,
    pytestconfig: pytest.Config,
) -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser.

    Headless under CI/DOCKER; `--show-browser` forces a visible window.
    """
    headless = False if pytestconfig.getoption("--show-browser") else None
    async with BrowserManager.from_settings(ui_settings, headless=headless) as manager:
        yield manager


@pytest_asyncio.fixture(loop_scope="session")
async def page(
    browser_manager: BrowserManager,
    request: pytest.FixtureRequest,
) -> AsyncGenerator[Page, None]:
    """Fresh, isolated context + page for one test."""
    context = await browser_manager.new_context()
    page = await context.new_page()
    yield page
    if _test_failed(request):
        await _attach_screenshot(page, "failure_screenshot")
    await browser_manager.close_context(context)


@pytest_asyncio.fixture(scope="class", loop_scope="session")
async def shared_page(browser_manager: BrowserManager) -> AsyncGenerator[Page, None]:
    """One page shared by every test of a class."""
    context = await browser_manager.new_context()
    page = await context.new_page()
    yield page
    await browser_manager.close_context(context)


@pytest.fixture
def test_logger(request: pytest.FixtureRequest) -> Generator[StructuredLogger, None, None]:
    """Per-test structured logger; its records are attached to the report on failure."""
    log = create_test_logger(request.node.name)
    yield log
    if _test_failed(request):
        attach_logs(log)


@pytest.fixture(scope="class")
def shared_logger(request: pytest.FixtureRequest) -> StructuredLogger:
    """Logger for page objects bound to `shared_page`."""
    return create_test_logger(request.node.name)


@pytest_asyncio.fixture(loop_scope="session")
async def shared_page_report(
    shared_page: Page,
    shared_logger: StructuredLogger,
    request: pytest.FixtureRequest,
) -> AsyncGenerator[Page, None]:
    """
    Per-test reporting for `shared_page`.

    Log records start empty for each test; the screenshot and the records are
    attached when the test fails.
    """
    shared_logger.clear_logs()
    yield shared_page
    if _test_failed(request):
        await _attach_screenshot(shared_page, "failure_screenshot")
        attach_logs(shared_logger)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def landing_page(page: Page, ui_settings: UiSettings, test_logger: StructuredLogger) -> LandingPage:
    return LandingPage(page, test_logger.child("LandingPage"), base_url=ui_settings.base_url)


@pytest.fixture
def login_page(page: Page, ui_settings: UiSettings, test_logger: StructuredLogger) -> LoginPage:
    return LoginPage(page, test_logger.child("LoginPage"), base_url=ui_settings.base_url)


@pytest.fixture
def sign_up_page(page: Page, test_logger: StructuredLogger) -> SignUpPage:
    return SignUpPage(page, test_logger.child("SignUpPage"))


@pytest.fixture
def home_page(page: Page, test_logger: StructuredLogger) -> HomePage:
    return HomePage(page, test_logger.child("HomePage"))


@pytest.fixture
def envelope_page(page: Page, test_logger: StructuredLogger) -> EnvelopePage:
    return EnvelopePage(page, test_logger.child("EnvelopePage"))


# ================================================================================
# Authentication Fixtures
# ================================================================================

@pytest_asyncio.fixture(loop_scope="session")
async def logged_in_home(
    ui_settings: UiSettings,
    landing_page: LandingPage,
    login_page: LoginPage,
    home_page: HomePage,
) -> HomePage:
    """
    Log in with the configured account and land on the dashboard.

    Uses GOODBUDGET_VALID_EMAIL / GOODBUDGET_VALID_PASSWORD.
    """
    await landing_page.open()
    await landing_page.navigate_login_page()
    await login_page.provide_login_details(ui_settings.valid_email, ui_settings.valid_password)
    await home_page.check_url(HomePage.HOME_URL, "Home")
    await home_page.verify_user_name(ui_settings.valid_username)
    return home_page

"""
================================================================================
API Testing Pytest Configuration
================================================================================

Shared fixtures for the Goodbudget transactions API suite.

Fixtures:
    - api_settings: ApiSettings built from config/config.yaml + environment
    - api_client: module-scoped ApiClient
    - transaction_tracker: module-scoped TransactionTracker, cleaned up at the end
    - created_transaction_ids: the tracker's id list
    - create_transaction: POST helper that tracks the new id
    - transaction_factory / validator: test data and schema validation

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Callable, Generator, List

import httpx
import pytest
from loguru import logger

from autotest_tools.common import ApiSettings
from autotest_tools.report_tools import attach_json, attach_text
from testsuites.api_testing.framework import (
    ENDPOINTS,
    ApiClient,
    ResponseValidator,
    Transaction,
    TransactionFactory,
    TransactionTracker,
)


# =============================================================================
# Session-Scoped Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def api_settings() -> ApiSettings:
    settings = ApiSettings.from_config()
    logger.info(f"🚀 Starting API Test Suite - Base URL: {settings.base_url}")
    return settings


@pytest.fixture(scope="session")
def transaction_factory() -> TransactionFactory:
    return TransactionFactory()


@pytest.fixture(scope="session")
def validator() -> ResponseValidator:
    return ResponseValidator()


# =============================================================================
# Module-Scoped Fixtures
# =============================================================================

@pytest.fixture(scope="module")
def api_client(api_settings: ApiSettings) -> Generator[ApiClient, None, None]:
    """
    Provide an open API client for every test in the module.

    Usage:
        def test_example(api_client):
            response = api_client.get(ENDPOINTS.TRANSACTIONS)
            assert response.status_code == 200
    """
    with ApiClient(api_settings) as client:
        yield client


@pytest.fixture(scope="module")
def transaction_tracker(api_client: ApiClient) -> Generator[TransactionTracker, None, None]:
    """
    Track created transactions; every tracked id is deleted after the module.

    Cleanup is best effort: a failed delete is logged as a warning and the
    remaining ids are still processed.
    """
    tracker = TransactionTracker(api_client)
    yield tracker

    failed = tracker.cleanup()
    if failed:
        logger.warning(f"⚠️ {len(failed)} transaction(s) left behind: {failed}")
    logger.info("🏁 API Test Suite module completed")


@pytest.fixture(scope="module")
def created_transaction_ids(transaction_tracker: TransactionTracker) -> List[str]:
    return transaction_tracker.ids


@pytest.fixture(scope="module")
def create_transaction(transaction_tracker: TransactionTracker) -> Callable[[dict], Transaction]:
    """Return a helper that POSTs a transaction and registers its id for cleanup."""
    return transaction_tracker.create


# =============================================================================
# Allure Reporting Hooks
# =============================================================================

def pytest_exception_interact(node, call, report):
    """Attach the error, and the HTTP response body for status errors, on failure."""
    if not report.failed:
        return
    error = call.excinfo.value
    attach_text(str(error), name="Error Details")
    if isinstance(error, httpx.HTTPStatusError):
        try:
            attach_json(error.response.json(), name="Error Response Body")
        except ValueError:
            attach_text(error.response.text, name="Error Response Body")

"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers the project markers and tags collected tests by suite directory:

    api_testing/  -> api, live
    ui_testing/   -> ui, e2e, live
    unit/         -> unit (offline, always runs)

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line("markers", "smoke: Quick verification tests")
    config.addinivalue_line("markers", "regression: Full regression test suite")
    config.addinivalue_line("markers", "e2e: End-to-end tests simulating user flows")
    config.addinivalue_line("markers", "unit: Offline tests of the framework itself")
    config.addinivalue_line(
        "markers", "live: Talks to the live Goodbudget site/API (needs --live)"
    )
    config.addinivalue_line(
        "markers", "manual: Needs a person at a visible browser (signup CAPTCHA)"
    )

    # Domain markers
    config.addinivalue_line("markers", "api: API-specific tests")
    config.addinivalue_line("markers", "ui: UI-specific tests")

    # Feature markers
    config.addinivalue_line("markers", "auth: Login, logout and signup")
    config.addinivalue_line("markers", "envelope: Envelope management")
    config.addinivalue_line("markers", "transactions: Transactions API")


def pytest_collection_modifyitems(config, items):
    """Tag collected tests by the suite directory they live in."""
    for item in items:
        path = item.path.as_posix()
        if "api_testing" in path:
            item.add_marker(pytest.mark.api)
            item.add_marker(pytest.mark.live)
        elif "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)
            item.add_marker(pytest.mark.live)
        elif "/unit/" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Goodbudget E2E & API Test Suite",
        "=" * 60,
        "",
    ]

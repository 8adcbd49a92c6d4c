"""
Repository-level pytest configuration.

  - Command line options shared by every suite (--live, --show-browser)
  - One-time loguru setup for the whole run

Live suites talk to the real https://www.goodbudget.com site and API and need
real credentials, so they only run with `--live` or RUN_LIVE_TESTS=true.
"""

from __future__ import annotations

import os

import pytest

from autotest_tools.common import init_logger


def pytest_addoption(parser):
    group = parser.getgroup("goodbudget")
    group.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run tests against the live Goodbudget site/API (also RUN_LIVE_TESTS=true)",
    )
    group.addoption(
        "--show-browser",
        action="store_true",
        default=False,
        help="Run UI tests in a visible browser window, overriding CI/DOCKER headless mode",
    )


def pytest_configure(config):
    init_logger(level=os.getenv("LOG_LEVEL"))


def live_enabled(config) -> bool:
    """Whether live tests were requested on the command line or environment."""
    return config.getoption("--live") or os.getenv("RUN_LIVE_TESTS", "").lower() == "true"


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config, items):
    """Skip tests marked `live` unless live runs were requested."""
    if live_enabled(config):
        return
    skip_live = pytest.mark.skip(reason="live test: pass --live or set RUN_LIVE_TESTS=true")
    for item in items:
        if item.get_closest_marker("live"):
            item.add_marker(skip_live)


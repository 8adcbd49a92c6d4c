"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for Goodbudget.

Components:
    - page_actions: Element interaction capability injected into page objects
    - flow: Named multi-step flows with partial-progress reporting
    - browser_manager: Browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .flow import Flow, FlowError, FlowResult, run_flow
from .page_actions import PageActionError, PageActions

__all__ = [
    "BrowserManager",
    "Flow",
    "FlowError",
    "FlowResult",
    "PageActionError",
    "PageActions",
    "run_flow",
]

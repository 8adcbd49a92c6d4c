"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for Goodbudget pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions (through an injected PageActions)
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .envelope_page import EnvelopePage, EnvelopeRow
from .home_page import HomePage
from .landing_page import LandingPage
from .login_page import LoginPage
from .sign_up_page import SignUpPage

__all__ = [
    "EnvelopePage",
    "EnvelopeRow",
    "HomePage",
    "LandingPage",
    "LoginPage",
    "SignUpPage",
]

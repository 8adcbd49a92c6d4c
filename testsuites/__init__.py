"""
Goodbudget test suites.

Kept importable so the suites can share code through absolute imports
(`from testsuites.ui_testing.pages import HomePage`) and so `run_tests.py`
and IDEs resolve them the same way pytest does.

Credentials are read from the environment; none are stored here.
"""

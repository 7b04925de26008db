"""Test fixtures for converter and Confluence integration tests.

This module provides:
- ADF document builders (adf_fixtures)
- Confluence credentials for integration tests (from .env.test)
"""

from .confluence_credentials import get_test_credentials

__all__ = [
    "get_test_credentials",
]

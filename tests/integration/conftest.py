"""Pytest configuration and fixtures for integration tests.

Integration tests read pages from a real Confluence instance. They are
skipped when .env.test is missing or incomplete.
"""

from typing import Dict

import pytest

from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from tests.fixtures.confluence_credentials import get_test_credentials


@pytest.fixture(scope="session")
def test_credentials() -> Dict[str, str]:
    """Load test Confluence credentials from .env.test, or skip."""
    try:
        return get_test_credentials()
    except (FileNotFoundError, ValueError) as e:
        pytest.skip(str(e))


@pytest.fixture(scope="session")
def api_wrapper(test_credentials: Dict[str, str]) -> APIWrapper:
    """Create authenticated API wrapper for Confluence integration tests.

    Session scope reuses the underlying client across tests.
    """
    return APIWrapper(Authenticator('.env.test'))

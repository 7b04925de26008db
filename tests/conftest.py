"""Root pytest configuration for all tests."""

import logging

import pytest

from src.adf_markdown.config import ConversionConfig
from src.adf_markdown.link_resolver import LinkResolver
from src.adf_markdown.state import ConversionState

# Suppress noisy ERROR logs from atlassian-python-api when pages don't exist.
logging.getLogger("atlassian").setLevel(logging.WARNING)


@pytest.fixture
def state():
    """Conversion state with default tables and no page lookup."""
    return ConversionState(config=ConversionConfig(), link_resolver=LinkResolver())


@pytest.fixture
def confluence_state():
    """Conversion state for a Confluence instance at example.atlassian.net."""
    config = ConversionConfig(base_url="https://example.atlassian.net/wiki")
    return ConversionState(config=config, link_resolver=LinkResolver())

"""Integration tests for page-title lookups against a real Confluence instance.

Requirements:
- Test Confluence credentials in .env.test
- CONFLUENCE_TEST_PAGE_ID pointing at a readable page
"""

import logging
from typing import Dict

import pytest

from src.adf_markdown.config import ConversionConfig
from src.adf_markdown.engine import AdfToMarkdownConverter
from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.page_lookup import ConfluencePageLookup
from tests.fixtures.adf_fixtures import create_adf_doc, create_inline_card, create_inline_paragraph

logger = logging.getLogger(__name__)

MISSING_PAGE_ID = "999999999999"


@pytest.mark.integration
class TestPageLookupIntegration:
    """Integration tests for ConfluencePageLookup."""

    def test_fetch_existing_page(self, api_wrapper: APIWrapper, test_credentials: Dict[str, str]):
        info = ConfluencePageLookup(api_wrapper).fetch(test_credentials['test_page_id'])

        assert info is not None
        assert info.title
        assert info.version >= 1
        logger.info(f"Fetched test page '{info.title}' (version {info.version})")

    def test_missing_page_is_none(self, api_wrapper: APIWrapper):
        assert ConfluencePageLookup(api_wrapper).fetch(MISSING_PAGE_ID) is None

    def test_card_shows_page_title(self, api_wrapper: APIWrapper, test_credentials: Dict[str, str]):
        """A same-instance card converts to a link labelled with the live title."""
        base_url = test_credentials['confluence_url'].rstrip('/')
        page_id = test_credentials['test_page_id']
        url = f"{base_url}/spaces/TEST/pages/{page_id}"
        lookup = ConfluencePageLookup(api_wrapper)

        converter = AdfToMarkdownConverter(ConversionConfig(base_url=base_url), page_lookup=lookup)
        markdown = converter.convert(create_adf_doc([create_inline_paragraph(create_inline_card(url))]))

        title = lookup.fetch(page_id).title
        assert f"[{title}]({url})" in markdown

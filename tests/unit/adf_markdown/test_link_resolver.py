"""Unit tests for adf_markdown.link_resolver module."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from src.adf_markdown.link_resolver import (
    LinkResolver,
    extract_page_id,
    is_confluence_url,
    is_jira_url,
    is_same_instance,
    url_tail_text,
)
from src.confluence_client.page_lookup import PageInfo

BASE_URL = "https://correct-instance"
PAGE_URL = "https://correct-instance/wiki/spaces/X/pages/123/Some-Title"


def resolve(resolver: LinkResolver, url: str, base_url: str = BASE_URL, **kwargs):
    return asyncio.run(resolver.resolve(url, base_url=base_url, **kwargs))


class TestUrlHelpers:
    """Test cases for URL classification helpers."""

    def test_is_jira_url(self):
        assert is_jira_url("https://x.atlassian.net/browse/PROJ-123")
        assert not is_jira_url("https://x.atlassian.net/browse/project")

    def test_is_confluence_url(self):
        assert is_confluence_url(PAGE_URL)
        assert not is_confluence_url("https://example.com/docs")

    def test_is_same_instance(self):
        assert is_same_instance(PAGE_URL, BASE_URL)
        assert is_same_instance(PAGE_URL, "https://CORRECT-INSTANCE/wiki")
        assert not is_same_instance(PAGE_URL, "https://other-instance")
        assert not is_same_instance(PAGE_URL, "")

    def test_extract_page_id(self):
        assert extract_page_id(PAGE_URL) == "123"
        assert extract_page_id("https://x/wiki/pages/viewpage.action?pageId=456") == "456"
        assert extract_page_id("https://x/wiki/spaces/X/pages/edit-v2/789") == "789"
        assert extract_page_id("https://x/wiki/spaces/X/overview") is None

    def test_url_tail_text(self):
        assert url_tail_text(PAGE_URL) == "Some Title"
        assert url_tail_text("https://x/docs/My%20Page_v2?a=1#top") == "My Page v2"
        assert url_tail_text("https://example.com/") == "example.com"

    @pytest.mark.parametrize("url, expected", [
        ("https://x.atlassian.net/wiki/spaces/X/pages/123", "Page 123"),
        ("https://x.atlassian.net/wiki/spaces/X/pages/viewpage.action?pageId=456", "Page 456"),
        ("https://x.atlassian.net/wiki/spaces/X/pages/edit-v2/789", "Page 789"),
        ("https://x.atlassian.net/wiki/spaces/X/pages/123/Release+Notes", "Release Notes"),
    ])
    def test_url_tail_text_confluence_pages(self, url, expected):
        assert url_tail_text(url) == expected

    @pytest.mark.parametrize("url, expected", [
        ("https://www.example.com/items/12345", "example.com"),
        ("https://www.example.com/a", "example.com"),
        ("https://docs.example.com/guide/setup.html", "setup html"),
        ("https://example.com", "example.com"),
    ])
    def test_url_tail_text_generic_fallbacks(self, url, expected):
        assert url_tail_text(url) == expected


class TestLinkResolver:
    """Test cases for LinkResolver.resolve."""

    def test_lookup_success_uses_title(self):
        """A successful lookup supplies the link text."""
        lookup = Mock(return_value={"title": "Real Page Title"})
        resolved = resolve(LinkResolver(lookup), PAGE_URL)

        assert resolved.text == "Real Page Title"
        assert resolved.url == PAGE_URL
        lookup.assert_called_once_with("123")

    def test_lookup_failure_falls_back_to_url_tail(self):
        """A throwing lookup is caught and the URL tail is used."""
        lookup = Mock(side_effect=RuntimeError("network down"))
        resolved = resolve(LinkResolver(lookup), PAGE_URL)

        assert resolved.text == "Some Title"

    def test_async_lookup_with_page_info(self):
        lookup = AsyncMock(return_value=PageInfo(title="Async Title", space_id="X"))
        resolved = resolve(LinkResolver(lookup), PAGE_URL)

        assert resolved.text == "Async Title"
        lookup.assert_awaited_once_with("123")

    def test_async_lookup_failure(self):
        lookup = AsyncMock(side_effect=TimeoutError())
        assert resolve(LinkResolver(lookup), PAGE_URL).text == "Some Title"

    def test_lookup_returning_none(self):
        resolved = resolve(LinkResolver(Mock(return_value=None)), PAGE_URL)
        assert resolved.text == "Some Title"

    def test_blank_title_ignored(self):
        resolved = resolve(LinkResolver(Mock(return_value={"title": "  "})), PAGE_URL)
        assert resolved.text == "Some Title"

    def test_foreign_instance_not_looked_up(self):
        lookup = Mock(return_value={"title": "Nope"})
        resolved = resolve(LinkResolver(lookup), PAGE_URL, base_url="https://other-instance")

        assert resolved.text == "Some Title"
        lookup.assert_not_called()

    def test_no_lookup_configured(self):
        assert resolve(LinkResolver(), PAGE_URL).text == "Some Title"

    def test_failed_lookup_without_title_segment(self):
        lookup = Mock(side_effect=RuntimeError("network down"))
        resolved = resolve(LinkResolver(lookup), f"{BASE_URL}/wiki/spaces/X/pages/123")

        assert resolved.text == "Page 123"
        lookup.assert_called_once_with("123")

    def test_jira_link_uses_issue_key(self):
        resolved = resolve(LinkResolver(), "https://x.atlassian.net/browse/PROJ-42")
        assert resolved.text == "PROJ-42"

    def test_other_links_use_tail(self):
        resolved = resolve(LinkResolver(), "https://github.com/org/repo-name")
        assert resolved.text == "repo name"

    def test_empty_url(self):
        assert resolve(LinkResolver(), "").text == ""

    def test_metadata_for_reversal(self):
        resolved = resolve(
            LinkResolver(),
            PAGE_URL,
            attrs={"url": PAGE_URL},
            adf_type="inlineCard",
            original_type="link",
        )
        assert resolved.yaml == {"adfType": "inlineCard", "url": PAGE_URL, "originalType": "link"}

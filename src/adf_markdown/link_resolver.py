"""Display text for links, cards and Confluence page references.

URLs are classified in order: Jira issue links, Confluence pages on the
configured instance (title looked up through an injected page lookup) and
everything else. Resolution never raises: a failed lookup falls back to text
derived from the URL itself.
"""

import asyncio
import inspect
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
from urllib.parse import unquote, urlsplit

logger = logging.getLogger(__name__)

JIRA_ISSUE_PATTERN = re.compile(r"/browse/([A-Z][A-Z0-9_]*-\d+)")
CONFLUENCE_PAGE_PATTERN = re.compile(r"/wiki/spaces/")
PAGE_ID_PATTERNS = (
    re.compile(r"/pages/(?:edit-v2/|viewpage\.action\?pageId=)?(\d+)"),
    re.compile(r"[?&]pageId=(\d+)"),
)

# Page id plus the optional title segment that follows it
CONFLUENCE_TITLE_PATTERNS = (
    re.compile(r"/pages/(?:edit-v2/|viewpage\.action\?pageId=)?(\d+)(?:/([^?#]+))?"),
    re.compile(r"pageId=(\d+)"),
    re.compile(r"/(\d+)(?:/([^?#]+))?"),
)

# get_page_by_id(page_id) -> object or dict with a title, or None; sync or async
PageLookup = Callable[[str], Any]


@dataclass
class ResolvedLink:
    """Result of resolving a link.

    Attributes:
        text: Display text for the markdown link
        url: Link target, unchanged
        yaml: Metadata for reversing the link (adfType, attrs, originalType)
    """

    text: str
    url: str
    yaml: Dict[str, Any] = field(default_factory=dict)


def is_jira_url(url: str) -> bool:
    return bool(JIRA_ISSUE_PATTERN.search(url))


def is_confluence_url(url: str) -> bool:
    return bool(CONFLUENCE_PAGE_PATTERN.search(url))


def is_same_instance(url: str, base_url: Optional[str]) -> bool:
    """Check whether url lives on the same host as base_url."""
    if not base_url:
        return False
    try:
        url_host = urlsplit(url).netloc.lower()
        base_host = urlsplit(base_url).netloc.lower()
    except ValueError:
        return False
    return bool(url_host) and url_host == base_host


def extract_page_id(url: str) -> Optional[str]:
    """Extract a Confluence page id from a page URL, if present."""
    for pattern in PAGE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def _host_text(url: str) -> str:
    host = urlsplit(url).hostname or ""
    return re.sub(r"^www\.", "", host) or url


def _confluence_tail_text(url: str) -> Optional[str]:
    for pattern in CONFLUENCE_TITLE_PATTERNS:
        match = pattern.search(url)
        if match:
            page_id = match.group(1)
            title = match.group(2) if pattern.groups > 1 else None
            if title:
                title = re.sub(r"[-_+]", " ", title).split("/")[-1].strip()
            return title or f"Page {page_id}"
    return None


def url_tail_text(url: str) -> str:
    """Derive readable text from a URL.

    Confluence page URLs yield the title segment after the page id, or
    "Page <id>" when there is none. Other URLs use their last path segment
    with "-", "_", "+" and "." turned into spaces. Tails that are all digits
    or shorter than three characters fall back to the host name without
    "www.", and anything unparseable to the URL itself.

    Args:
        url: Any URL

    Returns:
        Readable text such as "Some Title"
    """
    try:
        decoded = unquote(url)
        if is_confluence_url(decoded):
            text = _confluence_tail_text(decoded)
            if text:
                return text

        segments = [segment for segment in urlsplit(decoded).path.split("/") if segment]
        if not segments:
            return _host_text(decoded)

        text = re.sub(r"[-_+.]+", " ", segments[-1]).strip()
        if text.isdigit() or len(text) < 3:
            return _host_text(decoded)
        return text
    except ValueError:
        return url


def _is_async(func: Any) -> bool:
    return inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(
        getattr(func, "__call__", None)
    )


def _title_of(page: Any) -> Optional[str]:
    if page is None:
        return None
    if isinstance(page, dict):
        title = page.get("title")
    else:
        title = getattr(page, "title", None)
    if isinstance(title, str) and title.strip():
        return title.strip()
    return None


class LinkResolver:
    """Resolves link display text, optionally looking up Confluence titles.

    Args:
        page_lookup: Callable returning page info for a page id. May be sync
            (run in a worker thread) or async. None disables lookups.
    """

    def __init__(self, page_lookup: Optional[PageLookup] = None):
        self.page_lookup = page_lookup

    async def _lookup_title(self, page_id: str) -> Optional[str]:
        if self.page_lookup is None:
            return None
        try:
            if _is_async(self.page_lookup):
                page = await self.page_lookup(page_id)
            else:
                page = await asyncio.to_thread(self.page_lookup, page_id)
                if inspect.isawaitable(page):
                    page = await page
        except Exception as e:
            logger.debug(f"Page lookup failed for {page_id}: {e}")
            return None
        return _title_of(page)

    async def resolve(
        self,
        url: str,
        attrs: Optional[Dict[str, Any]] = None,
        base_url: Optional[str] = None,
        adf_type: str = "link",
        original_type: Optional[str] = None,
    ) -> ResolvedLink:
        """Resolve display text for a URL.

        Args:
            url: Link target
            attrs: Attributes of the link mark or card node
            base_url: URL of the configured Confluence instance
            adf_type: Node or mark type being resolved
            original_type: Type the link was converted from, if different

        Returns:
            ResolvedLink with text, url and reversal metadata
        """
        url = url or ""
        yaml: Dict[str, Any] = {"adfType": adf_type, **(attrs or {})}
        if original_type:
            yaml["originalType"] = original_type

        if not url:
            return ResolvedLink(text="", url=url, yaml=yaml)

        # Jira links keep the raw issue key (PROJ-123) rather than hyphen-split words
        jira_match = JIRA_ISSUE_PATTERN.search(url)
        if jira_match:
            return ResolvedLink(text=jira_match.group(1), url=url, yaml=yaml)

        if is_confluence_url(url) and is_same_instance(url, base_url):
            page_id = extract_page_id(url)
            if page_id:
                title = await self._lookup_title(page_id)
                if title:
                    logger.debug(f"Resolved page {page_id} to '{title}'")
                    return ResolvedLink(text=title, url=url, yaml=yaml)
            else:
                logger.debug(f"No page id in Confluence URL: {url}")

        return ResolvedLink(text=url_tail_text(url), url=url, yaml=yaml)

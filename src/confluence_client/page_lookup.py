"""Page-title lookup adapter for the link resolver.

ConfluencePageLookup turns the synchronous APIWrapper into the
get_page_by_id collaborator the converter expects: an async callable that
returns a PageInfo or None. The blocking HTTP call runs in a worker thread.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .api_wrapper import APIWrapper
from .auth import Authenticator
from .errors import PageNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageInfo:
    """The page metadata the converter uses.

    Attributes:
        title: Page title
        space_id: Space key (or id when no key is returned)
        version: Page version number
        parent_id: Id of the direct parent page, if any
    """

    title: str
    space_id: Optional[str] = None
    version: Optional[int] = None
    parent_id: Optional[str] = None

    @classmethod
    def from_api(cls, page: Dict[str, Any]) -> "PageInfo":
        """Build from a Confluence REST page payload."""
        space = page.get("space") or {}
        version = page.get("version") or {}
        ancestors = page.get("ancestors") or []

        space_id = space.get("key") or space.get("id") or page.get("spaceId")
        version_number = version.get("number") if isinstance(version, dict) else None
        parent_id = page.get("parentId")
        if parent_id is None and ancestors:
            parent_id = ancestors[-1].get("id")

        return cls(
            title=str(page.get("title", "")),
            space_id=str(space_id) if space_id is not None else None,
            version=int(version_number) if version_number is not None else None,
            parent_id=str(parent_id) if parent_id is not None else None,
        )


class ConfluencePageLookup:
    """Async get_page_by_id backed by the Confluence REST API.

    Results are memoized per instance, so a document linking the same page
    many times costs one request.

    Example:
        >>> lookup = ConfluencePageLookup(APIWrapper(Authenticator()))
        >>> converter = AdfToMarkdownConverter(config, page_lookup=lookup)
    """

    def __init__(self, api: Optional[APIWrapper] = None):
        self._api = api or APIWrapper(Authenticator())
        self._cache: Dict[str, Optional[PageInfo]] = {}
        self._page_locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _page_lock(self, page_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._page_locks.setdefault(page_id, threading.Lock())

    def fetch(self, page_id: str) -> Optional[PageInfo]:
        """Fetch page info synchronously.

        Returns:
            PageInfo, or None if the page does not exist

        Raises:
            ValueError: If page_id is not numeric
            ConfluenceError: On authentication, network or API failures
        """
        # Concurrent lookups of one page wait for the first request
        with self._page_lock(page_id):
            if page_id in self._cache:
                return self._cache[page_id]

            try:
                page = self._api.get_page_by_id(page_id)
            except PageNotFoundError:
                logger.debug(f"Linked page {page_id} not found")
                info = None
            else:
                info = PageInfo.from_api(page)

            self._cache[page_id] = info
            return info

    async def __call__(self, page_id: str) -> Optional[PageInfo]:
        return await asyncio.to_thread(self.fetch, page_id)

    get_page_by_id = __call__

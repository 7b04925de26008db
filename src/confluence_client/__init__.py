"""Confluence client used to resolve linked page titles.

This package wraps the Confluence Cloud REST API (via atlassian-python-api)
behind a small page-lookup adapter that the converter's link resolver can
call, plus the credential loading and retry handling it needs.
"""

from .errors import (
    AdfMarkdownError,
    ConfluenceError,
    InvalidCredentialsError,
    PageNotFoundError,
    APIUnreachableError,
    APIAccessError,
)
from .page_lookup import ConfluencePageLookup, PageInfo

__all__ = [
    "AdfMarkdownError",
    "ConfluenceError",
    "InvalidCredentialsError",
    "PageNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
    "ConfluencePageLookup",
    "PageInfo",
]

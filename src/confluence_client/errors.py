"""Typed exception hierarchy for Confluence-related errors.

This module defines the exceptions raised by the Confluence client used for
page-title lookups. All exceptions inherit from ConfluenceError, which itself
inherits from the project-wide AdfMarkdownError base class.
"""

from src.adf_markdown.errors import AdfMarkdownError


class ConfluenceError(AdfMarkdownError):
    """Base exception for all Confluence-related errors."""
    pass


class InvalidCredentialsError(ConfluenceError):
    """Raised when API credentials are invalid or authentication fails."""

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"API key is invalid (user: {user}, endpoint: {endpoint})"
        )
        self.user = user
        self.endpoint = endpoint


class PageNotFoundError(ConfluenceError):
    """Raised when a requested page does not exist."""

    def __init__(self, page_id: str):
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class APIUnreachableError(ConfluenceError):
    """Raised when the Confluence API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(ConfluenceError):
    """Raised when API access fails after retries or due to access restrictions."""

    def __init__(self, message: str = "Confluence API failure (after 3 retries)"):
        super().__init__(message)

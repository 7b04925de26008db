"""Retry with exponential backoff for Confluence API rate limits.

Only 429 responses are retried; every other error fails fast. The wait
doubles on each attempt (1s, 2s, 4s by default) unless the response carries
a Retry-After header, which is honoured up to a cap.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional, TypeVar

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

_RATE_LIMIT_PHRASES = (
    '429',
    'too many requests',
    'rate limit exceeded',
    'rate limit hit',
    'rate limited',
)


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how long to wait when rate limited.

    Attributes:
        max_retries: Retries after the first attempt
        base_delay: Wait before the first retry, doubled on each retry
        max_delay: Upper bound for any single wait (also caps Retry-After)
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0

    def delay_for(self, retry_num: int, exception: Optional[Exception] = None) -> float:
        """Seconds to wait before retry number `retry_num` (0-based)."""
        retry_after = _retry_after_seconds(exception) if exception is not None else None
        if retry_after is not None:
            return min(retry_after, self.max_delay)
        return min(self.base_delay * (2 ** retry_num), self.max_delay)

    def call(self, func: Callable[..., T], *args, sleep: Optional[Callable[[float], None]] = None, **kwargs) -> T:
        """Call func, retrying on rate limit errors.

        Raises:
            APIAccessError: If the rate limit persists after all retries
            Other exceptions: Passed through immediately without retry
        """
        for retry_num in range(self.max_retries + 1):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if not is_rate_limit_error(e):
                    raise

                if retry_num >= self.max_retries:
                    logger.error(f"Rate limit persisted after {self.max_retries} retries, giving up")
                    raise APIAccessError(
                        f"Confluence API failure (after {self.max_retries} retries)"
                    ) from e

                wait_time = self.delay_for(retry_num, e)
                logger.info(
                    f"Rate limit hit, retrying in {wait_time:g}s "
                    f"(retry {retry_num + 1}/{self.max_retries})"
                )
                (sleep or time.sleep)(wait_time)

        raise APIAccessError(f"Confluence API failure (after {self.max_retries} retries)")


DEFAULT_RETRY_POLICY = RetryPolicy()


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Call func with the default retry policy.

    Example:
        >>> page = retry_on_rate_limit(client.get_page_by_id, page_id="123")
    """
    return DEFAULT_RETRY_POLICY.call(func, *args, **kwargs)


def as_decorator(policy: RetryPolicy = DEFAULT_RETRY_POLICY) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator form of RetryPolicy.call.

    Example:
        >>> @as_decorator(RetryPolicy(max_retries=5))
        ... def fetch_page(page_id: str):
        ...     return api.get_page_by_id(page_id)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            return policy.call(func, *args, **kwargs)
        return wrapper
    return decorator


def _status_code(exception: Exception) -> Optional[int]:
    status_code = getattr(exception, 'status_code', None)
    if status_code is None:
        status_code = getattr(getattr(exception, 'response', None), 'status_code', None)
    return status_code if isinstance(status_code, int) else None


def _retry_after_seconds(exception: Exception) -> Optional[float]:
    headers = getattr(getattr(exception, 'response', None), 'headers', None)
    if not headers:
        return None
    try:
        value = headers.get('Retry-After')
    except AttributeError:
        return None
    try:
        return max(0.0, float(value)) if value is not None else None
    except (TypeError, ValueError):
        return None


def is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a rate limit (429) error.

    Looks at the message, then at status_code or response.status_code as
    set by requests and atlassian-python-api.
    """
    error_msg = str(exception).lower()
    if any(phrase in error_msg for phrase in _RATE_LIMIT_PHRASES):
        return True
    return _status_code(exception) == 429

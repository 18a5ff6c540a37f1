"""Retry logic with exponential backoff for publishing API rate limits.

Only HTTP 429 responses are retried here, with a 1s, 2s, 4s backoff. This is
transport behaviour: revision conflicts and every other failure are raised
immediately so the caller decides what to do with them.
"""

import logging
import re
import time
from typing import Callable, TypeVar

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3

# A standalone 429 status in a message; digits inside hosts, paths or IDs do not count
RATE_LIMIT_STATUS_PATTERN = re.compile(r'(?<![\w/.:-])429(?![\w/.:-])')

RATE_LIMIT_PATTERNS = (
    'too many requests',
    'rate limit exceeded',
    'rate limited',
)


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Call ``func`` and retry it while the server answers with a rate limit.

    Args:
        func: The function to execute
        *args: Positional arguments for ``func``
        **kwargs: Keyword arguments for ``func``

    Returns:
        The return value of ``func``

    Raises:
        APIAccessError: If the rate limit persists after MAX_RETRIES retries
        Other exceptions: Re-raised immediately without retry

    Example:
        >>> page = retry_on_rate_limit(client.get_page_by_id, page_id="123")
    """
    for attempt in range(MAX_RETRIES + 1):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not is_rate_limit_error(e):
                raise

            if attempt >= MAX_RETRIES:
                logger.error(f"Rate limit persisted after {MAX_RETRIES} retries, giving up")
                raise APIAccessError(
                    f"Publishing API failure (after {MAX_RETRIES} retries)",
                    status_code=429,
                ) from e

            wait_time = 2 ** attempt
            logger.info(
                f"Rate limit hit, retrying in {wait_time}s "
                f"(retry {attempt + 1}/{MAX_RETRIES})"
            )
            time.sleep(wait_time)

    raise APIAccessError(
        f"Publishing API failure (after {MAX_RETRIES} retries)",
        status_code=429,
    )


def _status_code_of(exception: Exception):
    """Return the HTTP status code attached to an exception, if any."""
    status_code = getattr(exception, 'status_code', None)
    if status_code is not None:
        return status_code
    response = getattr(exception, 'response', None)
    return getattr(response, 'status_code', None)


def is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a rate limit (429) response.

    Looks at the status code first (attribute or ``response.status_code``, the
    requests pattern), then at well-known rate limit phrases in the message.
    """
    status_code = _status_code_of(exception)
    if status_code is not None:
        return status_code == 429

    error_msg = str(exception).lower()
    if RATE_LIMIT_STATUS_PATTERN.search(error_msg):
        return True
    return any(pattern in error_msg for pattern in RATE_LIMIT_PATTERNS)

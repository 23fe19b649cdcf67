"""wpsync HTTP utilities.

Provides the WordPress REST API client used by the reconciler.

Example:
    >>> from wpsync.http import WordPressClient
    >>>
    >>> async with WordPressClient("https://example.com/") as client:
    ...     page = await client.fetch("pages/about")
"""

from wpsync.http.client import WordPressClient

__all__ = [
    "WordPressClient",
]

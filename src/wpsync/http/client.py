"""WordPress REST API client.

Thin async wrapper over httpx that turns a route into parsed JSON:

- Builds ``{wordpress_url}{api_path}{route}``
- Sends the page number as a query parameter for paginated fetches
- Maps network failures to ``TransportError`` and unacceptable statuses
  to ``ApiResponseError``

Example:
    >>> from wpsync.http import WordPressClient
    >>>
    >>> async with WordPressClient("https://example.com/") as client:
    ...     posts = await client.fetch("posts", page=0)
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from wpsync.core.exceptions import ApiResponseError, TransportError

logger = logging.getLogger(__name__)


class WordPressClient:
    """Async client for the WordPress REST API.

    A response is accepted when its status is 2xx, or 5xx while
    ``accept_server_error_bodies`` is enabled (some installs embed error
    details in 5xx bodies). Anything else raises ``ApiResponseError``.
    The client never retries; retrying is left to whoever scheduled the
    operation.

    Example:
        >>> client = WordPressClient("https://example.com")
        >>> client.url_for("posts/12")
        'https://example.com/wp-json/wp/v2/posts/12'

    Attributes:
        base_url: Site URL, always ending in a slash
        api_path: REST route prefix
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_path: str = "wp-json/wp/v2/",
        timeout: float = 30.0,
        accept_server_error_bodies: bool = True,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: WordPress site URL
            api_path: REST route prefix appended to the site URL
            timeout: Request timeout
            accept_server_error_bodies: Parse 5xx bodies instead of failing
            headers: Additional default headers
            client: Existing httpx client to use (not closed by this client)
        """
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.api_path = api_path
        self.timeout = timeout
        self.accept_server_error_bodies = accept_server_error_bodies
        self._extra_headers = headers or {}
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> WordPressClient:
        """Create a client from ``Settings``."""
        return cls(
            settings.wordpress_url,
            api_path=settings.api_path,
            timeout=settings.request_timeout,
            accept_server_error_bodies=settings.accept_server_error_bodies,
            **kwargs,
        )

    @property
    def headers(self) -> dict[str, str]:
        """Default headers for requests."""
        return {
            "Accept": "application/json",
            "User-Agent": "wpsync/1.0",
            **self._extra_headers,
        }

    def url_for(self, route: str) -> str:
        return f"{self.base_url}{self.api_path}{route.lstrip('/')}"

    def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the httpx client if this instance created it."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        if self._owns_client:
            self._client = None

    async def __aenter__(self) -> WordPressClient:
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _is_accepted(self, status_code: int) -> bool:
        if 200 <= status_code <= 299:
            return True
        return self.accept_server_error_bodies and 500 <= status_code <= 599

    async def fetch(self, route: str, page: int | None = None) -> Any:
        """Fetch a route and return its parsed JSON.

        Args:
            route: Route below the API prefix, e.g. ``posts/12``
            page: Page number for paginated collections

        Returns:
            Parsed JSON (usually a list or dict)

        Raises:
            TransportError: The request did not complete
            ApiResponseError: Status outside the accepted range or a
                non-JSON body
        """
        url = self.url_for(route)
        params = {"page": page} if page is not None else None
        logger.info("Fetching route %s", route)
        logger.debug("Current API call: %s params=%s", url, params)

        client = self._ensure_client()
        try:
            response = await client.get(url, params=params)
        except httpx.RequestError as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        if not self._is_accepted(response.status_code):
            raise ApiResponseError(url, response.status_code, response.text)
        if response.status_code >= 500:
            logger.warning("WP-API %s responded %s, parsing body as payload", url, response.status_code)

        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise ApiResponseError(url, response.status_code, response.text) from e


__all__ = [
    "WordPressClient",
]

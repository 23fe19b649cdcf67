"""API client protocol.

Example:
    >>> from wpsync.protocols.api import ApiClient
    >>> hasattr(ApiClient, "fetch")
    True
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ApiClient(Protocol):
    """Source of WordPress JSON.

    See Also:
        wpsync.http.client.WordPressClient: httpx implementation
    """

    async def fetch(self, route: str, page: int | None = None) -> Any:
        """Return parsed JSON for a route.

        Raises:
            TransportError: Network failure.
            ApiResponseError: Status outside the accepted range.
        """
        ...

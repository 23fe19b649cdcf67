"""WpSync - Main orchestrator for WordPress synchronization.

The WpSync class ties an API client, a record store and a content type
registry together and hands out one Reconciler per content type.

Example:
    >>> from wpsync import WpSync, MemoryRecordStore, WordPressClient
    >>> from wpsync.content_types import ContentType, ContentTypeRegistry
    >>> registry = ContentTypeRegistry([ContentType("posts", paginated=True)])
    >>> spine = WpSync(WordPressClient("https://example.com"), MemoryRecordStore(), registry)
    >>> spine.reconciler("posts").name
    'posts'
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wpsync.content_types import OPTIONS_NAME, options_type
from wpsync.core.config import Settings
from wpsync.reconciler import Reconciler

if TYPE_CHECKING:
    from wpsync.content_types import ContentTypeRegistry
    from wpsync.models.result import SyncResult
    from wpsync.protocols.api import ApiClient
    from wpsync.protocols.store import RecordStore

logger = logging.getLogger(__name__)


class WpSync:
    """Main orchestrator for WordPress synchronization.

    Args:
        client: API client.
        store: Record store.
        registry: Content types to synchronize.
        settings: Settings (page cap); defaults are used when omitted.

    Example:
        >>> import asyncio
        >>> from wpsync.core.wpsync import WpSync
        >>> from wpsync.content_types import ContentTypeRegistry
        >>> from wpsync.store.memory import MemoryRecordStore
        >>> async def example():
        ...     async with WpSync(None, MemoryRecordStore(), ContentTypeRegistry()) as spine:
        ...         return spine.list_types()
        >>> asyncio.run(example())
        []
    """

    def __init__(
        self,
        client: ApiClient,
        store: RecordStore,
        registry: ContentTypeRegistry,
        settings: Settings | None = None,
    ) -> None:
        self._client = client
        self._store = store
        self._registry = registry
        self._settings = settings or Settings()
        self._initialized = False

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def registry(self) -> ContentTypeRegistry:
        return self._registry

    async def initialize(self) -> None:
        """Initialize the store."""
        if not self._initialized:
            await self._store.initialize()
            self._initialized = True

    async def close(self) -> None:
        """Close the store and the client (when it can be closed)."""
        if self._initialized:
            await self._store.close()
            self._initialized = False
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> WpSync:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def list_types(self) -> list[str]:
        return self._registry.names

    def reconciler(self, name: str) -> Reconciler:
        """Reconciler for a registered content type, or for ``options``.

        Raises:
            ConfigurationError: Unknown content type.
        """
        if name == OPTIONS_NAME and name not in self._registry:
            content_type = options_type()
        else:
            content_type = self._registry.get(name)
        return Reconciler(
            content_type,
            self._client,
            self._store,
            max_page=self._settings.effective_max_page,
        )

    async def sync_all_types(self) -> dict[str, SyncResult]:
        """Run a reconciliation pass for every registered content type, in order."""
        results: dict[str, SyncResult] = {}
        for content_type in self._registry:
            logger.info("Refreshing %s", content_type.name)
            results[content_type.name] = await self.reconciler(content_type.name).sync_all()
        return results

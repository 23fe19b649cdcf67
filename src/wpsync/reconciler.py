"""Reconciler - fetch WordPress content and bring the local store in line.

One Reconciler drives the operations for one content type:

1. ``sync_one``: fetch a single item (optionally its preview) and upsert it
2. ``sync_all``: fetch the whole collection, upsert every item, then delete
   local records whose ids were not seen (a reconciliation pass)
3. ``sync_options``: fetch the singleton options resource
4. ``purge`` / ``unpublish``: act on one local record

Every fetch and every store write of a pass is awaited in order; a pass
never overlaps its own requests.

Example:
    >>> from wpsync.reconciler import Reconciler, is_error_payload
    >>> hasattr(Reconciler, "sync_all_paginated")
    True
    >>> is_error_payload([{"code": "json_no_route", "message": "No route"}])
    True
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from wpsync.content_types import OPTIONS_KEY
from wpsync.core.config import DEFAULT_MAX_PAGE
from wpsync.core.exceptions import RecordNotFoundLocally
from wpsync.models.record import DRAFT_STATUS, LocalRecord, coerce_source_id
from wpsync.models.result import ItemResult, SyncOutcome, SyncResult

if TYPE_CHECKING:
    from wpsync.content_types import ContentType
    from wpsync.protocols.api import ApiClient
    from wpsync.protocols.store import RecordStore

logger = logging.getLogger(__name__)

# Payload-embedded codes meaning "no such route / item": treated as not found
API_ERROR_CODES: frozenset[str] = frozenset(
    {"json_no_route", "json_post_invalid_type", "json_user_cannot_read"}
)


def is_error_payload(payload: Any) -> bool:
    """Check for a single-element list carrying a recognized error code.

    Example:
        >>> from wpsync.reconciler import is_error_payload
        >>> is_error_payload([{"code": "json_user_cannot_read"}])
        True
        >>> is_error_payload([{"code": "something_else"}])
        False
        >>> is_error_payload({"ID": 1})
        False
    """
    if not isinstance(payload, list) or len(payload) != 1:
        return False
    first = payload[0]
    return isinstance(first, Mapping) and first.get("code") in API_ERROR_CODES


class Reconciler:
    """Synchronizes one content type between the API and a record store.

    Args:
        content_type: The content type to synchronize.
        client: API client used for every fetch.
        store: Local record store.
        max_page: Default page cap for paginated passes.

    Example:
        >>> import asyncio
        >>> from wpsync.content_types import ContentType
        >>> from wpsync.reconciler import Reconciler
        >>> from wpsync.store.memory import MemoryRecordStore
        >>> class StaticClient:
        ...     async def fetch(self, route, page=None):
        ...         return {"ID": 7, "slug": "hello", "title": "Hello"}
        >>> store = MemoryRecordStore()
        >>> reconciler = Reconciler(ContentType("posts"), StaticClient(), store)
        >>> result = asyncio.run(reconciler.sync_one(7))
        >>> result.outcome.value, result.record.fields["slug"]
        ('synced', 'hello')
    """

    def __init__(
        self,
        content_type: ContentType,
        client: ApiClient,
        store: RecordStore,
        *,
        max_page: int = DEFAULT_MAX_PAGE,
    ) -> None:
        self._content_type = content_type
        self._client = client
        self._store = store
        self._max_page = max_page or DEFAULT_MAX_PAGE

    @property
    def content_type(self) -> ContentType:
        return self._content_type

    @property
    def name(self) -> str:
        return self._content_type.name

    @property
    def max_page(self) -> int:
        return self._max_page

    # --- Single item ---

    async def _upsert(self, source_id: int | str, json: Mapping[str, Any]) -> LocalRecord:
        record = await self._store.find_or_create(self.name, source_id)
        self._content_type.mapper.apply(record, json)
        await self._store.save(record)
        return record

    async def sync_one(self, source_id: int | str, preview: bool = False) -> ItemResult:
        """Fetch one item and create or update its local record.

        A payload carrying a recognized error code leaves the store
        untouched and yields ``NOT_FOUND``. Transport and response errors
        propagate.
        """
        key = coerce_source_id(source_id)
        if key is None:
            logger.warning("Ignoring %s sync for unusable id %r", self.name, source_id)
            return ItemResult(self.name, None, SyncOutcome.SKIPPED)

        payload = await self._client.fetch(self._content_type.item_path(key, preview))
        if is_error_payload(payload):
            logger.info("%s %s not found upstream (%s)", self.name, key, payload[0]["code"])
            return ItemResult(self.name, key, SyncOutcome.NOT_FOUND)
        if not isinstance(payload, Mapping):
            logger.warning("Ignoring %s %s payload of type %s", self.name, key, type(payload).__name__)
            return ItemResult(self.name, key, SyncOutcome.SKIPPED)

        record = await self._upsert(key, payload)
        logger.debug("Synced %s %s", self.name, key)
        return ItemResult(self.name, key, SyncOutcome.SYNCED, record)

    async def sync_options(self) -> ItemResult:
        """Fetch this type's route as a singleton onto the well-known options record.

        Used with the ``options`` content type, whose route has no id.
        """
        payload = await self._client.fetch(self._content_type.path)
        if is_error_payload(payload):
            logger.info("%s not found upstream (%s)", self.name, payload[0]["code"])
            return ItemResult(self.name, OPTIONS_KEY, SyncOutcome.NOT_FOUND)
        if not isinstance(payload, Mapping):
            logger.warning("Ignoring %s payload of type %s", self.name, type(payload).__name__)
            return ItemResult(self.name, OPTIONS_KEY, SyncOutcome.SKIPPED)

        record = await self._upsert(OPTIONS_KEY, payload)
        return ItemResult(self.name, OPTIONS_KEY, SyncOutcome.SYNCED, record)

    # --- Full collection ---

    async def sync_all(self) -> SyncResult:
        """Run a reconciliation pass, paginated or flat per the content type."""
        if self._content_type.paginated:
            return await self.sync_all_paginated()
        return await self.sync_all_flat()

    def _accept_page(self, items: Any, page: int | None, result: SyncResult) -> bool:
        """Decide whether a fetched page holds items to upsert.

        An empty page or a recognized error payload ends the collection.
        Anything that is not a list aborts the pass so no record is deleted
        on the strength of a failed fetch.
        """
        where = self.name if page is None else f"{self.name} page {page}"
        if not items:
            return False
        if is_error_payload(items):
            logger.info("%s ended with %s", where, items[0]["code"])
            return False
        if not isinstance(items, list):
            result.aborted = True
            logger.error("%s returned %s instead of a list, aborting the pass", where, type(items).__name__)
            return False
        return True

    async def _upsert_items(self, items: list[Any], result: SyncResult) -> None:
        id_field = self._content_type.id_field
        for item in items:
            raw = item.get(id_field) if isinstance(item, Mapping) else None
            source_id = coerce_source_id(raw)
            if source_id is None:
                logger.warning("Skipping %s item with unusable '%s': %r", self.name, id_field, raw)
                result.skipped += 1
                continue
            await self._upsert(source_id, item)
            result.seen_ids.add(source_id)
            result.upserted += 1

    async def sync_all_paginated(self, max_page: int | None = None) -> SyncResult:
        """Fetch pages 0, 1, 2... until an empty page or the page cap.

        Reaching the cap before an empty page is logged and flagged as
        ``truncated``; reconciliation still runs on the ids seen.
        """
        cap = max_page or self._max_page
        result = SyncResult(content_type=self.name)
        page = 0
        while page < cap:
            logger.info("%s page %d", self.name, page)
            items = await self._client.fetch(self._content_type.path, page)
            result.pages_fetched += 1
            if not self._accept_page(items, page, result):
                break
            await self._upsert_items(items, result)
            page += 1
        else:
            result.truncated = True
            logger.warning(
                "%s stopped at the page cap (%d); items beyond it are treated as deleted",
                self.name,
                cap,
            )

        await self._reconcile(result)
        return result

    async def sync_all_flat(self) -> SyncResult:
        """Fetch the collection in a single request."""
        result = SyncResult(content_type=self.name)
        items = await self._client.fetch(self._content_type.path)
        result.pages_fetched = 1
        if self._accept_page(items, None, result):
            await self._upsert_items(items, result)
        await self._reconcile(result)
        return result

    async def _reconcile(self, result: SyncResult) -> None:
        """Delete records not seen in this pass, unless nothing was seen."""
        if result.aborted:
            result.deletion_skipped = True
            logger.warning("%s pass was aborted, skipping deletion", self.name)
        elif not result.seen_ids:
            result.deletion_skipped = True
            logger.warning("%s pass saw no items, skipping deletion", self.name)
        else:
            result.deleted = await self._store.delete_where_not_in(self.name, result.seen_ids)
            if result.deleted:
                logger.info("Deleted %d stale %s records", result.deleted, self.name)
        result.completed_at = datetime.now(UTC)

    # --- Local lifecycle ---

    async def _require_local(self, source_id: int | str) -> LocalRecord:
        key = coerce_source_id(source_id)
        record = await self._store.get(self.name, key) if key is not None else None
        if record is None:
            raise RecordNotFoundLocally(self.name, key if key is not None else repr(source_id))
        return record

    async def purge(self, source_id: int | str) -> ItemResult:
        """Delete the local record for ``source_id`` if present."""
        try:
            record = await self._require_local(source_id)
        except RecordNotFoundLocally as e:
            logger.warning("Could not purge %s with id %s, no record with that id was found.", self.name, e.source_id)
            return ItemResult(self.name, coerce_source_id(source_id), SyncOutcome.NOT_FOUND)
        await self._store.delete_one(self.name, record.source_id)
        return ItemResult(self.name, record.source_id, SyncOutcome.SYNCED, record)

    async def unpublish(self, source_id: int | str) -> ItemResult:
        """Set the local record's status to draft if present."""
        try:
            record = await self._require_local(source_id)
        except RecordNotFoundLocally as e:
            logger.warning(
                "Could not unpublish %s with id %s, no record with that id was found.", self.name, e.source_id
            )
            return ItemResult(self.name, coerce_source_id(source_id), SyncOutcome.NOT_FOUND)
        record.status = DRAFT_STATUS
        await self._store.save(record)
        return ItemResult(self.name, record.source_id, SyncOutcome.SYNCED, record)

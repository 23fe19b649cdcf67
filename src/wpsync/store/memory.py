"""In-memory record store for testing.

Provides a complete in-memory implementation of RecordStore, useful for
testing, development, and dry runs.

Example:
    >>> from wpsync.store.memory import MemoryRecordStore
    >>> store = MemoryRecordStore()
    >>> hasattr(store, 'find_or_create')
    True

Note:
    All methods are async. Use within async context or with asyncio.run().
"""

from __future__ import annotations

from collections.abc import Collection

from wpsync.models.record import LocalRecord, normalize_source_id


class MemoryRecordStore:
    """In-memory store keyed by ``(content_type, source_id)``.

    Records handed out are copies, so mapping onto a record has no effect
    until ``save`` is called. Data is lost when the process exits.

    Example:
        >>> import asyncio
        >>> from wpsync.store.memory import MemoryRecordStore
        >>> s = MemoryRecordStore()
        >>> record = asyncio.run(s.find_or_create("posts", 1))
        >>> record.is_new
        True
        >>> asyncio.run(s.count())
        0
    """

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], LocalRecord] = {}
        self._initialized = False

    async def initialize(self) -> None:
        """No-op for memory storage."""
        self._initialized = True

    async def close(self) -> None:
        """Clear all data."""
        self._records.clear()
        self._initialized = False

    @staticmethod
    def _copy(record: LocalRecord) -> LocalRecord:
        copy = record.model_copy(deep=True)
        copy.mark_persisted()
        return copy

    # --- Record Operations ---

    async def find_or_create(self, content_type: str, source_id: int | str) -> LocalRecord:
        """Return a copy of the stored record, or a new unsaved record."""
        existing = await self.get(content_type, source_id)
        if existing is not None:
            return existing
        return LocalRecord(content_type=content_type, source_id=source_id)

    async def save(self, record: LocalRecord) -> None:
        """Insert or replace the record under its key."""
        record.touch()
        existing = self._records.get(record.key)
        if existing is not None:
            record.created_at = existing.created_at
        self._records[record.key] = self._copy(record)
        record.mark_persisted()

    async def get(self, content_type: str, source_id: int | str) -> LocalRecord | None:
        """Get a copy of a record by key."""
        record = self._records.get((content_type, normalize_source_id(source_id)))
        return self._copy(record) if record is not None else None

    async def delete_one(self, content_type: str, source_id: int | str) -> bool:
        """Delete a record. Returns True if existed."""
        return self._records.pop((content_type, normalize_source_id(source_id)), None) is not None

    async def delete_where_not_in(self, content_type: str, source_ids: Collection[str]) -> int:
        """Delete records of ``content_type`` whose id is not in ``source_ids``."""
        keep = {normalize_source_id(sid) for sid in source_ids}
        stale = [
            key for key in self._records if key[0] == content_type and key[1] not in keep
        ]
        for key in stale:
            del self._records[key]
        return len(stale)

    # --- Query Operations ---

    async def list_records(self, content_type: str) -> list[LocalRecord]:
        """All records of a content type, ordered by source id."""
        records = [self._copy(r) for key, r in self._records.items() if key[0] == content_type]
        records.sort(key=lambda r: r.source_id)
        return records

    async def count(self, content_type: str | None = None) -> int:
        """Count records, optionally of one content type."""
        if content_type is None:
            return len(self._records)
        return sum(1 for key in self._records if key[0] == content_type)

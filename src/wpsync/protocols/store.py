"""Record store protocol.

Defines the interface for local persistence of synchronized records.

Example:
    >>> from wpsync.protocols.store import RecordStore
    >>> hasattr(RecordStore, "find_or_create")
    True
    >>> hasattr(RecordStore, "delete_where_not_in")
    True
"""

from __future__ import annotations

from collections.abc import Collection
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from wpsync.models.record import LocalRecord


@runtime_checkable
class RecordStore(Protocol):
    """Record store protocol.

    Records are unique by ``(content_type, source_id)``. Implementations
    must keep that true when two passes upsert the same id concurrently.

    See Also:
        wpsync.store.memory.MemoryRecordStore: In-memory implementation
        wpsync.store.sqlalchemy_store.SQLAlchemyRecordStore: SQL implementation
    """

    # --- Record Operations ---

    async def find_or_create(self, content_type: str, source_id: int | str) -> LocalRecord:
        """Return the stored record, or a new unsaved one."""
        ...

    async def save(self, record: LocalRecord) -> None:
        """Insert or update a record by its key."""
        ...

    async def get(self, content_type: str, source_id: int | str) -> LocalRecord | None:
        """Get a record by key."""
        ...

    async def delete_one(self, content_type: str, source_id: int | str) -> bool:
        """Delete a record. Returns True if it existed."""
        ...

    async def delete_where_not_in(self, content_type: str, source_ids: Collection[str]) -> int:
        """Delete every record of a type whose id is not in ``source_ids``.

        Returns:
            Number of records deleted.
        """
        ...

    # --- Query Operations ---

    async def list_records(self, content_type: str) -> list[LocalRecord]:
        """All records of a content type."""
        ...

    async def count(self, content_type: str | None = None) -> int:
        """Count records, optionally of one content type."""
        ...

    # --- Lifecycle ---

    async def initialize(self) -> None:
        """Initialize storage (create tables, etc.)."""
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...

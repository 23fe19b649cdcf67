"""Record store implementations.

Quick Start:
    from wpsync.store import create_store

    store = create_store("sqlite:///wpsync.db")   # SQLAlchemy
    store = create_store("memory://")             # In-memory

    await store.initialize()  # Auto-creates schema
"""

from wpsync.store.memory import MemoryRecordStore
from wpsync.store.sqlalchemy_store import SQLAlchemyRecordStore


def create_store(url: str) -> MemoryRecordStore | SQLAlchemyRecordStore:
    """Create a record store from a connection URL.

    Example:
        >>> from wpsync.store import create_store
        >>> type(create_store("memory://")).__name__
        'MemoryRecordStore'
    """
    if url.startswith("memory://"):
        return MemoryRecordStore()
    return SQLAlchemyRecordStore(url)


__all__ = [
    "MemoryRecordStore",
    "SQLAlchemyRecordStore",
    "create_store",
]

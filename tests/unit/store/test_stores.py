"""Tests for record stores.

Every behavior is checked against both the in-memory store and the
SQLAlchemy store on SQLite, so the two stay interchangeable.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from wpsync.models.record import LocalRecord
from wpsync.protocols.store import RecordStore
from wpsync.store import MemoryRecordStore, SQLAlchemyRecordStore, create_store


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(params=["memory", "sqlite"])
async def store(request: pytest.FixtureRequest, tmp_path: Path) -> AsyncIterator[RecordStore]:
    """Initialized store of each backend."""
    if request.param == "memory":
        backend: RecordStore = MemoryRecordStore()
    else:
        backend = SQLAlchemyRecordStore(f"sqlite:///{tmp_path / 'records.db'}")
    await backend.initialize()
    yield backend
    await backend.close()


async def seed(store: RecordStore, content_type: str, *ids: int | str) -> None:
    for source_id in ids:
        record = await store.find_or_create(content_type, source_id)
        record.fields["slug"] = f"slug-{source_id}"
        await store.save(record)


# =============================================================================
# Record Operations
# =============================================================================


class TestFindOrCreate:
    async def test_new_record_is_not_persisted(self, store: RecordStore) -> None:
        record = await store.find_or_create("posts", 1)

        assert record.is_new
        assert record.key == ("posts", "1")
        assert await store.count() == 0

    async def test_returns_existing(self, store: RecordStore) -> None:
        await seed(store, "posts", 1)

        record = await store.find_or_create("posts", "1")

        assert not record.is_new
        assert record.fields == {"slug": "slug-1"}

    async def test_int_and_str_ids_share_a_key(self, store: RecordStore) -> None:
        await seed(store, "posts", 5)
        await seed(store, "posts", "5")

        assert await store.count("posts") == 1


class TestSave:
    async def test_save_marks_persisted(self, store: RecordStore) -> None:
        record = await store.find_or_create("pages", 3)
        await store.save(record)

        assert not record.is_new
        assert await store.get("pages", 3) is not None

    async def test_save_updates_fields(self, store: RecordStore) -> None:
        await seed(store, "posts", 1)

        record = await store.find_or_create("posts", 1)
        record.fields["slug"] = "renamed"
        record.status = "draft"
        await store.save(record)

        stored = await store.get("posts", 1)
        assert stored is not None
        assert stored.fields == {"slug": "renamed", "status": "draft"}
        assert await store.count() == 1

    async def test_unsaved_changes_are_not_visible(self, store: RecordStore) -> None:
        await seed(store, "posts", 1)

        record = await store.find_or_create("posts", 1)
        record.fields["slug"] = "changed"

        stored = await store.get("posts", 1)
        assert stored is not None
        assert stored.fields["slug"] == "slug-1"

    async def test_nested_fields_round_trip(self, store: RecordStore) -> None:
        record = LocalRecord(
            content_type="media",
            source_id=7,
            fields={"media_details": {"sizes": {"thumb": {"width": 150}}}, "tags": [1, 2]},
        )
        await store.save(record)

        stored = await store.get("media", 7)
        assert stored is not None
        assert stored.fields == record.fields

    async def test_same_id_different_types(self, store: RecordStore) -> None:
        await seed(store, "posts", 1)
        await seed(store, "pages", 1)

        assert await store.count() == 2
        assert await store.count("posts") == 1


class TestDelete:
    async def test_delete_one(self, store: RecordStore) -> None:
        await seed(store, "posts", 1, 2)

        assert await store.delete_one("posts", 1) is True
        assert await store.delete_one("posts", 1) is False
        assert await store.get("posts", 1) is None
        assert await store.count("posts") == 1

    async def test_delete_where_not_in(self, store: RecordStore) -> None:
        await seed(store, "posts", 1, 2, 3, 4)
        await seed(store, "pages", 1, 9)

        deleted = await store.delete_where_not_in("posts", {"2", "4"})

        assert deleted == 2
        assert [r.source_id for r in await store.list_records("posts")] == ["2", "4"]
        # Other types are untouched
        assert await store.count("pages") == 2

    async def test_delete_where_not_in_nothing_stale(self, store: RecordStore) -> None:
        await seed(store, "posts", 1, 2)

        assert await store.delete_where_not_in("posts", {"1", "2", "3"}) == 0
        assert await store.count("posts") == 2

    async def test_delete_where_not_in_empty_keep_set(self, store: RecordStore) -> None:
        """The store itself does not guard against an empty keep set."""
        await seed(store, "posts", 1, 2)

        assert await store.delete_where_not_in("posts", set()) == 2
        assert await store.count("posts") == 0


class TestQueries:
    async def test_list_records_only_returns_type(self, store: RecordStore) -> None:
        await seed(store, "posts", "b", "a")
        await seed(store, "pages", "c")

        records = await store.list_records("posts")

        assert [r.source_id for r in records] == ["a", "b"]
        assert all(not r.is_new for r in records)

    async def test_list_records_empty(self, store: RecordStore) -> None:
        assert await store.list_records("posts") == []

    async def test_count(self, store: RecordStore) -> None:
        await seed(store, "posts", 1, 2)
        await seed(store, "media", 1)

        assert await store.count() == 3
        assert await store.count("posts") == 2
        assert await store.count("nothing") == 0


# =============================================================================
# Backend specifics
# =============================================================================


class TestSQLAlchemyRecordStore:
    async def test_in_memory_database_is_shared(self) -> None:
        store = SQLAlchemyRecordStore("sqlite:///:memory:")
        await store.initialize()
        await seed(store, "posts", 1)

        assert await store.count() == 1
        await store.close()

    async def test_initialize_is_idempotent(self, tmp_path: Path) -> None:
        store = SQLAlchemyRecordStore(f"sqlite:///{tmp_path / 'x.db'}")
        await store.initialize()
        await store.initialize()
        await store.close()

    async def test_data_survives_reopen(self, tmp_path: Path) -> None:
        url = f"sqlite:///{tmp_path / 'persist.db'}"
        store = SQLAlchemyRecordStore(url)
        await store.initialize()
        await seed(store, "posts", 1)
        await store.close()

        reopened = SQLAlchemyRecordStore(url)
        await reopened.initialize()
        record = await reopened.get("posts", 1)
        await reopened.close()

        assert record is not None
        assert record.fields == {"slug": "slug-1"}

    async def test_deletes_in_batches(self, tmp_path: Path) -> None:
        store = SQLAlchemyRecordStore(f"sqlite:///{tmp_path / 'batch.db'}", batch_size=3)
        await store.initialize()
        await seed(store, "posts", *range(10))

        deleted = await store.delete_where_not_in("posts", {"0"})

        assert deleted == 9
        assert await store.count("posts") == 1
        await store.close()

    async def test_save_keeps_created_at(self, tmp_path: Path) -> None:
        store = SQLAlchemyRecordStore(f"sqlite:///{tmp_path / 'ts.db'}")
        await store.initialize()
        await seed(store, "posts", 1)
        first = await store.get("posts", 1)

        record = await store.find_or_create("posts", 1)
        record.fields["slug"] = "again"
        await store.save(record)
        second = await store.get("posts", 1)
        await store.close()

        assert first is not None and second is not None
        assert second.created_at == first.created_at
        assert second.updated_at >= first.updated_at


class TestCreateStore:
    def test_memory_url(self) -> None:
        assert isinstance(create_store("memory://"), MemoryRecordStore)

    def test_sql_url(self) -> None:
        store = create_store("sqlite:///:memory:")
        assert isinstance(store, SQLAlchemyRecordStore)
        assert store.connection_string == "sqlite:///:memory:"

    def test_stores_satisfy_protocol(self) -> None:
        assert isinstance(MemoryRecordStore(), RecordStore)
        assert isinstance(SQLAlchemyRecordStore("sqlite://"), RecordStore)

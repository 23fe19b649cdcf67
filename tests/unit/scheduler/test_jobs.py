"""Tests for SyncJobs - dispatching reconciler operations."""

from __future__ import annotations

from typing import Any

import pytest

from wpsync.content_types import ContentType, options_type
from wpsync.reconciler import Reconciler
from wpsync.scheduler import AsyncioTaskScheduler, JobStatus, SyncJobs
from wpsync.scheduler.memory import ScheduledJob
from wpsync.store.memory import MemoryRecordStore


class RecordingScheduler:
    """Scheduler that records dispatches without running them."""

    def __init__(self) -> None:
        self.now: list[str] = []
        self.after: list[tuple[float, str]] = []

    def schedule_now(self, operation: Any, *, name: str = "") -> ScheduledJob:
        operation().close()
        self.now.append(name)
        return ScheduledJob(name=name)

    def schedule_after(self, delay: float, operation: Any, *, name: str = "") -> ScheduledJob:
        operation().close()
        self.after.append((delay, name))
        return ScheduledJob(name=name, delay_seconds=delay)


class RouteClient:
    def __init__(self, routes: dict[str, Any]) -> None:
        self.routes = routes
        self.calls: list[tuple[str, int | None]] = []

    async def fetch(self, route: str, page: int | None = None) -> Any:
        self.calls.append((route, page))
        if page is not None:
            return self.routes.get(f"{route}?page={page}", [])
        return self.routes[route]


@pytest.fixture
def store() -> MemoryRecordStore:
    return MemoryRecordStore()


class TestDispatch:
    def test_sync_one_uses_default_delay(self, store: MemoryRecordStore) -> None:
        scheduler = RecordingScheduler()
        jobs = SyncJobs(scheduler, default_delay=0.5)

        job = jobs.schedule_sync_one(Reconciler(ContentType("posts"), RouteClient({}), store), 12)

        assert scheduler.after == [(0.5, "posts.sync_one(12)")]
        assert job.delay_seconds == 0.5

    def test_sync_one_zero_delay_runs_now(self, store: MemoryRecordStore) -> None:
        scheduler = RecordingScheduler()
        jobs = SyncJobs(scheduler)

        jobs.schedule_sync_one(Reconciler(ContentType("posts"), RouteClient({}), store), 12, delay=0)

        assert scheduler.now == ["posts.sync_one(12)"]
        assert scheduler.after == []

    def test_sync_all_and_options_run_now(self, store: MemoryRecordStore) -> None:
        scheduler = RecordingScheduler()
        jobs = SyncJobs(scheduler)

        jobs.schedule_sync_all(Reconciler(ContentType("pages"), RouteClient({}), store))
        jobs.schedule_sync_options(Reconciler(options_type(["blogname"]), RouteClient({}), store))

        assert scheduler.now == ["pages.sync_all", "options.sync_options"]

    def test_logs_context(self, store: MemoryRecordStore, caplog: pytest.LogCaptureFixture) -> None:
        jobs = SyncJobs(RecordingScheduler())

        with caplog.at_level("INFO", logger="wpsync.scheduler.jobs"):
            jobs.schedule_sync_one(
                Reconciler(ContentType("posts"), RouteClient({}), store),
                12,
                context="webhook post_updated",
            )

        assert "SCHEDULED posts.sync_one(12) after webhook post_updated" in caplog.text


class TestEndToEnd:
    async def test_delayed_sync_one_upserts(self, store: MemoryRecordStore) -> None:
        client = RouteClient({"posts/12": {"ID": 12, "slug": "hello", "title": "Hello"}})
        scheduler = AsyncioTaskScheduler()
        jobs = SyncJobs(scheduler, default_delay=0.01)

        job = jobs.schedule_sync_one(Reconciler(ContentType("posts"), client, store), 12)
        assert await store.count() == 0

        await scheduler.drain()

        assert job.status == JobStatus.SUCCESS
        record = await store.get("posts", 12)
        assert record is not None
        assert record.fields == {"slug": "hello", "title": "Hello"}

    async def test_preview_route(self, store: MemoryRecordStore) -> None:
        client = RouteClient({"posts/preview/12": {"ID": 12, "slug": "draft", "title": "Draft"}})
        scheduler = AsyncioTaskScheduler()

        SyncJobs(scheduler).schedule_sync_one(
            Reconciler(ContentType("posts"), client, store), 12, preview=True, delay=0
        )
        await scheduler.drain()

        assert client.calls == [("posts/preview/12", None)]

    async def test_failed_sync_is_recorded(self, store: MemoryRecordStore) -> None:
        scheduler = AsyncioTaskScheduler()
        # Route lookup raises KeyError for an unknown route
        job = SyncJobs(scheduler).schedule_sync_one(
            Reconciler(ContentType("posts"), RouteClient({}), store), 99, delay=0
        )
        await scheduler.drain()

        assert job.status == JobStatus.FAILED
        assert job.error_type == "KeyError"

    async def test_sync_all_job(self, store: MemoryRecordStore) -> None:
        client = RouteClient({"pages": [{"ID": 1, "slug": "a", "title": "A"}]})
        scheduler = AsyncioTaskScheduler()

        SyncJobs(scheduler).schedule_sync_all(Reconciler(ContentType("pages"), client, store))
        await scheduler.drain()

        assert await store.count("pages") == 1

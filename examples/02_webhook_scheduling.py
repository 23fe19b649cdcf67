#!/usr/bin/env python3
"""
wpsync Webhook Scheduling Example

WordPress webhooks usually fire before the REST API serves the updated
item. This example schedules the single-item sync with a short delay and
handles deletions and unpublishing locally.

Usage:
    WPSYNC_WORDPRESS_URL=https://example.com python examples/02_webhook_scheduling.py
"""

import asyncio

from wpsync import (
    AsyncioTaskScheduler,
    SQLAlchemyRecordStore,
    SyncJobs,
    WordPressClient,
    WpSync,
    build_registry,
    get_settings,
)


async def handle_webhook(spine: WpSync, jobs: SyncJobs, event: dict) -> None:
    """Dispatch one webhook event."""
    reconciler = spine.reconciler(event["post_type"])
    action = event["action"]

    if action == "trash":
        result = await reconciler.purge(event["id"])
        print(f"Purged {event['post_type']} {event['id']}: {result.outcome.value}")
    elif action == "unpublish":
        result = await reconciler.unpublish(event["id"])
        print(f"Unpublished {event['post_type']} {event['id']}: {result.outcome.value}")
    else:
        jobs.schedule_sync_one(reconciler, event["id"], context=f"webhook {action}")


async def main() -> None:
    settings = get_settings(database_url="sqlite:///:memory:", paginated_types="posts")
    scheduler = AsyncioTaskScheduler()
    jobs = SyncJobs(scheduler, default_delay=settings.schedule_delay)

    events = [
        {"action": "save", "post_type": "posts", "id": 1},
        {"action": "save", "post_type": "pages", "id": 2},
        {"action": "unpublish", "post_type": "posts", "id": 1},
        {"action": "trash", "post_type": "pages", "id": 99},
    ]

    async with WpSync(
        WordPressClient.from_settings(settings),
        SQLAlchemyRecordStore(settings.database_url),
        build_registry(settings),
        settings,
    ) as spine:
        for event in events:
            await handle_webhook(spine, jobs, event)

        await scheduler.drain()

        for job in scheduler.jobs:
            print(f"{job.name}: {job.status.value}{f' ({job.error})' if job.error else ''}")


if __name__ == "__main__":
    asyncio.run(main())

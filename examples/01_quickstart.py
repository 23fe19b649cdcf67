#!/usr/bin/env python3
"""
wpsync Quickstart Example

Shows the basic flow: configure content types, run a reconciliation pass,
sync a single item.

Usage:
    WPSYNC_WORDPRESS_URL=https://example.com python examples/01_quickstart.py
"""

import asyncio

from wpsync import (
    MemoryRecordStore,
    WordPressClient,
    WpSync,
    build_registry,
    configure_logging,
    get_settings,
)


async def main() -> None:
    """Reconcile posts and pages into an in-memory store."""
    settings = get_settings(paginated_types="posts", content_types="posts,pages")
    configure_logging(settings.log_level, settings.log_format)

    # In-memory store (use SQLAlchemyRecordStore for persistence)
    store = MemoryRecordStore()

    async with WpSync(
        WordPressClient.from_settings(settings),
        store,
        build_registry(settings),
        settings,
    ) as spine:
        # Full pass: upsert everything, delete what disappeared upstream
        print("Reconciling...")
        results = await spine.sync_all_types()
        for name, result in results.items():
            print(f"✓ {name}: {result.upserted} upserted, {result.deleted} deleted in {result.pages_fetched} requests")
            if result.truncated:
                print(f"  ! {name} hit the page cap, raise WPSYNC_MAX_PAGE")

        # Single item, e.g. after an edit
        records = await store.list_records("posts")
        if records:
            item = await spine.reconciler("posts").sync_one(records[0].source_id)
            print(f"\nRe-synced post {item.source_id}: {item.outcome.value}")


if __name__ == "__main__":
    asyncio.run(main())

#!/usr/bin/env python3
"""
wpsync Custom Field Mapping Example

Field mappers default to copying JSON keys verbatim. A FieldRule can also
extract nested values or write somewhere other than ``fields[name]``.

Usage:
    WPSYNC_WORDPRESS_URL=https://example.com python examples/03_custom_field_mapping.py
"""

import asyncio

from wpsync import (
    ContentType,
    ContentTypeRegistry,
    FieldMapper,
    FieldRule,
    MemoryRecordStore,
    WordPressClient,
    WpSync,
    get_settings,
)


def rendered(key: str):
    """Extract ``json[key]["rendered"]``."""
    return lambda json: (json.get(key) or {}).get("rendered")


post_mapper = FieldMapper(
    [
        FieldRule("slug"),
        FieldRule("status"),
        FieldRule("title", extractor=rendered("title")),
        FieldRule("excerpt", extractor=rendered("excerpt")),
        FieldRule("featured_media"),
    ]
)

media_mapper = FieldMapper.from_names(["slug", "source_url", "media_details"])


async def main() -> None:
    settings = get_settings()
    registry = ContentTypeRegistry(
        [
            ContentType("posts", paginated=True, mapper=post_mapper),
            ContentType("media", paginated=True, mapper=media_mapper),
        ]
    )
    store = MemoryRecordStore()

    async with WpSync(WordPressClient.from_settings(settings), store, registry, settings) as spine:
        await spine.sync_all_types()

        for record in (await store.list_records("posts"))[:5]:
            print(f"{record.source_id}: {record.fields['title']} [{record.status}]")


if __name__ == "__main__":
    asyncio.run(main())

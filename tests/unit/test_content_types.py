"""Tests for wpsync.content_types - content types and the explicit registry."""

from __future__ import annotations

import pytest

from wpsync.content_types import (
    OPTIONS_NAME,
    ContentType,
    ContentTypeRegistry,
    build_registry,
    options_type,
)
from wpsync.core.config import FALLBACK_PAGINATED_TYPES, Settings
from wpsync.core.exceptions import ConfigurationError


def make_settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestContentType:
    def test_path_defaults_to_name(self) -> None:
        assert ContentType("posts").path == "posts"

    def test_custom_path(self) -> None:
        assert ContentType("executive_summaries", path="executive-summary").path == "executive-summary"

    def test_item_path(self) -> None:
        content_type = ContentType("posts")
        assert content_type.item_path("12") == "posts/12"
        assert content_type.item_path("12", preview=True) == "posts/preview/12"

    def test_default_mapper(self) -> None:
        assert ContentType("posts").mapper.names == ["slug", "title"]

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            ContentType("")

    def test_options_type(self) -> None:
        content_type = options_type(["blogname"])
        assert content_type.name == OPTIONS_NAME
        assert content_type.path == "options"
        assert content_type.mapper.names == ["blogname"]


class TestContentTypeRegistry:
    def test_register_and_get(self) -> None:
        registry = ContentTypeRegistry()
        posts = registry.register(ContentType("posts"))
        assert registry.get("posts") is posts
        assert "posts" in registry
        assert len(registry) == 1

    def test_preserves_registration_order(self) -> None:
        registry = ContentTypeRegistry([ContentType("pages"), ContentType("posts"), ContentType("media")])
        assert registry.names == ["pages", "posts", "media"]
        assert [t.name for t in registry] == ["pages", "posts", "media"]

    def test_duplicate_rejected(self) -> None:
        registry = ContentTypeRegistry([ContentType("posts")])
        with pytest.raises(ConfigurationError, match="already registered"):
            registry.register(ContentType("posts"))

    def test_unknown_type(self) -> None:
        registry = ContentTypeRegistry([ContentType("posts")])
        with pytest.raises(ConfigurationError, match="Unknown content type 'pagez'"):
            registry.get("pagez")

    def test_registries_are_independent(self) -> None:
        first = ContentTypeRegistry([ContentType("posts")])
        second = ContentTypeRegistry()
        assert "posts" in first
        assert "posts" not in second


class TestBuildRegistry:
    def test_paginated_from_settings(self) -> None:
        settings = make_settings(paginated_types="posts,media")
        registry = build_registry(settings, ["posts", "pages", "media"])
        assert {t.name: t.paginated for t in registry} == {"posts": True, "pages": False, "media": True}

    def test_field_definitions(self) -> None:
        settings = make_settings(paginated_types=["posts"])
        registry = build_registry(settings, [("posts", ["slug", "title", "status"])])
        assert registry.get("posts").mapper.names == ["slug", "title", "status"]

    def test_defaults_to_configured_content_types(self) -> None:
        settings = make_settings(content_types="articles,pages", paginated_types="articles")
        assert build_registry(settings).names == ["articles", "pages"]

    def test_fallback_paginated_types_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        settings = make_settings()
        with caplog.at_level("WARNING", logger="wpsync.core.config"):
            registry = build_registry(settings, list(FALLBACK_PAGINATED_TYPES) + ["posts"])
        assert "deprecated" in caplog.text
        assert registry.get("pages").paginated is True
        assert registry.get("posts").paginated is False

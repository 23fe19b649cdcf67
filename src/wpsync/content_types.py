"""Content types and the registry that enumerates them.

The registry is an explicit object built once at process start and passed
to whatever needs to list content types (the orchestrator, the CLI).

Example:
    >>> from wpsync.content_types import ContentType, ContentTypeRegistry
    >>> registry = ContentTypeRegistry()
    >>> registry.register(ContentType("posts", paginated=True))
    ContentType(name='posts', path='posts', paginated=True, id_field='ID')
    >>> registry.names
    ['posts']
    >>> "posts" in registry
    True
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wpsync.core.exceptions import ConfigurationError
from wpsync.mapping import DEFAULT_MAPPABLE_FIELDS, FieldMapper

if TYPE_CHECKING:
    from wpsync.core.config import Settings

logger = logging.getLogger(__name__)

OPTIONS_NAME = "options"
OPTIONS_KEY = "options"


@dataclass(frozen=True)
class ContentType:
    """A named category of synchronized items.

    Args:
        name: Content type name, also the local record namespace.
        path: API route segment (defaults to ``name``).
        paginated: Fetch the collection page by page.
        mapper: Field mapping table (defaults to ``slug`` and ``title``).
        id_field: JSON key holding the upstream id in collection items.
    """

    name: str
    path: str = ""
    paginated: bool = False
    mapper: FieldMapper = field(default_factory=FieldMapper.from_names, repr=False, compare=False)
    id_field: str = "ID"

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Content type name must not be empty")
        if not self.path:
            object.__setattr__(self, "path", self.name)

    def item_path(self, source_id: str, preview: bool = False) -> str:
        """Route for a single item.

        Example:
            >>> from wpsync.content_types import ContentType
            >>> ContentType("posts").item_path("12", preview=True)
            'posts/preview/12'
        """
        segment = "preview/" if preview else ""
        return f"{self.path}/{segment}{source_id}"


def options_type(fields: Iterable[str] = DEFAULT_MAPPABLE_FIELDS) -> ContentType:
    """The singleton site options resource."""
    return ContentType(OPTIONS_NAME, mapper=FieldMapper.from_names(fields))


class ContentTypeRegistry:
    """Explicit registry of content types.

    Example:
        >>> from wpsync.content_types import ContentType, ContentTypeRegistry
        >>> registry = ContentTypeRegistry([ContentType("pages")])
        >>> registry.get("pages").path
        'pages'
    """

    def __init__(self, content_types: Iterable[ContentType] = ()) -> None:
        self._types: dict[str, ContentType] = {}
        for content_type in content_types:
            self.register(content_type)

    def register(self, content_type: ContentType) -> ContentType:
        if content_type.name in self._types:
            raise ConfigurationError(f"Content type '{content_type.name}' is already registered")
        self._types[content_type.name] = content_type
        return content_type

    def get(self, name: str) -> ContentType:
        try:
            return self._types[name]
        except KeyError:
            known = ", ".join(self._types) or "none"
            raise ConfigurationError(f"Unknown content type '{name}' (registered: {known})") from None

    @property
    def names(self) -> list[str]:
        return list(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[ContentType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)


def build_registry(
    settings: Settings,
    definitions: Iterable[str | tuple[str, Sequence[str]]] | None = None,
) -> ContentTypeRegistry:
    """Build a registry from names or ``(name, fields)`` pairs.

    Whether a type is paginated comes from ``settings.paginated_types``
    (or its fallback list).

    Example:
        >>> from wpsync.core.config import Settings
        >>> from wpsync.content_types import build_registry
        >>> settings = Settings(paginated_types="posts")
        >>> registry = build_registry(settings, ["posts", ("pages", ["slug", "title", "status"])])
        >>> [(t.name, t.paginated) for t in registry]
        [('posts', True), ('pages', False)]
    """
    paginated = set(settings.effective_paginated_types())
    registry = ContentTypeRegistry()
    for definition in definitions if definitions is not None else settings.content_types:
        if isinstance(definition, str):
            name, fields = definition, DEFAULT_MAPPABLE_FIELDS
        else:
            name, fields = definition
        registry.register(
            ContentType(name, paginated=name in paginated, mapper=FieldMapper.from_names(fields))
        )
    logger.debug("Registered content types: %s", ", ".join(registry.names))
    return registry

"""wpsync configuration.

Application settings loaded from environment variables with WPSYNC_ prefix.

Example:
    >>> from wpsync.core.config import get_settings
    >>> settings = get_settings(max_page=5)
    >>> settings.max_page
    5
    >>> settings.api_path
    'wp-json/wp/v2/'
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGE = 999

# Used when paginated_types is not configured
FALLBACK_PAGINATED_TYPES: tuple[str, ...] = ("articles", "news_articles", "pages", "media")


def _split_csv(value: Any) -> Any:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with WPSYNC_ prefix. List settings
    accept comma-separated values (``WPSYNC_PAGINATED_TYPES=posts,media``).

    Example:
        >>> from wpsync.core.config import Settings
        >>> s = Settings(wordpress_url="https://example.com")
        >>> s.wordpress_url
        'https://example.com/'
        >>> s.max_page
        999
    """

    model_config = SettingsConfigDict(
        env_prefix="WPSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # WordPress API
    wordpress_url: str = Field(default="http://localhost/", description="Base URL of the WordPress site")
    api_path: str = Field(default="wp-json/wp/v2/", description="REST route prefix")
    request_timeout: float = Field(default=30.0, ge=1.0)
    accept_server_error_bodies: bool = Field(
        default=True,
        description="Parse 5xx response bodies as payloads instead of failing",
    )

    # Synchronization
    max_page: int = Field(default=DEFAULT_MAX_PAGE, ge=0, description="Page cap for paginated sync (0 = default)")
    paginated_types: Annotated[list[str], NoDecode] = Field(default_factory=list)
    content_types: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["posts", "pages"])
    schedule_delay: float = Field(default=0.5, ge=0.0, description="Delay before a scheduled single-item sync")

    # Storage
    database_url: str = Field(default="sqlite:///wpsync.db", description="Record store connection URL")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format: console or plain")

    @field_validator("wordpress_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        return v if v.endswith("/") else v + "/"

    @field_validator("paginated_types", "content_types", mode="before")
    @classmethod
    def split_lists(cls, v: Any) -> Any:
        return _split_csv(v)

    @property
    def effective_max_page(self) -> int:
        """Page cap, with 0 meaning the default of 999."""
        return self.max_page or DEFAULT_MAX_PAGE

    def effective_paginated_types(self) -> list[str]:
        """Paginated content types, falling back to the legacy list."""
        if self.paginated_types:
            return list(self.paginated_types)
        logger.warning(
            "WPSYNC_PAGINATED_TYPES is not set, falling back to the deprecated default %s",
            ", ".join(FALLBACK_PAGINATED_TYPES),
        )
        return list(FALLBACK_PAGINATED_TYPES)


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from wpsync.core.config import get_settings
        >>> get_settings(paginated_types="posts, media").paginated_types
        ['posts', 'media']
    """
    return Settings(**overrides)

"""Local record model - the synchronized copy of one WordPress item.

A ``LocalRecord`` is addressed by ``(content_type, source_id)``. Source ids
arrive from the API as integers or strings; they are normalized to strings
so that ``5`` and ``"5"`` address the same record.

Example:
    >>> from wpsync.models.record import LocalRecord
    >>> record = LocalRecord(content_type="posts", source_id=42)
    >>> record.source_id
    '42'
    >>> record.fields["title"] = "Hello"
    >>> record.key
    ('posts', '42')
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import Field, PrivateAttr, field_validator

from wpsync.models.base import WpSyncModel

DRAFT_STATUS = "draft"


def normalize_source_id(source_id: int | str) -> str:
    """Normalize a source id to its string key form.

    Example:
        >>> from wpsync.models.record import normalize_source_id
        >>> normalize_source_id(7), normalize_source_id(" 7 ")
        ('7', '7')
    """
    if isinstance(source_id, bool) or not isinstance(source_id, (int, str)):
        msg = f"Source id must be an int or str, got {type(source_id).__name__}"
        raise TypeError(msg)
    return str(source_id).strip()


def coerce_source_id(value: Any) -> str | None:
    """Normalized id, or None when ``value`` cannot address a record.

    Example:
        >>> from wpsync.models.record import coerce_source_id
        >>> coerce_source_id(12), coerce_source_id(" "), coerce_source_id(1.5)
        ('12', None, None)
    """
    try:
        key = normalize_source_id(value)
    except TypeError:
        return None
    return key or None


class LocalRecord(WpSyncModel):
    """A locally stored copy of a WordPress item.

    Mapped fields live in ``fields``; ``status`` is read from and written
    to ``fields["status"]`` so unpublishing and mapping agree on one slot.

    Example:
        >>> from wpsync.models.record import LocalRecord
        >>> r = LocalRecord(content_type="pages", source_id="about")
        >>> r.is_new
        True
        >>> r.status = "draft"
        >>> r.fields
        {'status': 'draft'}
    """

    content_type: str = Field(..., min_length=1, description="Content type name")
    source_id: str = Field(..., min_length=1, description="Upstream id, normalized to str")
    fields: dict[str, Any] = Field(default_factory=dict, description="Mapped source fields")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    _is_new: bool = PrivateAttr(default=True)

    @field_validator("source_id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> str:
        try:
            return normalize_source_id(v)
        except TypeError as e:
            raise ValueError(str(e)) from e

    @property
    def key(self) -> tuple[str, str]:
        """Store key: ``(content_type, source_id)``."""
        return (self.content_type, self.source_id)

    @property
    def is_new(self) -> bool:
        """True until the record has been saved or loaded from a store."""
        return self._is_new

    def mark_persisted(self) -> None:
        self._is_new = False

    @property
    def status(self) -> str | None:
        return self.fields.get("status")

    @status.setter
    def status(self, value: str | None) -> None:
        self.fields["status"] = value

    def touch(self) -> None:
        """Bump ``updated_at`` before a save."""
        self.updated_at = datetime.now(UTC)

"""Result types returned by reconciler operations.

Not-found conditions are values here, not exceptions: a recognized API
error code or an absent local record yields ``SyncOutcome.NOT_FOUND``.

Example:
    >>> from wpsync.models.result import ItemResult, SyncOutcome, SyncResult
    >>> ItemResult(content_type="posts", source_id="1", outcome=SyncOutcome.NOT_FOUND).found
    False
    >>> result = SyncResult(content_type="posts")
    >>> result.seen_ids.update({"1", "2"})
    >>> result.seen_count
    2
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wpsync.models.record import LocalRecord


class SyncOutcome(str, Enum):
    """Outcome of a single item operation.

    Example:
        >>> from wpsync.models.result import SyncOutcome
        >>> SyncOutcome.SYNCED.value
        'synced'
    """

    SYNCED = "synced"
    NOT_FOUND = "not_found"
    SKIPPED = "skipped"


@dataclass
class ItemResult:
    """Outcome of ``sync_one``, ``sync_options``, ``purge`` or ``unpublish``."""

    content_type: str
    source_id: str | None
    outcome: SyncOutcome
    record: LocalRecord | None = None

    @property
    def found(self) -> bool:
        return self.outcome == SyncOutcome.SYNCED


@dataclass
class SyncResult:
    """Outcome of one full-collection reconciliation pass.

    Attributes:
        content_type: Content type that was synchronized.
        seen_ids: Source ids observed during the pass.
        pages_fetched: Number of API fetches made.
        upserted: Items created or updated.
        skipped: Items ignored because they carried no usable id.
        deleted: Local records removed by reconciliation.
        truncated: The page cap stopped the pass before an empty page.
        aborted: A page was not a list of items; the pass stopped there
            and nothing was deleted.
        deletion_skipped: Reconciliation did not delete anything because
            no ids were seen or the pass was aborted.
    """

    content_type: str
    seen_ids: set[str] = field(default_factory=set)
    pages_fetched: int = 0
    upserted: int = 0
    skipped: int = 0
    deleted: int = 0
    truncated: bool = False
    aborted: bool = False
    deletion_skipped: bool = False
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None

    @property
    def seen_count(self) -> int:
        return len(self.seen_ids)

    @property
    def duration_ms(self) -> float | None:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds() * 1000

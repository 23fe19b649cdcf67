"""Pydantic models and result types for wpsync."""

from wpsync.models.base import WpSyncModel
from wpsync.models.record import DRAFT_STATUS, LocalRecord, coerce_source_id, normalize_source_id
from wpsync.models.result import ItemResult, SyncOutcome, SyncResult

__all__ = [
    # Base
    "WpSyncModel",
    # Records
    "DRAFT_STATUS",
    "LocalRecord",
    "coerce_source_id",
    "normalize_source_id",
    # Results
    "ItemResult",
    "SyncOutcome",
    "SyncResult",
]

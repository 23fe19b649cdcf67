"""
wpsync - WordPress REST API to local store synchronization.

wpsync keeps local records in line with content published through the
WordPress REST API. For each configured content type it fetches single
items or whole collections (optionally page by page), maps declared JSON
fields onto local records, and deletes local records that disappeared
upstream.

Key Features:
- Protocol-based collaborators (API client, record store, task scheduler)
- Declarative per-type field mapping tables
- Reconciliation passes with an empty-result safety guard
- Soft not-found handling for recognized WordPress error codes

Quick Start:
    >>> from wpsync import WpSync, WordPressClient, SQLAlchemyRecordStore, get_settings
    >>> from wpsync.content_types import build_registry
    >>> settings = get_settings()
    >>> async with WpSync(
    ...     WordPressClient.from_settings(settings),
    ...     SQLAlchemyRecordStore(settings.database_url),
    ...     build_registry(settings),
    ...     settings,
    ... ) as spine:
    ...     results = await spine.sync_all_types()
"""

from wpsync.content_types import (
    ContentType,
    ContentTypeRegistry,
    build_registry,
    options_type,
)
from wpsync.core.config import Settings, get_settings
from wpsync.core.exceptions import (
    ApiResponseError,
    ConfigurationError,
    RecordNotFoundLocally,
    StorageError,
    TransportError,
    WpSyncError,
)
from wpsync.core.log import configure_logging
from wpsync.core.wpsync import WpSync
from wpsync.http import WordPressClient
from wpsync.mapping import FieldMapper, FieldRule
from wpsync.models.record import DRAFT_STATUS, LocalRecord
from wpsync.models.result import ItemResult, SyncOutcome, SyncResult
from wpsync.reconciler import API_ERROR_CODES, Reconciler, is_error_payload
from wpsync.scheduler import AsyncioTaskScheduler, JobStatus, ScheduledJob, SyncJobs
from wpsync.store import MemoryRecordStore, SQLAlchemyRecordStore, create_store

__version__ = "0.1.0"

__all__ = [
    # Orchestration
    "WpSync",
    "Reconciler",
    "API_ERROR_CODES",
    "is_error_payload",
    # Content types and mapping
    "ContentType",
    "ContentTypeRegistry",
    "build_registry",
    "options_type",
    "FieldMapper",
    "FieldRule",
    # Models
    "DRAFT_STATUS",
    "LocalRecord",
    "ItemResult",
    "SyncOutcome",
    "SyncResult",
    # Collaborators
    "WordPressClient",
    "MemoryRecordStore",
    "SQLAlchemyRecordStore",
    "create_store",
    "AsyncioTaskScheduler",
    "JobStatus",
    "ScheduledJob",
    "SyncJobs",
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Errors
    "WpSyncError",
    "TransportError",
    "ApiResponseError",
    "RecordNotFoundLocally",
    "ConfigurationError",
    "StorageError",
    # Version
    "__version__",
]

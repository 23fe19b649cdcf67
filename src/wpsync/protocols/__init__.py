"""Protocol definitions - the collaborators the reconciler depends on."""

from wpsync.protocols.api import ApiClient
from wpsync.protocols.scheduler import TaskScheduler
from wpsync.protocols.store import RecordStore

__all__ = [
    # API
    "ApiClient",
    # Store
    "RecordStore",
    # Scheduling
    "TaskScheduler",
]

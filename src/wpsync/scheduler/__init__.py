"""Task scheduler implementations for reconciler operations.

Example:
    >>> from wpsync.scheduler import AsyncioTaskScheduler, SyncJobs
    >>>
    >>> jobs = SyncJobs(AsyncioTaskScheduler(), default_delay=0.5)
    >>> jobs.schedule_sync_one(reconciler, 42)
"""

from wpsync.scheduler.jobs import SyncJobs
from wpsync.scheduler.memory import AsyncioTaskScheduler, JobStatus, ScheduledJob

__all__ = [
    "AsyncioTaskScheduler",
    "JobStatus",
    "ScheduledJob",
    "SyncJobs",
]

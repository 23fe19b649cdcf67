"""In-process task scheduler built on asyncio tasks.

Suitable for development, testing, and single-process deployments. Jobs
are fire-and-forget: failures are logged and recorded on the job, never
retried.
"""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import Field

from wpsync.models.base import WpSyncModel
from wpsync.protocols.scheduler import Operation

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 1000


class JobStatus(str, Enum):
    """Scheduled job states.

    Example:
        >>> from wpsync.scheduler.memory import JobStatus
        >>> JobStatus.PENDING.value
        'pending'
    """

    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ScheduledJob(WpSyncModel):
    """A unit of work handed to a scheduler.

    Example:
        >>> from wpsync.scheduler.memory import ScheduledJob
        >>> job = ScheduledJob(name="posts.sync_one", delay_seconds=0.5)
        >>> job.status.value
        'pending'
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(default="", description="Operation name for logging")
    delay_seconds: float = Field(default=0.0, ge=0)
    scheduled_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    started_at: datetime | None = None
    completed_at: datetime | None = None
    status: JobStatus = JobStatus.PENDING
    error: str | None = None
    error_type: str | None = None


class AsyncioTaskScheduler:
    """Runs operations as asyncio tasks on the current event loop.

    Finished tasks are released as soon as they complete. Job records are
    kept for inspection, oldest first, up to ``max_history`` entries.

    Example:
        >>> import asyncio
        >>> from wpsync.scheduler.memory import AsyncioTaskScheduler
        >>> async def example():
        ...     scheduler = AsyncioTaskScheduler()
        ...     async def work():
        ...         return 42
        ...     job = scheduler.schedule_now(work, name="answer")
        ...     await scheduler.drain()
        ...     return job.status.value
        >>> asyncio.run(example())
        'success'
    """

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY) -> None:
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self.max_history = max_history
        self._jobs: OrderedDict[str, ScheduledJob] = OrderedDict()
        self._tasks: dict[str, asyncio.Task[Any]] = {}

    @property
    def jobs(self) -> list[ScheduledJob]:
        """Recent jobs, oldest first."""
        return list(self._jobs.values())

    @property
    def pending(self) -> int:
        """Number of jobs not yet finished."""
        return sum(1 for task in self._tasks.values() if not task.done())

    def schedule_now(self, operation: Operation, *, name: str = "") -> ScheduledJob:
        """Run ``operation`` as soon as the event loop gets to it."""
        return self.schedule_after(0, operation, name=name)

    def schedule_after(self, delay: float, operation: Operation, *, name: str = "") -> ScheduledJob:
        """Run ``operation`` after ``delay`` seconds.

        Must be called from inside a running event loop.
        """
        loop = asyncio.get_running_loop()
        job = ScheduledJob(name=name, delay_seconds=max(0.0, delay))
        task = loop.create_task(self._run(job, operation))
        self._tasks[job.id] = task
        task.add_done_callback(lambda _: self._tasks.pop(job.id, None))
        self._remember(job)
        logger.info("Scheduled %s in %.2fs", name or job.id, job.delay_seconds)
        return job

    def _remember(self, job: ScheduledJob) -> None:
        self._jobs[job.id] = job
        while len(self._jobs) > self.max_history:
            self._jobs.popitem(last=False)

    async def _run(self, job: ScheduledJob, operation: Operation) -> None:
        if job.delay_seconds > 0:
            await asyncio.sleep(job.delay_seconds)
        job.status = JobStatus.RUNNING
        job.started_at = datetime.now(UTC)
        try:
            await operation()
        except asyncio.CancelledError:
            job.status = JobStatus.CANCELLED
            raise
        except Exception as e:
            job.status = JobStatus.FAILED
            job.error = str(e)
            job.error_type = type(e).__name__
            logger.exception("Job %s failed", job.name or job.id)
        else:
            job.status = JobStatus.SUCCESS
        finally:
            job.completed_at = datetime.now(UTC)

    async def drain(self) -> None:
        """Wait for every scheduled job to finish, including jobs they schedule."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks.values()), return_exceptions=True)

    async def close(self) -> None:
        """Cancel unfinished jobs."""
        tasks = list(self._tasks.items())
        for job_id, task in tasks:
            if not task.done():
                task.cancel()
                job = self._jobs.get(job_id)
                if job is not None:
                    job.status = JobStatus.CANCELLED
        await asyncio.gather(*(task for _, task in tasks), return_exceptions=True)
        self._tasks.clear()

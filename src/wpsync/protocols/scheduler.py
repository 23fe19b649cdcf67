"""Task scheduler protocol.

Reconciler operations run as independent units of work handed to a
scheduler, either right away or after a delay.

Example:
    >>> from wpsync.protocols.scheduler import TaskScheduler
    >>> hasattr(TaskScheduler, "schedule_after")
    True
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from wpsync.scheduler.memory import ScheduledJob

Operation = Callable[[], Awaitable[Any]]


@runtime_checkable
class TaskScheduler(Protocol):
    """Dispatches operations as fire-and-forget jobs.

    Implementations: asyncio tasks, Celery, RQ, Sidekiq-style queues.
    Retry policy, if any, belongs to the implementation.
    """

    def schedule_now(self, operation: Operation, *, name: str = "") -> ScheduledJob:
        """Run ``operation`` as soon as possible."""
        ...

    def schedule_after(self, delay: float, operation: Operation, *, name: str = "") -> ScheduledJob:
        """Run ``operation`` after ``delay`` seconds."""
        ...

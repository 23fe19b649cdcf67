"""Scheduling helpers for reconciler operations.

Webhooks from WordPress usually arrive before the change is visible through
the REST API, so single-item syncs are scheduled with a short delay.

Example:
    >>> from wpsync.scheduler.jobs import SyncJobs
    >>> hasattr(SyncJobs, "schedule_sync_one")
    True
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wpsync.protocols.scheduler import TaskScheduler
    from wpsync.reconciler import Reconciler
    from wpsync.scheduler.memory import ScheduledJob

logger = logging.getLogger(__name__)


class SyncJobs:
    """Hands reconciler operations to a task scheduler.

    Args:
        scheduler: Where operations are dispatched.
        default_delay: Delay for ``schedule_sync_one`` when none is given.
    """

    def __init__(self, scheduler: TaskScheduler, default_delay: float = 0.5) -> None:
        self._scheduler = scheduler
        self._default_delay = default_delay

    def schedule_sync_one(
        self,
        reconciler: Reconciler,
        source_id: int | str,
        *,
        preview: bool = False,
        delay: float | None = None,
        context: str | None = None,
    ) -> ScheduledJob:
        """Schedule ``reconciler.sync_one``; a delay of 0 dispatches immediately.

        Args:
            reconciler: Reconciler of the item's content type.
            source_id: Upstream id of the item.
            preview: Fetch the preview route instead.
            delay: Seconds to wait (defaults to ``default_delay``).
            context: Free text logged with the scheduling, e.g. the
                webhook request that triggered it.
        """
        delay = self._default_delay if delay is None else delay
        name = f"{reconciler.name}.sync_one({source_id})"
        logger.info("SCHEDULED %s%s", name, f" after {context}" if context else "")

        async def operation() -> None:
            await reconciler.sync_one(source_id, preview)

        if delay > 0:
            return self._scheduler.schedule_after(delay, operation, name=name)
        return self._scheduler.schedule_now(operation, name=name)

    def schedule_sync_all(self, reconciler: Reconciler) -> ScheduledJob:
        """Schedule a full reconciliation pass right away."""

        async def operation() -> None:
            await reconciler.sync_all()

        return self._scheduler.schedule_now(operation, name=f"{reconciler.name}.sync_all")

    def schedule_sync_options(self, reconciler: Reconciler) -> ScheduledJob:
        """Schedule an options refresh right away."""

        async def operation() -> None:
            await reconciler.sync_options()

        return self._scheduler.schedule_now(operation, name=f"{reconciler.name}.sync_options")

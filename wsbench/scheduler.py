# =============================================================================
# wsbench -- Task Scheduler
# =============================================================================
#
# Fixed pool of workers sharing one claim counter. Each id in 1..total is
# handed out exactly once; no queue, no retry.
# =============================================================================

from __future__ import annotations

import asyncio
import itertools
from typing import Awaitable, Callable

from ._logging import logger
from .types import Task

TaskHandler = Callable[[Task], Awaitable[None]]


class TaskScheduler:
    """Runs *total* tasks on *concurrency* workers.

    Args:
        total: Number of task ids to hand out (``1..total``).
        concurrency: Number of workers started for the run.
    """

    def __init__(self, total: int, concurrency: int) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.total = total
        self.concurrency = concurrency
        self._counter = itertools.count(1)

    def claim(self) -> Task | None:
        """Claim the next unclaimed task, or ``None`` once exhausted."""
        task_id = next(self._counter)
        if task_id > self.total:
            return None
        return Task(task_id)

    async def run(self, handler: TaskHandler) -> None:
        """Start the worker pool and return once every worker has exited."""
        self._counter = itertools.count(1)
        await asyncio.gather(
            *(self._worker(slot, handler) for slot in range(self.concurrency))
        )

    async def _worker(self, slot: int, handler: TaskHandler) -> None:
        while True:
            task = self.claim()
            if task is None:
                logger.debug("Worker %d exhausted", slot)
                return
            await handler(task)

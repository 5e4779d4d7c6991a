# =============================================================================
# wsbench -- Task Reporter
# =============================================================================
#
# One diagnostic line per task start and per task outcome. Never raises
# into the run.
# =============================================================================

from __future__ import annotations

import threading
from collections import Counter
from typing import Any

from ._logging import logger


class Reporter:
    """Logs task lifecycle lines and tallies outcomes for the run summary."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._started = 0
        self._succeeded = 0
        self._errors: Counter[str] = Counter()

    def task_started(self, task_id: int, url: str) -> None:
        with self._lock:
            self._started += 1
        logger.info("+ %d %s", task_id, url)

    def task_succeeded(self, task_id: int) -> None:
        with self._lock:
            self._succeeded += 1
        logger.info("run task %d OK", task_id)

    def task_failed(self, task_id: int, error: BaseException) -> None:
        with self._lock:
            self._errors[type(error).__name__] += 1
        logger.info("run task %d err:%s", task_id, error)

    def url_resolved(self, task_id: int, url: str) -> None:
        logger.info("+ %d %s", task_id, url)

    def url_failed(self, task_id: int, error: BaseException) -> None:
        logger.info("get url %d err:%s", task_id, error)

    # -- Summary --------------------------------------------------------------

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "started": self._started,
                "succeeded": self._succeeded,
                "failed": sum(self._errors.values()),
                "errors": dict(self._errors),
            }

    def summarize(self, total: int, elapsed: float) -> None:
        stats = self.get_stats()
        errors = ", ".join(f"{name}={count}" for name, count in sorted(stats["errors"].items()))
        logger.info(
            "done: %d tasks, %d ok, %d failed%s in %.2fs",
            total,
            stats["succeeded"],
            stats["failed"],
            f" ({errors})" if errors else "",
            elapsed,
        )

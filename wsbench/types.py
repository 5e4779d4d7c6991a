# =============================================================================
# wsbench -- Type Definitions
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_OUTPUT,
    DEFAULT_TIMEOUT,
    OUTPUT_DISCARD,
    OUTPUT_STDOUT,
)


class OutputKind(str, Enum):
    """Where inbound message payloads go.

    DISCARD -- payloads are dropped.
    STDOUT -- one shared standard-output sink for every task.
    FILE -- one file per task, named ``<prefix>.<id>``.
    """

    DISCARD = "discard"
    STDOUT = "stdout"
    FILE = "file"

    @classmethod
    def from_flag(cls, value: str) -> OutputKind:
        if value == OUTPUT_DISCARD:
            return cls.DISCARD
        if value == OUTPUT_STDOUT:
            return cls.STDOUT
        return cls.FILE


@dataclass(frozen=True, slots=True)
class Task:
    """One connection attempt, identified by an id in ``1..total``."""

    id: int


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Process-wide configuration, assembled once at startup.

    Attributes:
        url: URL template; every ``<id>`` is replaced by the task id.
        total: Number of tasks to run.
        concurrency: Number of parallel workers.
        output: ``""`` discards, ``"-"`` writes to stdout, anything else
            is a per-task file prefix.
        queries_path: Optional query-override file.
        dry_run: Resolve and log URLs without connecting.
        timeout: Per-task deadline in seconds, ``0`` disables it.
    """

    url: str
    total: int
    concurrency: int = DEFAULT_CONCURRENCY
    output: str = DEFAULT_OUTPUT
    queries_path: str | None = None
    dry_run: bool = False
    timeout: float = DEFAULT_TIMEOUT

    @property
    def output_kind(self) -> OutputKind:
        return OutputKind.from_flag(self.output)


def resolve_total(requested: int, concurrency: int, catalog_size: int) -> int:
    """Effective task count.

    Falls back to the catalog size when no total was requested, and is
    never lower than *concurrency* so every worker gets a task.
    """
    total = requested
    if total < 1 and catalog_size > 0:
        total = catalog_size
    if total < concurrency:
        total = concurrency
    return total

# =============================================================================
# wsbench -- Output Sinks
# =============================================================================

from __future__ import annotations

import sys
import threading
from typing import BinaryIO, Protocol

from ._logging import logger
from .errors import SinkError
from .types import OutputKind


class Sink(Protocol):
    """Destination for one task's inbound message payloads."""

    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...


class DiscardSink:
    """Accepts every write and drops it."""

    def write(self, data: bytes) -> int:
        return len(data)

    def close(self) -> None:
        pass


class StdoutSink:
    """Shared standard-output sink, one trimmed message per line.

    Each write holds a lock so concurrent writers never tear a line;
    ordering across tasks is unspecified. Writes run on the caller's
    thread, so a stalled stdout pipe stalls every task sharing it.
    """

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout.buffer
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        with self._lock:
            self._stream.write(data.strip() + b"\n")
            self._stream.flush()
        return len(data)

    def close(self) -> None:
        # Shared across tasks; the process owns the stream.
        pass


class FileSink:
    """Per-task file sink."""

    def __init__(self, path: str) -> None:
        self.path = path
        try:
            self._fh: BinaryIO | None = open(path, "wb")
        except OSError as exc:
            raise SinkError(f"open {path}: {exc}") from exc

    def write(self, data: bytes) -> int:
        if self._fh is None:
            raise SinkError(f"write {self.path}: sink is closed")
        try:
            return self._fh.write(data)
        except OSError as exc:
            raise SinkError(f"write {self.path}: {exc}") from exc

    def close(self) -> None:
        if self._fh is not None:
            fh, self._fh = self._fh, None
            fh.close()


class SinkFactory:
    """Opens the sink for a task according to the configured output mode.

    Args:
        output: ``""`` discards, ``"-"`` writes to stdout, anything else
            is a file prefix producing ``<prefix>.<id>``.
        stream: Binary stream used by the stdout sink (default stdout).
    """

    def __init__(self, output: str, *, stream: BinaryIO | None = None) -> None:
        self.output = output
        self.kind = OutputKind.from_flag(output)
        self._shared: Sink | None = None
        if self.kind == OutputKind.DISCARD:
            self._shared = DiscardSink()
        elif self.kind == OutputKind.STDOUT:
            self._shared = StdoutSink(stream)

    def path_for(self, task_id: int) -> str:
        return f"{self.output}.{task_id}"

    def open(self, task_id: int) -> Sink:
        """Sink for *task_id*.

        Raises:
            SinkError: If the per-task file cannot be created.
        """
        if self._shared is not None:
            return self._shared
        path = self.path_for(task_id)
        logger.debug("Opening output file %s", path)
        return FileSink(path)

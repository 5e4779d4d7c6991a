# =============================================================================
# wsbench -- Connection Worker
# =============================================================================
#
# Runs one task end to end: resolve, open sink, connect, stream messages
# into the sink until the connection ends. Every failure stays local to
# the task.
# =============================================================================

from __future__ import annotations

import asyncio
from typing import Any, Callable
from urllib.parse import SplitResult

import websockets.asyncio.client
from websockets.exceptions import ConnectionClosed

from ._logging import logger
from .errors import ConnectError, StreamError, TaskTimeoutError
from .queries import QueryCatalog
from .reporter import Reporter
from .resolver import origin_for, resolve_url
from .sinks import Sink, SinkFactory
from .types import RunConfig, Task

Connector = Callable[..., Any]


class ConnectionWorker:
    """Executes tasks against the configured WebSocket endpoint.

    Args:
        config: Run configuration (URL template, timeout).
        catalog: Query overrides merged into each task's URL.
        sinks: Factory producing the output sink per task.
        reporter: Receives start and outcome notifications.
        connect: WebSocket client factory, called as
            ``connect(url, origin=..., max_size=None)`` and awaited.
    """

    def __init__(
        self,
        config: RunConfig,
        catalog: QueryCatalog,
        sinks: SinkFactory,
        reporter: Reporter,
        *,
        connect: Connector = websockets.asyncio.client.connect,
    ) -> None:
        self._config = config
        self._catalog = catalog
        self._sinks = sinks
        self._reporter = reporter
        self._connect = connect

    async def run(self, task: Task) -> None:
        """Run *task* and report its outcome. Never raises."""
        try:
            if self._config.timeout > 0:
                try:
                    await asyncio.wait_for(self._execute(task), self._config.timeout)
                except asyncio.TimeoutError as exc:
                    raise TaskTimeoutError(self._config.timeout) from exc
            else:
                await self._execute(task)
        except Exception as exc:
            self._reporter.task_failed(task.id, exc)
        else:
            self._reporter.task_succeeded(task.id)

    async def _execute(self, task: Task) -> None:
        url = resolve_url(self._config.url, task.id, self._catalog)
        # File creation blocks; keep it off the event loop.
        sink = await asyncio.to_thread(self._sinks.open, task.id)
        try:
            self._reporter.task_started(task.id, url.geturl())
            ws = await self._dial(url)
            try:
                await self._pump(ws, sink)
            finally:
                await ws.close()
        finally:
            sink.close()

    async def _dial(self, url: SplitResult) -> Any:
        try:
            return await self._connect(
                url.geturl(),
                origin=origin_for(url),
                max_size=None,
            )
        except Exception as exc:
            raise ConnectError(f"dial {url.geturl()}: {exc}") from exc

    async def _pump(self, ws: Any, sink: Sink) -> None:
        """Copy text and binary messages into *sink* until the stream ends."""
        while True:
            try:
                message = await ws.recv()
            except ConnectionClosed as exc:
                raise StreamError(str(exc)) from exc
            except Exception as exc:
                raise StreamError(f"receive failed: {exc}") from exc

            if isinstance(message, str):
                sink.write(message.encode("utf-8"))
            elif isinstance(message, (bytes, bytearray, memoryview)):
                sink.write(bytes(message))
            else:
                logger.debug("Ignoring message of type %s", type(message).__name__)

# =============================================================================
# wsbench -- Benchmark Runner
# =============================================================================

from __future__ import annotations

import time
from typing import Any, BinaryIO

import websockets.asyncio.client

from .errors import ResolveError
from .queries import QueryCatalog
from .reporter import Reporter
from .resolver import resolve_url
from .scheduler import TaskScheduler
from .sinks import SinkFactory
from .types import RunConfig
from .worker import Connector, ConnectionWorker


class WsBenchmark:
    """Ties the scheduler, workers, sinks and reporter together for one run.

    Example::

        config = RunConfig("ws://localhost:8080/feed/<id>", total=100, concurrency=10)
        bench = WsBenchmark(config, QueryCatalog.load(None))
        await bench.run()
    """

    def __init__(
        self,
        config: RunConfig,
        catalog: QueryCatalog | None = None,
        *,
        reporter: Reporter | None = None,
        connect: Connector = websockets.asyncio.client.connect,
        stream: BinaryIO | None = None,
    ) -> None:
        self.config = config
        self.catalog = catalog if catalog is not None else QueryCatalog()
        self.reporter = reporter or Reporter()
        self._connect = connect
        self._stream = stream

    async def run(self) -> dict[str, Any]:
        """Run every task on the worker pool; returns the reporter stats."""
        worker = ConnectionWorker(
            self.config,
            self.catalog,
            SinkFactory(self.config.output, stream=self._stream),
            self.reporter,
            connect=self._connect,
        )
        scheduler = TaskScheduler(self.config.total, self.config.concurrency)

        t0 = time.perf_counter()
        await scheduler.run(worker.run)
        self.reporter.summarize(self.config.total, time.perf_counter() - t0)
        return self.reporter.get_stats()

    def dry_run(self) -> list[str]:
        """Resolve and log each task's URL in order, without connecting."""
        urls = []
        for task_id in range(1, self.config.total + 1):
            try:
                url = resolve_url(self.config.url, task_id, self.catalog)
            except ResolveError as exc:
                self.reporter.url_failed(task_id, exc)
                continue
            urls.append(url.geturl())
            self.reporter.url_resolved(task_id, urls[-1])
        return urls

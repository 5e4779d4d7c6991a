"""wsbench -- WebSocket connection benchmark.

Opens a configurable number of WebSocket sessions against an endpoint,
bounded by a concurrency limit, and relays inbound messages to a sink.

Usage::

    wsbm -n 100 -c 10 -o out "ws://localhost:8080/feed?user=<id>"

Library usage::

    import asyncio
    from wsbench import QueryCatalog, RunConfig, WsBenchmark

    config = RunConfig("ws://localhost:8080/feed/<id>", total=100, concurrency=10)
    asyncio.run(WsBenchmark(config, QueryCatalog.load("queries.txt")).run())
"""

from ._version import __version__
from .benchmark import WsBenchmark
from .errors import (
    ConfigError,
    ConnectError,
    QueryParseError,
    ResolveError,
    SinkError,
    StreamError,
    TaskTimeoutError,
    WSBenchError,
)
from .queries import QueryCatalog
from .reporter import Reporter
from .resolver import resolve_url
from .scheduler import TaskScheduler
from .sinks import DiscardSink, FileSink, SinkFactory, StdoutSink
from .types import OutputKind, RunConfig, Task, resolve_total
from .worker import ConnectionWorker

__all__ = [
    "__version__",
    "WsBenchmark",
    "ConnectionWorker",
    "TaskScheduler",
    "QueryCatalog",
    "Reporter",
    "resolve_url",
    "SinkFactory",
    "DiscardSink",
    "StdoutSink",
    "FileSink",
    "OutputKind",
    "RunConfig",
    "Task",
    "resolve_total",
    "WSBenchError",
    "ConfigError",
    "QueryParseError",
    "ResolveError",
    "ConnectError",
    "StreamError",
    "SinkError",
    "TaskTimeoutError",
]

# =============================================================================
# wsbench -- Error Types
# =============================================================================


class WSBenchError(Exception):
    """Base exception for all wsbench errors."""


class ConfigError(WSBenchError):
    """Startup configuration cannot be loaded (e.g. unreadable query file)."""


class QueryParseError(WSBenchError):
    """One query-catalog line does not parse under its detected format."""


class ResolveError(WSBenchError):
    """The URL template yields an unparsable URL for a task."""


class ConnectError(WSBenchError):
    """WebSocket handshake or dial failure."""


class StreamError(WSBenchError):
    """The message-receive loop terminated (remote close included)."""


class SinkError(WSBenchError):
    """The output resource for a task cannot be created or written."""


class TaskTimeoutError(WSBenchError):
    """A task exceeded its deadline."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"task exceeded deadline of {timeout:.1f}s")

"""Shared fixtures for wsbench tests."""

import asyncio
import logging

import pytest
from websockets.exceptions import ConnectionClosedOK
from websockets.frames import Close


def closed_ok(reason: str = "bye") -> ConnectionClosedOK:
    return ConnectionClosedOK(Close(1000, reason), Close(1000, reason))


class FakeConnection:
    """Stands in for a websockets ClientConnection.

    ``recv()`` returns queued messages in order, raising any queued
    exception, then reports a clean close. With ``hang=True`` it blocks
    forever once the queue is drained.
    """

    def __init__(self, messages=(), *, hang: bool = False) -> None:
        self._messages = list(messages)
        self._hang = hang
        self.close_calls = 0

    async def recv(self):
        if self._messages:
            message = self._messages.pop(0)
            if isinstance(message, BaseException):
                raise message
            return message
        if self._hang:
            await asyncio.Event().wait()
        raise closed_ok()

    async def close(self) -> None:
        self.close_calls += 1


class FakeConnector:
    """Records dial calls and hands out connections from *factory*."""

    def __init__(self, factory=None, *, error: Exception | None = None) -> None:
        self._factory = factory or (lambda url: FakeConnection())
        self._error = error
        self.calls: list[tuple[str, dict]] = []
        self.connections: list[FakeConnection] = []

    async def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self._error is not None:
            raise self._error
        conn = self._factory(url)
        self.connections.append(conn)
        return conn


@pytest.fixture
def connector():
    return FakeConnector()


@pytest.fixture
def wsbench_logs(caplog):
    caplog.set_level(logging.INFO, logger="wsbench")
    return caplog


@pytest.fixture
def make_connection():
    return FakeConnection


@pytest.fixture
def make_connector():
    return FakeConnector

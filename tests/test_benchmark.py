"""Tests for WsBenchmark (live run with a fake client, and dry run)."""

import io

import pytest

from wsbench.benchmark import WsBenchmark
from wsbench.queries import QueryCatalog
from wsbench.types import RunConfig


def _lines(caplog, prefix):
    return [r.getMessage() for r in caplog.records if r.getMessage().startswith(prefix)]


class TestDryRun:
    def test_logs_one_url_per_task(self, wsbench_logs, connector):
        bench = WsBenchmark(RunConfig("ws://h/<id>", total=3), connect=connector)
        urls = bench.dry_run()
        assert urls == ["ws://h/1", "ws://h/2", "ws://h/3"]
        assert _lines(wsbench_logs, "+ ") == ["+ 1 ws://h/1", "+ 2 ws://h/2", "+ 3 ws://h/3"]
        assert connector.calls == []

    def test_applies_catalog(self, connector):
        catalog = QueryCatalog.from_lines(['{"a":"1"}', '{"b":"2"}'])
        bench = WsBenchmark(RunConfig("http://h/x", total=4), catalog, connect=connector)
        assert bench.dry_run() == [
            "ws://h/x?b=2",
            "ws://h/x?a=1",
            "ws://h/x?b=2",
            "ws://h/x?a=1",
        ]

    def test_unresolvable_url_logged_and_skipped(self, wsbench_logs):
        bench = WsBenchmark(RunConfig("ws://[::<id>/x", total=2))
        assert bench.dry_run() == []
        assert len(_lines(wsbench_logs, "get url ")) == 2

    def test_host_with_space_is_not_logged_as_url(self, wsbench_logs):
        bench = WsBenchmark(RunConfig("ws://h h/<id>", total=1))
        assert bench.dry_run() == []
        assert _lines(wsbench_logs, "+ ") == []
        assert len(_lines(wsbench_logs, "get url 1 err:")) == 1


class TestRun:
    @pytest.mark.asyncio
    async def test_runs_every_task_once(self, wsbench_logs, make_connection, make_connector):
        connector = make_connector(lambda url: make_connection([url]))
        stream = io.BytesIO()
        config = RunConfig("ws://h/<id>", total=6, concurrency=3, output="-")
        stats = await WsBenchmark(config, connect=connector, stream=stream).run()

        assert sorted(url for url, _ in connector.calls) == sorted(
            f"ws://h/{i}" for i in range(1, 7)
        )
        assert sorted(stream.getvalue().splitlines()) == sorted(
            f"ws://h/{i}".encode() for i in range(1, 7)
        )
        assert stats["started"] == 6
        assert stats["errors"] == {"StreamError": 6}
        assert len(_lines(wsbench_logs, "+ ")) == 6
        assert len(_lines(wsbench_logs, "run task ")) == 6
        assert len(_lines(wsbench_logs, "done: 6 tasks")) == 1

    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_others(self, make_connection, make_connector):
        def factory(url):
            if url.endswith("/2"):
                raise RuntimeError("handshake rejected")
            return make_connection()

        connector = make_connector(factory)
        config = RunConfig("ws://h/<id>", total=4, concurrency=2, output="")
        stats = await WsBenchmark(config, connect=connector).run()

        assert len(connector.calls) == 4
        assert stats["errors"] == {"ConnectError": 1, "StreamError": 3}

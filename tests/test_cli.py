"""Tests for the command line surface."""

from unittest.mock import AsyncMock, patch

import pytest

from wsbench import cli
from wsbench.types import RunConfig, resolve_total


class TestResolveTotal:
    def test_explicit_total_kept(self):
        assert resolve_total(10, 2, 0) == 10

    def test_defaults_to_catalog_size(self):
        assert resolve_total(0, 1, 5) == 5

    def test_explicit_total_wins_over_catalog(self):
        assert resolve_total(3, 1, 5) == 3

    def test_raised_to_concurrency(self):
        assert resolve_total(2, 8, 0) == 8
        assert resolve_total(0, 1, 0) == 1


class TestParser:
    def test_defaults(self):
        args = cli.build_parser().parse_args(["ws://h"])
        assert args.total == 0
        assert args.concurrency == 1
        assert args.output == "-"
        assert args.queries == ""
        assert args.dry_run is False
        assert args.timeout == 0.0

    def test_single_dash_flags(self):
        args = cli.build_parser().parse_args(
            ["-n", "5", "-c", "2", "-q", "q.txt", "-o", "", "-dryrun", "ws://h/<id>"]
        )
        assert (args.total, args.concurrency, args.queries, args.output) == (5, 2, "q.txt", "")
        assert args.dry_run is True
        assert args.url == "ws://h/<id>"

    def test_negative_count_rejected(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["-n", "-3", "ws://h"])


class TestMain:
    def test_missing_url_prints_usage(self, capsys):
        assert cli.main([]) == 1
        assert "usage: wsbm" in capsys.readouterr().err

    def test_dry_run_logs_urls(self, wsbench_logs):
        assert cli.main(["-dryrun", "-n", "3", "ws://h/<id>"]) == 0
        messages = [r.getMessage() for r in wsbench_logs.records]
        assert "request: 3, concurrency:1" in messages
        assert [m for m in messages if m.startswith("+ ")] == [
            "+ 1 ws://h/1",
            "+ 2 ws://h/2",
            "+ 3 ws://h/3",
        ]

    def test_total_from_query_file(self, tmp_path, wsbench_logs):
        queries = tmp_path / "q.txt"
        queries.write_text("a=1\nbad=%zz\nb=2\n")
        assert cli.main(["-dryrun", "-q", str(queries), "http://h/x"]) == 0
        messages = [r.getMessage() for r in wsbench_logs.records]
        assert "request: 2, concurrency:1" in messages
        assert "+ 1 ws://h/x?b=2" in messages
        assert "+ 2 ws://h/x?a=1" in messages

    def test_unreadable_query_file_is_fatal(self, tmp_path):
        assert cli.main(["-q", str(tmp_path / "missing"), "ws://h"]) == 1

    def test_live_run_builds_config(self):
        with patch.object(cli.WsBenchmark, "run", new_callable=AsyncMock) as run, \
                patch.object(cli, "WsBenchmark", wraps=cli.WsBenchmark) as bench_cls:
            assert cli.main(["-n", "4", "-c", "2", "-o", "", "ws://h/<id>"]) == 0
        config = bench_cls.call_args[0][0]
        assert config == RunConfig(url="ws://h/<id>", total=4, concurrency=2, output="")
        run.assert_awaited_once()

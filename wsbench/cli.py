# =============================================================================
# wsbench -- Command Line
# =============================================================================

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from ._logging import logger
from ._version import __version__
from .benchmark import WsBenchmark
from .constants import DEFAULT_CONCURRENCY, DEFAULT_OUTPUT, DEFAULT_TIMEOUT
from .errors import ConfigError
from .queries import QueryCatalog
from .types import RunConfig, resolve_total

USAGE = "%(prog)s [options] <url>"
DESCRIPTION = "WebSocket connection benchmark. '<id>' in url will be replaced by connection id."


def _uint(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid unsigned integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"invalid unsigned integer: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wsbm",
        usage=USAGE,
        description=DESCRIPTION,
    )
    parser.add_argument("url", nargs="?", default="",
                        help="WebSocket URL template")
    parser.add_argument("-n", dest="total", type=_uint, default=0,
                        help="Total request")
    parser.add_argument("-c", dest="concurrency", type=_uint, default=DEFAULT_CONCURRENCY,
                        help="Concurrency")
    parser.add_argument("-q", dest="queries", default="",
                        help="Text file contains url query per line, json or plain text")
    parser.add_argument("-o", dest="output", default=DEFAULT_OUTPUT,
                        help="Output file, '-':stdout, '':null, 'filepath':'filepath.<id>'")
    parser.add_argument("-dryrun", dest="dry_run", action="store_true",
                        help="Dryrun")
    parser.add_argument("-t", dest="timeout", type=float, default=DEFAULT_TIMEOUT,
                        help="Per-task deadline in seconds (default: 0, none)")
    parser.add_argument("-v", dest="verbose", action="store_true",
                        help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.url:
        parser.print_help(sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    try:
        catalog = QueryCatalog.load(args.queries or None)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    concurrency = max(args.concurrency, 1)
    config = RunConfig(
        url=args.url,
        total=resolve_total(args.total, concurrency, len(catalog)),
        concurrency=concurrency,
        output=args.output,
        queries_path=args.queries or None,
        dry_run=args.dry_run,
        timeout=max(args.timeout, 0.0),
    )
    logger.info("request: %d, concurrency:%d", config.total, config.concurrency)

    bench = WsBenchmark(config, catalog)
    if config.dry_run:
        bench.dry_run()
    else:
        asyncio.run(bench.run())
    return 0


def run() -> None:
    sys.exit(main())

# =============================================================================
# wsbench -- Query Catalog
# =============================================================================
#
# Per-task query overrides, one per line. A line starting with "{" is a
# JSON object, anything else is a URL-encoded query string.
# =============================================================================

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from urllib.parse import unquote_plus

from ._logging import logger
from .errors import ConfigError, QueryParseError

QueryOverride = Mapping[str, tuple[str, ...]]

BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _stringify(value: object) -> str:
    """Text form of a JSON value.

    Integral floats print without a fraction or exponent:
    1000000.0 -> "1000000".
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return json.dumps(value, separators=(",", ":"))


def parse_json_line(line: str) -> QueryOverride:
    """Parse a JSON object into a single-valued-per-key override."""
    try:
        node = json.loads(line)
    except ValueError as exc:
        raise QueryParseError(str(exc)) from exc
    if not isinstance(node, dict):
        raise QueryParseError(f"expected a JSON object, got {type(node).__name__}")
    return MappingProxyType({name: (_stringify(value),) for name, value in node.items()})


def parse_query_line(line: str) -> QueryOverride:
    """Parse ``key=value&key2=value2``; repeated keys keep every value."""
    query: dict[str, list[str]] = {}
    for pair in line.split("&"):
        if not pair:
            continue
        if ";" in pair:
            raise QueryParseError("invalid semicolon separator in query")
        key, _, value = pair.partition("=")
        match = BAD_ESCAPE.search(pair)
        if match:
            raise QueryParseError(
                f"invalid URL escape {pair[match.start():match.start() + 3]!r}"
            )
        # Non-UTF-8 escapes survive as surrogates and re-encode to the same bytes.
        key = unquote_plus(key, errors="surrogateescape")
        value = unquote_plus(value, errors="surrogateescape")
        query.setdefault(key, []).append(value)
    return MappingProxyType({name: tuple(values) for name, values in query.items()})


def parse_line(line: str | bytes) -> QueryOverride:
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise QueryParseError(str(exc)) from exc
    if line.startswith("{"):
        return parse_json_line(line)
    return parse_query_line(line)


class QueryCatalog(Sequence[QueryOverride]):
    """Ordered, immutable list of query overrides.

    Task ``id`` uses the override at ``id % len(catalog)``. An empty
    catalog makes query merging a no-op.
    """

    def __init__(self, overrides: Iterable[QueryOverride] = ()) -> None:
        self._overrides = tuple(overrides)

    @classmethod
    def from_lines(cls, lines: Iterable[str | bytes]) -> QueryCatalog:
        """Build a catalog, skipping blank lines and lines that fail to parse."""
        overrides = []
        for raw in lines:
            line = raw.strip()
            if not line:
                continue
            try:
                overrides.append(parse_line(line))
            except QueryParseError as exc:
                logger.warning("parse line %s err:%s", line, exc)
        return cls(overrides)

    @classmethod
    def load(cls, path: str | None) -> QueryCatalog:
        """Load the catalog from *path*; no path gives an empty catalog.

        Raises:
            ConfigError: If the file cannot be opened or read.
        """
        if not path:
            return cls()
        try:
            with open(path, "rb") as fh:
                lines = fh.readlines()
        except OSError as exc:
            raise ConfigError(f"cannot read query file {path}: {exc}") from exc
        catalog = cls.from_lines(lines)
        logger.debug("Loaded %d query overrides from %s", len(catalog), path)
        return catalog

    def select(self, task_id: int) -> QueryOverride | None:
        if not self._overrides:
            return None
        return self._overrides[task_id % len(self._overrides)]

    def __getitem__(self, index):
        return self._overrides[index]

    def __len__(self) -> int:
        return len(self._overrides)

    def __repr__(self) -> str:
        return f"QueryCatalog({len(self._overrides)} overrides)"

# =============================================================================
# wsbench -- URL Resolver
# =============================================================================
#
# Template -> concrete per-task URL. Pure; safe to call from any worker.
# =============================================================================

from __future__ import annotations

import re
from urllib.parse import SplitResult, parse_qs, urlencode, urlsplit

from .constants import ID_PLACEHOLDER, SCHEME_MAP
from .errors import ResolveError
from .queries import BAD_ESCAPE, QueryCatalog, QueryOverride

_CONTROL_CHAR = re.compile(r"[\x00-\x1f\x7f]")
_VALID_HOST = re.compile(
    r"(\[[0-9A-Za-z:.%_~-]*\]|[0-9A-Za-z.!$&'()*+,;=_~%-]*)(:[0-9]*)?"
)


def _merge_query(query: str, override: QueryOverride) -> str:
    params = parse_qs(query, keep_blank_values=True, errors="surrogateescape")
    for name, values in override.items():
        params[name] = list(values)
    return urlencode(
        sorted(params.items()), doseq=True, encoding="utf-8", errors="surrogateescape"
    )


def _parse(raw_url: str) -> SplitResult:
    if _CONTROL_CHAR.search(raw_url):
        raise ValueError("invalid control character in URL")
    match = BAD_ESCAPE.search(raw_url)
    if match:
        raise ValueError(f"invalid URL escape {raw_url[match.start():match.start() + 3]!r}")
    url = urlsplit(raw_url)
    url.port  # validates the port component
    if not _VALID_HOST.fullmatch(url_host(url)):
        raise ValueError(f"invalid character in host name {url_host(url)!r}")
    return url


def resolve_url(
    template: str,
    task_id: int,
    catalog: QueryCatalog | None = None,
) -> SplitResult:
    """Resolve *template* for *task_id*.

    Every ``<id>`` is replaced by the decimal id, the catalog override
    for the task (if any) overwrites same-named query keys, and
    ``http``/``https`` become ``ws``/``wss``.

    Raises:
        ResolveError: If the substituted string is not a valid URL.
    """
    raw_url = template.replace(ID_PLACEHOLDER, str(task_id))
    try:
        url = _parse(raw_url)
    except ValueError as exc:
        raise ResolveError(f"parse url {raw_url} err:{exc}") from exc

    override = catalog.select(task_id) if catalog is not None else None
    if override is not None:
        url = url._replace(query=_merge_query(url.query, override))

    scheme = SCHEME_MAP.get(url.scheme)
    if scheme is not None:
        url = url._replace(scheme=scheme)
    return url


def url_host(url: SplitResult) -> str:
    """``host[:port]`` of *url*, without userinfo."""
    return url.netloc.rpartition("@")[2]


def origin_for(url: SplitResult) -> str:
    return f"http://{url_host(url)}"

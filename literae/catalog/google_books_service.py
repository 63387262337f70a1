"""
Google Books integration for the catalogue proxy.

The proxy does not reshape anything: it builds the upstream URL,
performs the request and hands the decoded JSON back to the route
untouched. It exposes two functions:

* ``search_volumes()`` — search volumes matching a free-text query,
  optionally restricted to a genre (a Google Books ``subject:`` term),
  with ``startIndex``/``maxResults`` pagination.

* ``get_volume()`` — retrieve a single volume by its Google Books ID.

Only the Python standard library is used for HTTP requests. A non-2xx
answer from Google Books is raised as ``UpstreamError`` carrying the
upstream status so the route can forward it; transport and decoding
failures propagate as ordinary exceptions. Nothing is cached and
nothing is retried.
"""

from __future__ import annotations

import json
import logging
import re
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, Optional

from ..settings import settings


logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

DEFAULT_QUERY = "book"
DEFAULT_START_INDEX = 0
DEFAULT_MAX_RESULTS = 10


class UpstreamError(Exception):
    """Google Books answered with a non-2xx status."""

    def __init__(self, status: int, url: str) -> None:
        super().__init__(f"Google Books returned HTTP {status} for {url}")
        self.status = status
        self.url = url


def _redact(url: str) -> str:
    return re.sub(r"([?&]key=)[^&]*", r"\1***", url)


def _http_get_json(url: str) -> Any:
    """Perform an HTTP GET and return the parsed JSON body.

    Raises ``UpstreamError`` when the provider answers with an error
    status. Network and JSON errors are left to the caller.
    """
    request = urllib.request.Request(url, headers={"Accept": "application/json"})
    try:
        with urllib.request.urlopen(request, timeout=settings.UPSTREAM_TIMEOUT) as response:
            data = response.read().decode("utf-8")
    except urllib.error.HTTPError as exc:
        logger.warning("Google Books request to %s returned status %s", _redact(url), exc.code)
        raise UpstreamError(exc.code, _redact(url)) from exc
    return json.loads(data)


def parse_int(value: Optional[str], default: int) -> int:
    """Read the leading integer of ``value``.

    Blank, unparseable or zero values yield ``default``, so
    ``"20abc"`` gives 20 and ``"0"`` gives the default.
    """
    if value is None:
        return default
    m = re.match(r"\s*([+-]?\d+)", str(value))
    if not m:
        return default
    return int(m.group(1)) or default


def build_search_query(q: Optional[str], genre: Optional[str]) -> str:
    """Compose the Google Books ``q`` parameter.

    An empty query searches for ``"book"``. A genre other than
    ``"all"`` (any case) is appended as a ``subject:`` filter.
    """
    query = q or DEFAULT_QUERY
    if genre and genre.lower() != "all":
        query += f"+subject:{genre}"
    return query


def _with_key(params: Dict[str, Any]) -> Dict[str, Any]:
    if settings.GOOGLE_BOOKS_API_KEY:
        params["key"] = settings.GOOGLE_BOOKS_API_KEY
    return params


def build_search_url(
    q: Optional[str] = None,
    genre: Optional[str] = None,
    start_index: int = DEFAULT_START_INDEX,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> str:
    params = _with_key(
        {
            "q": build_search_query(q, genre),
            "startIndex": start_index,
            "maxResults": max_results,
        }
    )
    # quote (not quote_plus) so a literal "+" in the query is sent as %2B
    encoded = urllib.parse.urlencode(params, quote_via=urllib.parse.quote)
    return f"{settings.GOOGLE_BOOKS_API_URL}?{encoded}"


def build_volume_url(volume_id: str) -> str:
    url = f"{settings.GOOGLE_BOOKS_API_URL}/{urllib.parse.quote(volume_id, safe='')}"
    params = _with_key({})
    if params:
        url += "?" + urllib.parse.urlencode(params)
    return url


def search_volumes(
    q: Optional[str] = None,
    genre: Optional[str] = None,
    start_index: int = DEFAULT_START_INDEX,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> Any:
    url = build_search_url(q, genre, start_index, max_results)
    logger.info("Google Books search: %s", _redact(url))
    return _http_get_json(url)


def get_volume(volume_id: str) -> Any:
    url = build_volume_url(volume_id)
    logger.info("Google Books volume: %s", _redact(url))
    return _http_get_json(url)

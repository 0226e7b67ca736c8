"""Stylesheet/page source loader: local files and remote URLs, fetched concurrently."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Sequence
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from cssprune.errors import FetchError, SourceNotFoundError, SourceReadError

__all__ = ["is_remote", "local_path", "load_source", "load_sources"]

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "cssprune"


def is_remote(source: str) -> bool:
    """Return True for http(s) URLs and protocol-relative ``//host/...`` sources."""
    return source.startswith(("http://", "https://", "//"))


def local_path(source: str) -> str:
    """Return the filesystem path for a local *source*, which may be a ``file://`` URL."""
    if source.startswith("file://"):
        return url2pathname(urlparse(source).path)
    return source


def _fetch(client: httpx.Client, url: str) -> str:
    if url.startswith("//"):
        url = "https:" + url
    logger.debug("Fetching %s", url)
    try:
        resp = client.get(url)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}", url=url, cause=exc) from exc
    return resp.text


def _read(path: str) -> str:
    p = Path(local_path(path))
    if not p.is_file():
        raise SourceNotFoundError(str(p.resolve()))
    logger.debug("Reading %s", p)
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(str(p), cause=exc) from exc


def load_source(source: str, client: httpx.Client) -> str:
    """Return the text of one local path or URL."""
    if is_remote(source):
        return _fetch(client, source)
    return _read(source)


def load_sources(
    sources: Sequence[str],
    *,
    client: httpx.Client | None = None,
    user_agent: str = DEFAULT_USER_AGENT,
    max_workers: int | None = None,
) -> list[str]:
    """Load every source concurrently and return their texts in input order.

    Raises the error of the first failing source (in input order):
    :class:`SourceNotFoundError` for a missing local file, :class:`SourceReadError`
    for one that cannot be read as UTF-8, :class:`FetchError` for a remote
    transport or HTTP status failure.  Nothing is retried.
    """
    if not sources:
        return []

    own_client = client is None
    if client is None:
        client = httpx.Client(headers={"User-Agent": user_agent}, follow_redirects=True)
    try:
        with ThreadPoolExecutor(max_workers=max_workers or len(sources)) as pool:
            return list(pool.map(lambda s: load_source(s, client), sources))
    finally:
        if own_client:
            client.close()

"""End-to-end run: pages -> DOM snapshots -> stylesheets -> pruned CSS."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence
from urllib.parse import urljoin

import httpx

from cssprune.config import PruneConfig
from cssprune.dom.links import extract_stylesheets
from cssprune.dom.snapshot import SoupSnapshot
from cssprune.engine.pruner import iter_selectors, prune
from cssprune.errors import CssPruneError
from cssprune.model.ignore import is_ignored
from cssprune.model.tree import Stylesheet
from cssprune.render.renderer import PageRenderer, is_markup
from cssprune.sources.loader import is_remote, load_source, load_sources, local_path
from cssprune.stylesheet.parser import parse_css
from cssprune.stylesheet.serializer import serialize

__all__ = ["UsageReport", "PruneResult", "load_snapshots", "resolve_href", "collect_stylesheets", "run"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsageReport:
    """Selector usage across the analysed stylesheets (first occurrences, in order)."""

    all: list[str]
    used: list[str]
    unused: list[str]


@dataclass(frozen=True)
class PruneResult:
    css: str
    stylesheet: Stylesheet
    sources: list[str]
    report: UsageReport | None = None


def _unique(items) -> list[str]:
    return list(dict.fromkeys(items))


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


def _snapshot(html: str, source: str, config: PruneConfig) -> SoupSnapshot:
    return SoupSnapshot(html, source=source, unmatchable_pseudos=config.unmatchable_pseudos)


def _static_snapshots(
    pages: Sequence[str], config: PruneConfig, client: httpx.Client | None
) -> list[SoupSnapshot]:
    own_client = client is None
    if client is None:
        client = httpx.Client(headers={"User-Agent": config.user_agent}, follow_redirects=True)
    snapshots = []
    try:
        for page in pages:
            try:
                html = page if is_markup(page) else load_source(page, client)
            except CssPruneError as exc:
                if not config.skip_failed_pages:
                    raise
                logger.warning("Skipping page %s: %s", page, exc)
                continue
            snapshots.append(_snapshot(html, page, config))
    finally:
        if own_client:
            client.close()
    return snapshots


def _rendered_snapshots(
    pages: Sequence[str], config: PruneConfig, renderer: PageRenderer | None
) -> list[SoupSnapshot]:
    renderer = renderer or PageRenderer(config.render)
    snapshots = []
    for result in renderer.iter_render(pages):
        if isinstance(result, CssPruneError):
            if not config.skip_failed_pages:
                raise result
            logger.warning("Skipping page %s: %s", result.source or "<inline html>", result)
            continue
        snapshots.append(_snapshot(result.html, result.source, config))
    return snapshots


def load_snapshots(
    pages: Sequence[str],
    config: PruneConfig,
    *,
    renderer: PageRenderer | None = None,
    client: httpx.Client | None = None,
) -> list[SoupSnapshot]:
    """Turn every page into a DOM snapshot, rendered or read as-is."""
    if config.javascript:
        return _rendered_snapshots(pages, config, renderer)
    return _static_snapshots(pages, config, client)


# ---------------------------------------------------------------------------
# Stylesheets
# ---------------------------------------------------------------------------


def resolve_href(href: str, page: str, config: PruneConfig) -> str:
    """Resolve a stylesheet *href* found on *page* to a loadable source."""
    if is_remote(href):
        return href
    if is_remote(page):
        return urljoin(page, href)

    page_dir = Path.cwd() if is_markup(page) else Path(local_path(page)).parent
    local = href.split("#", 1)[0].split("?", 1)[0]
    if local.startswith("/"):
        base = Path(config.html_root) if config.html_root else page_dir
        return str(base / local.lstrip("/"))
    base = Path(config.css_path) if config.css_path else page_dir
    return str(base / local)


def collect_stylesheets(snapshots: Sequence[SoupSnapshot], config: PruneConfig) -> list[str]:
    """Return the de-duplicated stylesheet sources used by *snapshots*.

    ``config.stylesheets`` replaces link discovery when given.  Sources
    matching ``config.ignore_sheets`` are dropped.
    """
    if config.stylesheets:
        sources = list(config.stylesheets)
    else:
        sources = [
            resolve_href(href, snap.source, config)
            for snap in snapshots
            for href in extract_stylesheets(snap, config.media)
        ]
    kept = []
    for source in _unique(sources):
        if is_ignored(source, config.ignore_sheets):
            logger.info("Ignoring stylesheet %s", source)
            continue
        kept.append(source)
    return kept


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def _report(before: Stylesheet, after: Stylesheet) -> UsageReport:
    all_selectors = _unique(iter_selectors(before.rules))
    used = _unique(iter_selectors(after.rules))
    used_set = set(used)
    return UsageReport(
        all=all_selectors,
        used=used,
        unused=[s for s in all_selectors if s not in used_set],
    )


def run(
    pages: Sequence[str],
    config: PruneConfig | None = None,
    *,
    renderer: PageRenderer | None = None,
    client: httpx.Client | None = None,
) -> PruneResult:
    """Prune the stylesheets used by *pages* down to the rules they exercise."""
    config = config or PruneConfig()
    snapshots = load_snapshots(pages, config, renderer=renderer, client=client)
    sources = collect_stylesheets(snapshots, config)
    if not sources and not config.raw:
        raise CssPruneError("No stylesheets found to process")

    texts = load_sources(sources, client=client, user_agent=config.user_agent)
    if config.raw:
        texts.append(config.raw)
    tree = parse_css("\n".join(texts), config.conditional_keywords)

    pruned = prune(tree, snapshots, config.ignore)
    return PruneResult(
        css=serialize(pruned),
        stylesheet=pruned,
        sources=sources,
        report=_report(tree, pruned) if config.report else None,
    )

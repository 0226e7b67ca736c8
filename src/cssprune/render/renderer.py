"""Page renderer: runs each HTML entry point through a headless browser."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from cssprune.config import RenderOptions
from cssprune.errors import RenderError, RenderTimeoutError, SourceNotFoundError

__all__ = ["RenderedPage", "PageRenderer", "classify_diagnostics", "is_markup", "page_url"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedPage:
    """The DOM of one entry point as the browser saw it after scripts ran."""

    source: str
    url: str
    html: str


def is_markup(source: str) -> bool:
    """Return True if *source* is literal HTML rather than a path or URL."""
    return source.lstrip().startswith("<")


def page_url(source: str) -> str:
    """Return the URL the browser should open for a path or URL *source*."""
    if source.startswith(("http://", "https://", "file://")):
        return source
    path = Path(source)
    if not path.is_file():
        raise SourceNotFoundError(str(path.resolve()))
    return path.resolve().as_uri()


def classify_diagnostics(messages: Iterable[str], benign: Iterable[str]) -> list[str]:
    """Return the diagnostics that are not known to be harmless."""
    markers = tuple(benign)
    return [m for m in messages if m.strip() and not any(b in m for b in markers)]


class PageRenderer:
    """Render HTML entry points with playwright's Chromium.

    Each page gets its own browser context, so no two renders share
    cookies, storage or cache.  Failures are not retried.
    """

    def __init__(
        self,
        options: RenderOptions | None = None,
        playwright_factory: Callable[[], Any] = sync_playwright,
    ) -> None:
        self._options = options or RenderOptions()
        self._playwright_factory = playwright_factory

    def render(self, source: str) -> RenderedPage:
        return self.render_all([source])[0]

    def render_all(self, sources: Sequence[str]) -> list[RenderedPage]:
        """Render *sources* in order; the first failing page raises."""
        pages = []
        for page in self.iter_render(sources):
            if isinstance(page, RenderError):
                raise page
            pages.append(page)
        return pages

    def iter_render(self, sources: Sequence[str]) -> Iterable[RenderedPage | RenderError]:
        """Yield a RenderedPage, or the RenderError it failed with, per source.

        Lets callers decide per page whether to skip a failure or abort.
        """
        if not sources:
            return
        with self._playwright_factory() as pw:
            try:
                browser = pw.chromium.launch(headless=self._options.headless)
            except PlaywrightError as exc:
                raise RenderError(f"Failed to launch browser: {exc}", cause=exc) from exc
            try:
                for source in sources:
                    try:
                        yield self._render_one(browser, source)
                    except RenderError as exc:
                        yield exc
            finally:
                browser.close()

    def _render_one(self, browser: Any, source: str) -> RenderedPage:
        opts = self._options
        diagnostics: list[str] = []
        context = browser.new_context()
        try:
            page = context.new_page()
            page.on("pageerror", lambda exc: diagnostics.append(str(exc)))
            page.on(
                "console",
                lambda msg: diagnostics.append(msg.text) if msg.type == "error" else None,
            )
            try:
                if is_markup(source):
                    url = "about:blank"
                    page.set_content(source, timeout=opts.timeout_ms, wait_until="load")
                else:
                    url = page_url(source)
                    page.goto(url, timeout=opts.timeout_ms, wait_until="load")
                if opts.settle_ms:
                    page.wait_for_timeout(opts.settle_ms)
                html = page.content()
            except PlaywrightTimeoutError as exc:
                raise RenderTimeoutError(
                    f"Timed out rendering {_label(source)} after {opts.timeout_ms}ms",
                    source=source,
                    cause=exc,
                ) from exc
            except PlaywrightError as exc:
                raise RenderError(
                    f"Failed to render {_label(source)}: {exc}", source=source, cause=exc
                ) from exc
            except SourceNotFoundError as exc:
                raise RenderError(str(exc), source=source, cause=exc) from exc
        finally:
            context.close()

        errors = classify_diagnostics(diagnostics, opts.benign)
        if errors:
            raise RenderError(
                f"Errors while rendering {_label(source)}: {errors[0]}",
                source=source,
                diagnostics=errors,
            )
        logger.info("Rendered %s (%d bytes)", _label(source), len(html))
        return RenderedPage(source=source, url=url, html=html)


def _label(source: str) -> str:
    return "<inline html>" if is_markup(source) else source

"""Tests for the playwright page renderer, driven through a fake browser."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from cssprune.config import BENIGN_DIAGNOSTICS, RenderOptions
from cssprune.errors import RenderError, RenderTimeoutError
from cssprune.render.renderer import PageRenderer, classify_diagnostics, is_markup, page_url


# ---------------------------------------------------------------------------
# Fake playwright object graph
# ---------------------------------------------------------------------------


@dataclass
class FakeConsoleMessage:
    type: str
    text: str


@dataclass
class PageScript:
    """What a fake page does when loaded."""

    html: str = "<html><body></body></html>"
    console: list[FakeConsoleMessage] = field(default_factory=list)
    page_errors: list[str] = field(default_factory=list)
    raises: Exception | None = None


class FakePage:
    def __init__(self, browser: FakeBrowser) -> None:
        self._browser = browser
        self._handlers: dict[str, list] = {}
        self._script = PageScript()
        self.waited: list[int] = []

    def on(self, event, handler):
        self._handlers.setdefault(event, []).append(handler)

    def _load(self, key: str, timeout: float) -> None:
        self._browser.calls.append(("load", key, timeout))
        self._script = self._browser.scripts.get(key, PageScript())
        if self._script.raises is not None:
            raise self._script.raises
        for msg in self._script.console:
            for h in self._handlers.get("console", []):
                h(msg)
        for err in self._script.page_errors:
            for h in self._handlers.get("pageerror", []):
                h(Exception(err))

    def goto(self, url, timeout=None, wait_until=None):
        self._load(url, timeout)

    def set_content(self, html, timeout=None, wait_until=None):
        self._browser.scripts.setdefault(html, PageScript(html=html))
        self._load(html, timeout)

    def wait_for_timeout(self, ms):
        self.waited.append(ms)

    def content(self):
        return self._script.html


class FakeContext:
    def __init__(self, browser: FakeBrowser) -> None:
        self._browser = browser

    def new_page(self):
        page = FakePage(self._browser)
        self._browser.pages.append(page)
        return page

    def close(self):
        self._browser.contexts_closed += 1


class FakeBrowser:
    def __init__(self, scripts: dict[str, PageScript]) -> None:
        self.scripts = scripts
        self.calls: list[tuple] = []
        self.pages: list[FakePage] = []
        self.contexts_created = 0
        self.contexts_closed = 0
        self.closed = False

    def new_context(self):
        self.contexts_created += 1
        return FakeContext(self)

    def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser: FakeBrowser, launch_error: Exception | None = None) -> None:
        self._browser = browser
        self._launch_error = launch_error

    def launch(self, headless=True):
        if self._launch_error is not None:
            raise self._launch_error
        return self._browser


class FakePlaywright:
    def __init__(self, browser: FakeBrowser, launch_error: Exception | None = None) -> None:
        self.chromium = FakeChromium(browser, launch_error)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _renderer(scripts: dict[str, PageScript], options: RenderOptions | None = None, **kwargs):
    browser = FakeBrowser(scripts)
    renderer = PageRenderer(options or RenderOptions(), lambda: FakePlaywright(browser, **kwargs))
    return renderer, browser


# ---------------------------------------------------------------------------
# Diagnostics classification
# ---------------------------------------------------------------------------


class TestClassifyDiagnostics:
    def test_benign_messages_dropped(self):
        messages = [
            "2024 phantomjs WARNING: Method userSpaceScaleFactor in class NSView is deprecated",
            "CoreText performance note: Client called CTFontCreateWithName()",
        ]
        assert classify_diagnostics(messages, BENIGN_DIAGNOSTICS) == []

    def test_other_messages_kept(self):
        assert classify_diagnostics(["ReferenceError: x"], BENIGN_DIAGNOSTICS) == ["ReferenceError: x"]

    def test_blank_messages_dropped(self):
        assert classify_diagnostics(["", "  \n"], ()) == []


# ---------------------------------------------------------------------------
# Source handling
# ---------------------------------------------------------------------------


class TestSources:
    def test_markup_detection(self):
        assert is_markup("  <html></html>")
        assert not is_markup("index.html")

    def test_page_url_for_local_file(self, tmp_path):
        page = tmp_path / "index.html"
        page.write_text("<p></p>", encoding="utf-8")
        assert page_url(str(page)) == page.resolve().as_uri()

    def test_page_url_passthrough(self):
        assert page_url("https://example.test/") == "https://example.test/"


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRender:
    def test_renders_url(self):
        renderer, browser = _renderer({"https://a.test/": PageScript(html="<p class='x'></p>")})
        page = renderer.render("https://a.test/")
        assert page.html == "<p class='x'></p>"
        assert page.url == "https://a.test/"
        assert browser.closed

    def test_renders_markup(self):
        renderer, _ = _renderer({})
        page = renderer.render("<p>inline</p>")
        assert page.html == "<p>inline</p>"
        assert page.url == "about:blank"

    def test_each_page_gets_own_context(self):
        scripts = {"https://a.test/1": PageScript(), "https://a.test/2": PageScript()}
        renderer, browser = _renderer(scripts)
        pages = renderer.render_all(["https://a.test/1", "https://a.test/2"])
        assert [p.source for p in pages] == ["https://a.test/1", "https://a.test/2"]
        assert browser.contexts_created == 2
        assert browser.contexts_closed == 2

    def test_timeout_and_settle_applied(self):
        renderer, browser = _renderer(
            {"https://a.test/": PageScript()}, RenderOptions(timeout_ms=1234, settle_ms=50)
        )
        renderer.render("https://a.test/")
        assert browser.calls == [("load", "https://a.test/", 1234)]
        assert browser.pages[0].waited == [50]

    def test_benign_console_output_ignored(self):
        script = PageScript(console=[FakeConsoleMessage("error", "CoreText performance note: slow")])
        renderer, _ = _renderer({"https://a.test/": script})
        assert renderer.render("https://a.test/").source == "https://a.test/"

    def test_console_warnings_ignored(self):
        script = PageScript(console=[FakeConsoleMessage("warning", "deprecated API")])
        renderer, _ = _renderer({"https://a.test/": script})
        renderer.render("https://a.test/")


class TestRenderFailures:
    def test_page_error_is_fatal(self):
        script = PageScript(page_errors=["ReferenceError: foo is not defined"])
        renderer, _ = _renderer({"https://a.test/": script})
        with pytest.raises(RenderError) as exc_info:
            renderer.render("https://a.test/")
        assert exc_info.value.diagnostics == ["ReferenceError: foo is not defined"]
        assert exc_info.value.source == "https://a.test/"

    def test_console_error_is_fatal(self):
        script = PageScript(console=[FakeConsoleMessage("error", "Failed to load resource")])
        renderer, _ = _renderer({"https://a.test/": script})
        with pytest.raises(RenderError):
            renderer.render("https://a.test/")

    def test_timeout(self):
        script = PageScript(raises=PlaywrightTimeoutError("Timeout 10ms exceeded."))
        renderer, browser = _renderer({"https://a.test/": script})
        with pytest.raises(RenderTimeoutError):
            renderer.render("https://a.test/")
        assert browser.contexts_closed == 1

    def test_navigation_error(self):
        script = PageScript(raises=PlaywrightError("net::ERR_NAME_NOT_RESOLVED"))
        renderer, _ = _renderer({"https://a.test/": script})
        with pytest.raises(RenderError) as exc_info:
            renderer.render("https://a.test/")
        assert not isinstance(exc_info.value, RenderTimeoutError)

    def test_missing_local_page(self, tmp_path):
        renderer, _ = _renderer({})
        with pytest.raises(RenderError):
            renderer.render(str(tmp_path / "missing.html"))

    def test_launch_failure(self):
        renderer, _ = _renderer({}, launch_error=PlaywrightError("Executable doesn't exist"))
        with pytest.raises(RenderError):
            renderer.render("https://a.test/")

    def test_iter_render_yields_failures(self):
        scripts = {
            "https://a.test/bad": PageScript(page_errors=["boom"]),
            "https://a.test/good": PageScript(),
        }
        renderer, _ = _renderer(scripts)
        results = list(renderer.iter_render(["https://a.test/bad", "https://a.test/good"]))
        assert isinstance(results[0], RenderError)
        assert results[1].source == "https://a.test/good"

"""Error hierarchy for cssprune."""
from __future__ import annotations


class CssPruneError(Exception):
    """Base error for all cssprune errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class SelectorQueryError(CssPruneError):
    """A DOM snapshot could not evaluate a selector (unsupported syntax)."""

    def __init__(self, message: str, *, selector: str = "", cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.selector = selector


# ---------------------------------------------------------------------------
# Source loading
# ---------------------------------------------------------------------------


class SourceNotFoundError(CssPruneError):
    """A local stylesheet or page could not be opened."""

    def __init__(self, path: str) -> None:
        super().__init__(f"could not open {path}")
        self.path = path


class SourceReadError(CssPruneError):
    """A local source exists but could not be read or decoded."""

    def __init__(self, path: str, *, cause: Exception | None = None) -> None:
        super().__init__(f"could not read {path}: {cause}", cause=cause)
        self.path = path


class FetchError(CssPruneError):
    """A remote source could not be fetched."""

    def __init__(self, message: str, *, url: str = "", cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.url = url


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class RenderError(CssPruneError):
    """A page could not be rendered, or rendering produced diagnostics."""

    def __init__(
        self,
        message: str,
        *,
        source: str = "",
        diagnostics: list[str] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.source = source
        self.diagnostics = diagnostics or []


class RenderTimeoutError(RenderError):
    """Rendering a page exceeded the configured timeout."""


class ConfigError(CssPruneError):
    """Invalid cssprune configuration."""

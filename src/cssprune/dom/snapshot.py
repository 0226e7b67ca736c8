"""DOM snapshots: queryable documents the selector matcher runs against."""

from __future__ import annotations

import re
from typing import Iterable, Protocol, Sized

import soupsieve
from bs4 import BeautifulSoup

from cssprune.errors import SelectorQueryError

__all__ = ["DomSnapshot", "SoupSnapshot", "UNMATCHABLE_PSEUDOS"]

# Pseudo-classes soupsieve accepts but never matches in a static document.
UNMATCHABLE_PSEUDOS = frozenset(
    {
        "active",
        "current",
        "focus",
        "focus-visible",
        "focus-within",
        "future",
        "host",
        "hover",
        "local-link",
        "past",
        "paused",
        "playing",
        "target",
        "target-within",
        "user-invalid",
        "visited",
    }
)

_QUOTED_RE = re.compile(r'"[^"]*"|\'[^\']*\'')
_PSEUDO_RE = re.compile(r"::?([A-Za-z_-][\w-]*)")


class DomSnapshot(Protocol):
    """A rendered page that can be queried with CSS selectors.

    ``query`` must raise :class:`~cssprune.errors.SelectorQueryError` when
    it cannot evaluate the selector.
    """

    def query(self, selector: str) -> Sized: ...


class SoupSnapshot:
    """A :class:`DomSnapshot` backed by BeautifulSoup and soupsieve.

    Selectors using one of *unmatchable_pseudos* are rejected as
    unsupported, the same way soupsieve rejects pseudo-elements, so the
    matcher falls back to testing their ancestor-testable prefix.
    """

    def __init__(
        self,
        html: str,
        *,
        source: str = "",
        unmatchable_pseudos: Iterable[str] = UNMATCHABLE_PSEUDOS,
    ) -> None:
        self.source = source
        self.soup = BeautifulSoup(html, "html.parser")
        self._unmatchable = frozenset(p.lower() for p in unmatchable_pseudos)

    def query(self, selector: str) -> list:
        if self._uses_unmatchable(selector):
            raise SelectorQueryError(
                f"Selector uses a dynamic pseudo-class: {selector!r}", selector=selector
            )
        try:
            return self.soup.select(selector)
        except (soupsieve.SelectorSyntaxError, NotImplementedError, ValueError) as exc:
            raise SelectorQueryError(str(exc), selector=selector, cause=exc) from exc

    def _uses_unmatchable(self, selector: str) -> bool:
        if not self._unmatchable:
            return False
        bare = _QUOTED_RE.sub('""', selector)
        return any(name.lower() in self._unmatchable for name in _PSEUDO_RE.findall(bare))

    def __repr__(self) -> str:
        return f"SoupSnapshot(source={self.source!r})"

"""Shared test fixtures."""

from __future__ import annotations

import pytest

from cssprune.errors import SelectorQueryError


class FakeDom:
    """A DomSnapshot stand-in with a fixed set of matching / rejected selectors."""

    def __init__(self, matches=(), unsupported=()):
        self.matches = set(matches)
        self.unsupported = set(unsupported)
        self.queries: list[str] = []

    def query(self, selector: str) -> list:
        self.queries.append(selector)
        if selector in self.unsupported:
            raise SelectorQueryError(f"unsupported: {selector}", selector=selector)
        return [selector] if selector in self.matches else []


@pytest.fixture
def fake_dom():
    return FakeDom

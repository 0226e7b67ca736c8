"""Ignore list entries and the ignore-list evaluator."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Union

__all__ = ["IgnoreLiteral", "IgnorePattern", "IgnoreEntry", "parse_ignore_entry", "is_ignored"]

# /body/ or /body/i
_PATTERN_RE = re.compile(r"^/(?P<body>.+)/(?P<flags>i?)$", re.DOTALL)


@dataclass(frozen=True)
class IgnoreLiteral:
    """Exempts a selector that is exactly equal to *value*."""

    value: str

    def matches(self, selector: str) -> bool:
        return selector == self.value


@dataclass(frozen=True)
class IgnorePattern:
    """Exempts any selector the compiled *pattern* finds a match in."""

    pattern: re.Pattern[str]

    @classmethod
    def compile(cls, source: str, flags: int = 0) -> IgnorePattern:
        return cls(pattern=re.compile(source, flags))

    def matches(self, selector: str) -> bool:
        return self.pattern.search(selector) is not None


IgnoreEntry = Union[IgnoreLiteral, IgnorePattern]


def parse_ignore_entry(text: str) -> IgnoreEntry:
    """Turn the textual form used by the CLI and config files into an entry.

    ``/regex/`` (optionally ``/regex/i``) becomes an :class:`IgnorePattern`;
    anything else is taken literally.
    """
    m = _PATTERN_RE.match(text)
    if m is None:
        return IgnoreLiteral(text)
    flags = re.IGNORECASE if m.group("flags") else 0
    return IgnorePattern.compile(m.group("body"), flags)


def is_ignored(selector: str, ignore: Iterable[IgnoreEntry]) -> bool:
    """Return True if *selector* is exempt from removal.

    Entries are checked in order and evaluation stops at the first match.
    """
    return any(entry.matches(selector) for entry in ignore)

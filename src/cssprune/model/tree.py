"""Stylesheet tree model: Rule, ConditionalBlock, Other and Stylesheet dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Rule:
    """A style rule: an ordered selector list plus an opaque declaration payload."""

    selectors: list[str]
    declarations: Any = None


@dataclass(frozen=True)
class ConditionalBlock:
    """A conditional group (e.g. ``@media screen``) scoping nested rule nodes."""

    condition: str
    rules: list[RuleNode] = field(default_factory=list)
    keyword: str = "media"


@dataclass(frozen=True)
class Other:
    """Any node kind not recognized above (comments, @font-face, @keyframes...).

    Passed through unmodified and never pruned.
    """

    payload: Any = None


RuleNode = Union[Rule, ConditionalBlock, Other]


@dataclass(frozen=True)
class Stylesheet:
    """An ordered sequence of rule nodes."""

    rules: list[RuleNode] = field(default_factory=list)

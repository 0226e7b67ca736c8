"""CSS text to :class:`~cssprune.model.tree.Stylesheet`, via tinycss2.

Syntax example::

    /* kept as-is */
    .nav, .nav > a:hover { color: red }
    @media screen { .wide { width: 100% } }
    @font-face { font-family: Foo; src: url(foo.woff) }

Qualified rules become :class:`Rule` (declarations kept as tinycss2 tokens),
block at-rules named in *conditional_keywords* become
:class:`ConditionalBlock`, and everything else becomes :class:`Other`.
"""

from __future__ import annotations

import logging
from typing import Iterable

import tinycss2
from tinycss2.ast import AtRule, Node, QualifiedRule

from cssprune.model.tree import ConditionalBlock, Other, Rule, RuleNode, Stylesheet

__all__ = ["parse_css", "split_selectors"]

logger = logging.getLogger(__name__)


def split_selectors(prelude: list[Node]) -> list[str]:
    """Split a rule prelude on top-level commas into selector strings.

    Whitespace between tokens collapses to a single space.  Commas nested
    inside brackets or functions belong to their block and never split.
    """
    selectors: list[str] = []
    buf: list[str] = []
    for token in prelude:
        if token.type == "literal" and token.value == ",":
            selectors.append("".join(buf).strip())
            buf = []
        elif token.type == "whitespace":
            buf.append(" ")
        else:
            buf.append(token.serialize())
    selectors.append("".join(buf).strip())
    return [s for s in selectors if s]


def _convert(nodes: Iterable[Node], keywords: frozenset[str]) -> list[RuleNode]:
    rules: list[RuleNode] = []
    for node in nodes:
        if node.type == "error":
            logger.warning(
                "Skipping unparseable CSS at %d:%d: %s",
                node.source_line,
                node.source_column,
                node.message,
            )
            continue
        if isinstance(node, QualifiedRule):
            rules.append(Rule(selectors=split_selectors(node.prelude), declarations=node.content))
        elif isinstance(node, AtRule) and node.content is not None and node.lower_at_keyword in keywords:
            nested = tinycss2.parse_rule_list(node.content, skip_comments=False, skip_whitespace=True)
            rules.append(
                ConditionalBlock(
                    condition=tinycss2.serialize(node.prelude).strip(),
                    rules=_convert(nested, keywords),
                    keyword=node.at_keyword,
                )
            )
        else:
            rules.append(Other(payload=node))
    return rules


def parse_css(source: str, conditional_keywords: Iterable[str] = ("media",)) -> Stylesheet:
    """Parse CSS *source* into a Stylesheet, preserving source order."""
    keywords = frozenset(k.lower() for k in conditional_keywords)
    nodes = tinycss2.parse_stylesheet(source, skip_comments=False, skip_whitespace=True)
    return Stylesheet(rules=_convert(nodes, keywords))

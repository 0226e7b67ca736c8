"""Rule pruner: removes rules whose selectors are not used by any page."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterator, Sequence

from cssprune.dom.snapshot import DomSnapshot
from cssprune.engine.matcher import is_used
from cssprune.model.ignore import IgnoreEntry, is_ignored
from cssprune.model.tree import ConditionalBlock, Other, Rule, RuleNode, Stylesheet

__all__ = ["prune", "iter_selectors"]

logger = logging.getLogger(__name__)


def _keep_selector(
    selector: str, doms: Sequence[DomSnapshot], ignore: Sequence[IgnoreEntry]
) -> bool:
    # At-rule preludes are never analysed.
    if selector.startswith("@"):
        return True
    if is_ignored(selector, ignore):
        return True
    return is_used(doms, selector)


def _transform(
    node: RuleNode, doms: Sequence[DomSnapshot], ignore: Sequence[IgnoreEntry]
) -> RuleNode:
    if isinstance(node, Rule):
        kept = [s for s in node.selectors if _keep_selector(s, doms, ignore)]
        return replace(node, selectors=kept)
    if isinstance(node, ConditionalBlock):
        return replace(node, rules=_prune_rules(node.rules, doms, ignore))
    if isinstance(node, Other):
        return node
    raise TypeError(f"Unexpected rule node: {node!r}")


def _survives(node: RuleNode) -> bool:
    if isinstance(node, Rule):
        return bool(node.selectors)
    if isinstance(node, ConditionalBlock):
        return bool(node.rules)
    return True


def _prune_rules(
    rules: Sequence[RuleNode], doms: Sequence[DomSnapshot], ignore: Sequence[IgnoreEntry]
) -> list[RuleNode]:
    transformed = [_transform(node, doms, ignore) for node in rules]
    return [node for node in transformed if _survives(node)]


def prune(
    stylesheet: Stylesheet,
    doms: Sequence[DomSnapshot],
    ignore: Sequence[IgnoreEntry] = (),
) -> Stylesheet:
    """Return a new stylesheet holding only the rules used by *doms*.

    Every selector is kept if it starts with ``@``, is exempted by *ignore*,
    or matches in at least one snapshot.  Rules left without selectors and
    conditional blocks left without rules are dropped; other nodes are kept
    as they are.  Node order is preserved and the input is not modified.
    """
    rules = _prune_rules(stylesheet.rules, doms, ignore)
    logger.info(
        "Pruned stylesheet: %d of %d top-level nodes kept",
        len(rules),
        len(stylesheet.rules),
    )
    return Stylesheet(rules=rules)


def iter_selectors(rules: Sequence[RuleNode]) -> Iterator[str]:
    """Yield every selector in *rules*, depth first, in source order."""
    for node in rules:
        if isinstance(node, Rule):
            yield from node.selectors
        elif isinstance(node, ConditionalBlock):
            yield from iter_selectors(node.rules)

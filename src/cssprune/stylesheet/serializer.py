"""Serialize a :class:`~cssprune.model.tree.Stylesheet` back to CSS text."""

from __future__ import annotations

from typing import Any

import tinycss2

from cssprune.model.tree import ConditionalBlock, Other, Rule, RuleNode, Stylesheet

__all__ = ["serialize"]


def _payload_text(payload: Any) -> str:
    if payload is None:
        return ""
    if isinstance(payload, str):
        return payload
    if isinstance(payload, list):
        return tinycss2.serialize(payload)
    return payload.serialize()


def _serialize_node(node: RuleNode) -> str:
    if isinstance(node, Rule):
        return f"{', '.join(node.selectors)}{{{_payload_text(node.declarations)}}}"
    if isinstance(node, ConditionalBlock):
        nested = "".join(_serialize_node(n) for n in node.rules)
        head = f"@{node.keyword} {node.condition}" if node.condition else f"@{node.keyword}"
        return f"{head}{{{nested}}}"
    if isinstance(node, Other):
        return _payload_text(node.payload)
    raise TypeError(f"Unexpected rule node: {node!r}")


def serialize(stylesheet: Stylesheet) -> str:
    """Return CSS text for *stylesheet*, one top-level node per line."""
    return "\n".join(_serialize_node(node) for node in stylesheet.rules)

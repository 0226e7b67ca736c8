"""cssprune model layer -- public type re-exports."""

from cssprune.model.ignore import (
    IgnoreEntry,
    IgnoreLiteral,
    IgnorePattern,
    is_ignored,
    parse_ignore_entry,
)
from cssprune.model.tree import ConditionalBlock, Other, Rule, RuleNode, Stylesheet

__all__ = [
    # tree
    "Rule",
    "ConditionalBlock",
    "Other",
    "RuleNode",
    "Stylesheet",
    # ignore
    "IgnoreLiteral",
    "IgnorePattern",
    "IgnoreEntry",
    "parse_ignore_entry",
    "is_ignored",
]

"""Selector matcher: does a selector match anything in any DOM snapshot?"""

from __future__ import annotations

import logging
from typing import Sequence

from cssprune.dom.snapshot import DomSnapshot
from cssprune.engine.normalize import normalize
from cssprune.errors import SelectorQueryError

__all__ = ["is_used"]

logger = logging.getLogger(__name__)


def is_used(doms: Sequence[DomSnapshot], selector: str) -> bool:
    """Return True if *selector* matches at least one element in *doms*.

    Snapshots are tried in order and the search stops at the first match.
    When a snapshot rejects the selector, its normalized form (pseudo
    suffixes stripped) is tried against the same snapshot instead.  If the
    normalized form is rejected as well the selector is reported as used:
    a rule that cannot be evaluated is never removed.
    """
    normalized: str | None = None
    for dom in doms:
        try:
            if dom.query(selector):
                return True
            continue
        except SelectorQueryError:
            pass

        if normalized is None:
            normalized = normalize(selector)
            logger.debug("Unsupported selector %r, retrying as %r", selector, normalized)
        try:
            if dom.query(normalized):
                return True
        except SelectorQueryError:
            logger.debug("Cannot evaluate %r, keeping it", selector)
            return True
    return False

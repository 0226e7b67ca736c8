"""Pseudo-selector normalizer.

Rewrites a selector the query engine rejects into its ancestor-testable
form by dropping every pseudo-class/pseudo-element suffix::

    a[href="javascript:"]:hover      ->  a[href="javascript:"]
    a:hover > [class*=" icon-"]      ->  a > [class*=" icon-"]
    .clearfix::after                 ->  .clearfix

Best effort only: the result is not guaranteed to be a valid selector.
"""

from __future__ import annotations

import re

__all__ = ["normalize"]

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)

# A compound token: runs of non-space, non-quote characters or whole
# double-quoted strings, so `[class*=" icon-"]` stays one token.
_TOKEN_RE = re.compile(r'(?:[^\s"]+|"[^"]*")+')

# The part of a token before its first unquoted colon.
_PREFIX_RE = re.compile(r'(?:[^:"]+|"[^"]*")*')


def _strip_pseudo(token: str) -> str:
    m = _PREFIX_RE.match(token)
    return m.group(0) if m else ""


def normalize(selector: str) -> str:
    """Return *selector* with comments and pseudo suffixes removed."""
    text = _COMMENT_RE.sub("", selector)
    tokens = (_strip_pseudo(tok) for tok in _TOKEN_RE.findall(text))
    return " ".join(tok for tok in tokens if tok)

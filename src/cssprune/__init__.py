"""cssprune -- remove the CSS rules a set of rendered pages never uses."""

__version__ = "0.1.0"

from cssprune.config import PruneConfig, RenderOptions  # noqa: E402
from cssprune.engine import is_used, normalize, prune  # noqa: E402
from cssprune.model import (  # noqa: E402
    ConditionalBlock,
    IgnoreLiteral,
    IgnorePattern,
    Other,
    Rule,
    Stylesheet,
    is_ignored,
    parse_ignore_entry,
)
from cssprune.pipeline import PruneResult, UsageReport, run  # noqa: E402

__all__ = [
    "__version__",
    "PruneConfig",
    "RenderOptions",
    "prune",
    "is_used",
    "normalize",
    "is_ignored",
    "parse_ignore_entry",
    "IgnoreLiteral",
    "IgnorePattern",
    "Rule",
    "ConditionalBlock",
    "Other",
    "Stylesheet",
    "run",
    "PruneResult",
    "UsageReport",
]

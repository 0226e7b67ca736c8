"""Configuration values for a cssprune run."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from cssprune.dom.snapshot import UNMATCHABLE_PSEUDOS
from cssprune.errors import ConfigError
from cssprune.model.ignore import IgnoreEntry, parse_ignore_entry

BENIGN_DIAGNOSTICS = (
    "WARNING: Method userSpaceScaleFactor",
    "CoreText performance note:",
)

_BOOL_KEYS = frozenset({"javascript", "skip_failed_pages", "report"})
_OPTIONAL_KEYS = frozenset({"css_path", "html_root"})


@dataclass(frozen=True)
class RenderOptions:
    timeout_ms: int = 30_000  # navigation bound; exceeding it fails the page
    settle_ms: int = 0  # time given to page scripts after load
    benign: tuple[str, ...] = BENIGN_DIAGNOSTICS
    headless: bool = True


@dataclass(frozen=True)
class PruneConfig:
    ignore: tuple[IgnoreEntry, ...] = ()
    media: tuple[str, ...] = ()
    stylesheets: tuple[str, ...] = ()
    ignore_sheets: tuple[IgnoreEntry, ...] = ()
    raw: str = ""
    css_path: str | None = None
    html_root: str | None = None
    javascript: bool = True
    skip_failed_pages: bool = False
    report: bool = False
    conditional_keywords: tuple[str, ...] = ("media",)
    unmatchable_pseudos: frozenset[str] = UNMATCHABLE_PSEUDOS
    user_agent: str = "cssprune"
    render: RenderOptions = field(default_factory=RenderOptions)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PruneConfig:
        """Build a config from a JSON-style mapping.

        ``ignore`` and ``ignore_sheets`` take the textual entry form
        (``/regex/`` or a literal); ``timeout`` and ``settle`` set the
        render options.
        """
        data = dict(data)
        render = RenderOptions()
        if "timeout" in data:
            render = replace(render, timeout_ms=_as_int("timeout", data.pop("timeout")))
        if "settle" in data:
            render = replace(render, settle_ms=_as_int("settle", data.pop("settle")))

        known = {f.name for f in fields(cls)} - {"render"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {"render": render}
        for key, value in data.items():
            if key in ("ignore", "ignore_sheets"):
                try:
                    kwargs[key] = tuple(parse_ignore_entry(str(v)) for v in _as_list(key, value))
                except re.error as exc:
                    raise ConfigError(f"Invalid pattern in {key!r}: {exc}", cause=exc) from exc
            elif key in ("media", "stylesheets", "conditional_keywords"):
                kwargs[key] = tuple(str(v) for v in _as_list(key, value))
            elif key == "unmatchable_pseudos":
                kwargs[key] = frozenset(str(v) for v in _as_list(key, value))
            elif key in _BOOL_KEYS:
                if not isinstance(value, bool):
                    raise ConfigError(f"Configuration key {key!r} must be true or false")
                kwargs[key] = value
            else:
                if not (isinstance(value, str) or (value is None and key in _OPTIONAL_KEYS)):
                    raise ConfigError(f"Configuration key {key!r} must be a string")
                kwargs[key] = value
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str | Path) -> PruneConfig:
        """Load a config from a JSON file."""
        p = Path(path)
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read config {p}: {exc}", cause=exc) from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config {p} must contain a JSON object")
        return cls.from_dict(data)


def _as_list(key: str, value: Any) -> list[Any]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return value
    raise ConfigError(f"Configuration key {key!r} must be a string or a list")


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Configuration key {key!r} must be a number of milliseconds")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"Configuration key {key!r} must be a number of milliseconds", cause=exc
        ) from exc

"""Stylesheet-link extraction from a rendered page."""

from __future__ import annotations

from typing import Iterable

from cssprune.dom.snapshot import SoupSnapshot

__all__ = ["DEFAULT_MEDIA", "extract_stylesheets"]

DEFAULT_MEDIA = ("screen", "all")


def _link_selector(media: Iterable[str]) -> str:
    wanted: list[str] = []
    for m in (*DEFAULT_MEDIA, *media):
        if m not in wanted:
            wanted.append(m)
    parts = ['link[rel="stylesheet"]:not([media])']
    parts.extend(f'link[rel="stylesheet"][media="{m}"]' for m in wanted)
    return ", ".join(parts)


def extract_stylesheets(snapshot: SoupSnapshot, media: Iterable[str] = ()) -> list[str]:
    """Return the ``href`` of every stylesheet link the page applies to screen.

    Links without a ``media`` attribute always count; otherwise the media
    value must be ``screen``, ``all`` or one of *media*.  Hrefs are returned
    in document order.
    """
    links = snapshot.soup.select(_link_selector(media))
    return [link["href"] for link in links if link.get("href")]

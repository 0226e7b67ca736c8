"""CLI command: cssprune inspect -- list the stylesheets each page links to."""

from __future__ import annotations

import sys

import click

from cssprune.config import PruneConfig
from cssprune.dom.links import extract_stylesheets
from cssprune.errors import CssPruneError
from cssprune.pipeline import load_snapshots, resolve_href


@click.command()
@click.argument("pages", nargs=-1, required=True)
@click.option("--media", "-m", multiple=True, help="Extra media type to read stylesheets for")
@click.option("--no-js", is_flag=True, help="Read pages as-is instead of rendering them")
def inspect(pages: tuple[str, ...], media: tuple[str, ...], no_js: bool) -> None:
    """Show the stylesheet links found in PAGES and where they resolve to."""
    config = PruneConfig(media=media, javascript=not no_js)
    try:
        snapshots = load_snapshots(list(pages), config)
    except CssPruneError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for snap in snapshots:
        hrefs = extract_stylesheets(snap, config.media)
        click.echo(f"{snap.source}: {len(hrefs)} stylesheet(s)")
        for href in hrefs:
            click.echo(f"  {href} -> {resolve_href(href, snap.source, config)}")

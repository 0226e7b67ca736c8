"""CLI command: cssprune prune -- write the pruned stylesheet for a set of pages."""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, replace
from pathlib import Path

import click

from cssprune.config import PruneConfig
from cssprune.errors import CssPruneError
from cssprune.model.ignore import parse_ignore_entry
from cssprune.pipeline import run


def _build_config(
    config_file: str | None,
    ignore: tuple[str, ...],
    media: tuple[str, ...],
    stylesheets: tuple[str, ...],
    ignore_sheets: tuple[str, ...],
    raw: str | None,
    css_path: str | None,
    html_root: str | None,
    timeout: int | None,
    settle: int | None,
    no_js: bool,
    skip_failed: bool,
    report: bool,
) -> PruneConfig:
    """Merge the config file (if any) with command-line options; options win."""
    config = PruneConfig.from_file(config_file) if config_file else PruneConfig()
    updates: dict[str, object] = {}
    if ignore:
        updates["ignore"] = config.ignore + tuple(parse_ignore_entry(s) for s in ignore)
    if ignore_sheets:
        updates["ignore_sheets"] = config.ignore_sheets + tuple(
            parse_ignore_entry(s) for s in ignore_sheets
        )
    if media:
        updates["media"] = config.media + media
    if stylesheets:
        updates["stylesheets"] = stylesheets
    if raw is not None:
        updates["raw"] = raw
    if css_path is not None:
        updates["css_path"] = css_path
    if html_root is not None:
        updates["html_root"] = html_root
    if no_js:
        updates["javascript"] = False
    if skip_failed:
        updates["skip_failed_pages"] = True
    # A report is only built when there is a --report file to write it to.
    updates["report"] = report

    render = config.render
    if timeout is not None:
        render = replace(render, timeout_ms=timeout)
    if settle is not None:
        render = replace(render, settle_ms=settle)
    updates["render"] = render
    return replace(config, **updates)


@click.command()
@click.argument("pages", nargs=-1, required=True)
@click.option("--ignore", "-i", multiple=True, help="Selector to keep; /regex/ for a pattern")
@click.option("--media", "-m", multiple=True, help="Extra media type to read stylesheets for")
@click.option("--stylesheet", "-s", "stylesheets", multiple=True, help="Use this stylesheet instead of the page links")
@click.option("--ignore-sheet", "ignore_sheets", multiple=True, help="Stylesheet to skip; /regex/ for a pattern")
@click.option("--raw", default=None, help="Extra CSS text to analyse")
@click.option("--csspath", "css_path", default=None, help="Directory relative stylesheet links resolve against")
@click.option("--htmlroot", "html_root", default=None, help="Directory root-relative stylesheet links resolve against")
@click.option("--timeout", type=int, default=None, help="Page load timeout in milliseconds")
@click.option("--settle", type=int, default=None, help="Time in milliseconds to let page scripts run")
@click.option("--no-js", is_flag=True, help="Read pages as-is instead of rendering them")
@click.option("--skip-failed", is_flag=True, help="Leave out pages that fail to render")
@click.option("--config", "config_file", type=click.Path(exists=True), default=None, help="JSON config file")
@click.option("--report", "report_file", default=None, help="Write a selector usage report (JSON) here")
@click.option("--output", "-o", default=None, help="Write the CSS here instead of stdout")
def prune(
    pages: tuple[str, ...],
    ignore: tuple[str, ...],
    media: tuple[str, ...],
    stylesheets: tuple[str, ...],
    ignore_sheets: tuple[str, ...],
    raw: str | None,
    css_path: str | None,
    html_root: str | None,
    timeout: int | None,
    settle: int | None,
    no_js: bool,
    skip_failed: bool,
    config_file: str | None,
    report_file: str | None,
    output: str | None,
) -> None:
    """Remove unused CSS rules for the given PAGES (paths, URLs or markup)."""
    try:
        config = _build_config(
            config_file, ignore, media, stylesheets, ignore_sheets, raw,
            css_path, html_root, timeout, settle, no_js, skip_failed,
            report=report_file is not None,
        )
        result = run(list(pages), config)
    except CssPruneError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(result.css + "\n", encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(result.css)

    if report_file and result.report is not None:
        Path(report_file).write_text(
            json.dumps(asdict(result.report), indent=2) + "\n", encoding="utf-8"
        )
        click.echo(
            f"Selectors: {len(result.report.used)} used, {len(result.report.unused)} unused",
            err=True,
        )

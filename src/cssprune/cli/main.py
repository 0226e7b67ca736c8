"""cssprune CLI entry point: Click group with subcommands."""

import logging

import click

from cssprune import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cssprune")
@click.option("-v", "--verbose", count=True, help="Log progress (-vv for debug output)")
def cli(verbose: int) -> None:
    """cssprune - strip unused rules from stylesheets using rendered pages."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )


# Import and register subcommands
from cssprune.cli.prune import prune  # noqa: E402
from cssprune.cli.inspect import inspect  # noqa: E402

cli.add_command(prune)
cli.add_command(inspect)

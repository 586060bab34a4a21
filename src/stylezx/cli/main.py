"""stylezx CLI entry point: Click group with subcommands."""

import logging

import click

from stylezx import __version__


@click.group()
@click.version_option(version=__version__, prog_name="stylezx")
@click.option("-v", "--verbose", is_flag=True, help="Log every transformed file.")
def cli(verbose: bool) -> None:
    """stylezx - compile static zx style objects into deduplicated CSS."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from stylezx.cli.build import build  # noqa: E402
from stylezx.cli.check import check  # noqa: E402
from stylezx.cli.inspect import inspect  # noqa: E402
from stylezx.cli.theme import theme  # noqa: E402

cli.add_command(build)
cli.add_command(check)
cli.add_command(inspect)
cli.add_command(theme)

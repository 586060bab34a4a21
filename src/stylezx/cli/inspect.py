"""CLI command: stylezx inspect -- show the classes compiled from one file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stylezx.cli.common import resolve_config
from stylezx.errors import ConfigError, TransformError
from stylezx.plugin import StyleZxPlugin


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="TOML file with a [tool.stylezx] table.")
@click.option("--code", "show_code", is_flag=True, help="Also print the rewritten source.")
def inspect(file: str, config_file: str | None, show_code: bool) -> None:
    """Compile one source file and display each generated class and its CSS."""
    try:
        config = resolve_config(config_file, inject_import=False)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    path = Path(file)
    plugin = StyleZxPlugin(config)
    try:
        result = plugin.transform_file(path.name, path.read_text(encoding="utf-8"))
    except TransformError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)

    if result is None:
        click.echo(f"{path.name}: no style declarations")
        return

    click.echo(f"File:    {path.name}")
    click.echo(f"Classes: {len(result.identities)}")
    click.echo(f"Edits:   {len(result.edits)}")
    click.echo()
    for identity in sorted(result.identities):
        rule = plugin.registry.lookup(identity)
        if rule is None:
            continue
        click.echo(rule.css)
        click.echo()
    for diag in result.diagnostics:
        click.echo(str(diag))
    if show_code:
        click.echo(result.code)

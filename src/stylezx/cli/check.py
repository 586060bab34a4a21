"""CLI command: stylezx check -- report unsupported style declarations."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stylezx.cli.common import iter_sources, resolve_config
from stylezx.errors import ConfigError, TransformError
from stylezx.plugin import StyleZxPlugin


@click.command()
@click.argument("src", type=click.Path(exists=True))
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="TOML file with a [tool.stylezx] table.")
def check(src: str, config_file: str | None) -> None:
    """Compile every style declaration under SRC without writing anything.

    Prints errors and warnings and exits with code 1 if any file fails.
    """
    try:
        config = resolve_config(config_file)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    root = Path(src)
    files = [root] if root.is_file() else list(iter_sources(root, config))
    plugin = StyleZxPlugin(config)

    errors = 0
    warnings = 0
    for path in files:
        try:
            result = plugin.transform_file(str(path), path.read_text(encoding="utf-8"))
        except TransformError as exc:
            errors += 1
            click.echo(f"ERROR {exc}")
            continue
        if result is None:
            continue
        for diag in result.diagnostics:
            if diag.is_error:
                errors += 1
            elif diag.is_warning:
                warnings += 1
            click.echo(str(diag))

    click.echo()
    click.echo(
        f"Summary: {len(files)} file(s), {len(plugin.registry)} class(es), "
        f"{errors} error(s), {warnings} warning(s)"
    )
    if errors:
        sys.exit(1)

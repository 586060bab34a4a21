"""CLI command: stylezx theme -- print the CSS variables of a theme file."""

from __future__ import annotations

import sys

import click

from stylezx.errors import ThemeError
from stylezx.theme import ThemeStore, load_theme


@click.command()
@click.argument("theme_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--selector", default=":root", show_default=True, help="Selector for the global block.")
@click.option("--prefix", default="--theme", show_default=True, help="Custom property prefix.")
@click.option("--override", "override_file", type=click.Path(exists=True, dir_okay=False),
              help="JSON overrides to derive a scoped theme from.")
@click.option("--scope", default=".theme-scope", show_default=True,
              help="Selector for the scoped block when --override is given.")
def theme(theme_file: str, selector: str, prefix: str, override_file: str | None, scope: str) -> None:
    """Flatten THEME_FILE into CSS custom properties."""
    store = ThemeStore(prefix=prefix)
    try:
        store.init(load_theme(theme_file))
        override = load_theme(override_file) if override_file else None
    except ThemeError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(store.root_css(selector) or f"{selector} {{\n}}")
    if override is not None:
        click.echo(store.derive_scoped(override).css(scope))

"""CLI command: stylezx build -- compile a source tree and emit the pruned stylesheet."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path

import click

from stylezx.bundle import inject_stylesheet_link
from stylezx.cli.common import resolve_config
from stylezx.config import StyleZxConfig
from stylezx.errors import ConfigError, ThemeError, TransformError
from stylezx.events import StyleRegistered
from stylezx.plugin import StyleZxPlugin
from stylezx.theme import ThemeStore, load_theme

_MARKUP_SUFFIXES = {".html", ".htm"}


def _make_plugin(config: StyleZxConfig, theme_file: str | None) -> StyleZxPlugin:
    theme = None
    if theme_file is not None:
        theme = ThemeStore(prefix=config.theme_prefix)
        theme.init(load_theme(theme_file))
    return StyleZxPlugin(config, theme=theme)


@click.command()
@click.argument("src", type=click.Path(exists=True, file_okay=False))
@click.argument("out", type=click.Path(file_okay=False))
@click.option("--theme", "theme_file", type=click.Path(exists=True, dir_okay=False),
              help="JSON theme whose variables are emitted into the stylesheet.")
@click.option("--asset", "asset_name", default="style-zx.css", show_default=True,
              help="File name of the generated stylesheet inside OUT.")
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="TOML file with a [tool.stylezx] table.")
def build(src: str, out: str, theme_file: str | None, asset_name: str, config_file: str | None) -> None:
    """Transform every source file under SRC into OUT.

    Style declarations are replaced by class names, other files are copied
    as-is, and a single pruned stylesheet is written to OUT and linked into
    every HTML file there.
    """
    src_root = Path(src)
    out_root = Path(out)
    try:
        config = resolve_config(config_file, inject_import=False)
        plugin = _make_plugin(config, theme_file)
    except (ConfigError, ThemeError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    registered: list[str] = []
    plugin.bus.subscribe(StyleRegistered, lambda event: registered.append(event.class_name))

    artifacts: list[str] = []
    markup: list[Path] = []
    for path in sorted(p for p in src_root.rglob("*") if p.is_file()):
        rel = path.relative_to(src_root)
        target = out_root / rel
        target.parent.mkdir(parents=True, exist_ok=True)

        if config.handles(path.name):
            source = path.read_text(encoding="utf-8")
            try:
                result = plugin.transform_file(rel.as_posix(), source)
            except TransformError as exc:
                click.echo(str(exc), err=True)
                sys.exit(1)
            code = result.code if result is not None else source
            target.write_text(code, encoding="utf-8")
            artifacts.append(code)
            continue

        shutil.copy2(path, target)
        if path.suffix.lower() in _MARKUP_SUFFIXES:
            markup.append(target)
            artifacts.append(target.read_text(encoding="utf-8"))

    css = plugin.finalize_bundle(artifacts)
    asset_path = out_root / asset_name
    asset_path.parent.mkdir(parents=True, exist_ok=True)
    asset_path.write_text(css, encoding="utf-8")

    for page in markup:
        href = Path(os.path.relpath(asset_path, page.parent)).as_posix()
        page.write_text(inject_stylesheet_link(page.read_text(encoding="utf-8"), href), encoding="utf-8")

    click.echo(f"Compiled {len(registered)} class(es) from {src_root}")
    click.echo(f"Wrote {asset_path} ({len(css)} bytes)")

"""Helpers shared by the CLI commands."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Iterator

from stylezx.config import StyleZxConfig, load_config


def resolve_config(config_file: str | None, **overrides: object) -> StyleZxConfig:
    """Load *config_file* (or ``./pyproject.toml`` if present) and apply overrides."""
    if config_file is not None:
        config = load_config(config_file)
    elif Path("pyproject.toml").is_file():
        config = load_config("pyproject.toml")
    else:
        config = StyleZxConfig()
    return dataclasses.replace(config, **overrides) if overrides else config


def iter_sources(root: Path, config: StyleZxConfig) -> Iterator[Path]:
    """Yield handled source files under *root* in a stable order."""
    for path in sorted(root.rglob("*")):
        if path.is_file() and config.handles(path.name):
            yield path

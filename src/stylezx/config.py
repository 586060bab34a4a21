"""Configuration for the style compiler and its host hooks."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from stylezx.errors import ConfigError


@dataclass(frozen=True)
class StyleZxConfig:
    class_prefix: str = "zx"
    attribute: str = "zx"
    class_attribute: str = "className"
    styles_callee: str = "createStyles"
    theme_prefix: str = "--theme"
    hash_length: int = 8
    extensions: tuple[str, ...] = (".tsx", ".jsx", ".ts", ".js")
    virtual_module_id: str = "virtual:style-zx.css"
    inject_import: bool = True  # dev servers load the virtual stylesheet via import

    def __post_init__(self) -> None:
        if not 8 <= self.hash_length <= 32:
            raise ConfigError(f"hash_length must be between 8 and 32, got {self.hash_length}")
        if not self.class_prefix:
            raise ConfigError("class_prefix must be a non-empty string")
        if not self.theme_prefix.startswith("--"):
            raise ConfigError(f"theme_prefix must start with '--', got {self.theme_prefix!r}")

    def handles(self, path: str) -> bool:
        """Return True if *path* has one of the configured source extensions."""
        return path.endswith(self.extensions)


_FIELD_NAMES = {f.name for f in fields(StyleZxConfig)}


def config_from_mapping(data: dict[str, Any]) -> StyleZxConfig:
    """Build a config from a ``[tool.stylezx]``-style mapping (dashes allowed)."""
    kwargs: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = raw_key.replace("-", "_")
        if key not in _FIELD_NAMES:
            raise ConfigError(f"Unknown stylezx option: {raw_key!r}")
        if key == "extensions":
            value = tuple(value)
        kwargs[key] = value
    return StyleZxConfig(**kwargs)


def load_config(path: str | Path) -> StyleZxConfig:
    """Load the ``[tool.stylezx]`` table from a TOML file.

    A file without the table yields the default configuration.
    """
    try:
        with open(path, "rb") as fh:
            document = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    table = document.get("tool", {}).get("stylezx", {})
    if not isinstance(table, dict):
        raise ConfigError("[tool.stylezx] must be a table")
    return config_from_mapping(table)

"""Theme flattening and merging helpers."""

from __future__ import annotations

import copy
from typing import Any, Mapping

from stylezx.model.style import stringify

__all__ = ["deep_merge", "flatten_theme", "render_variables"]


def flatten_theme(theme: Mapping[str, Any], prefix: str = "--theme") -> dict[str, str]:
    """Flatten a nested theme into CSS custom properties.

    ``{"colors": {"primary": "red"}}`` becomes ``{"--theme-colors-primary": "red"}``.
    Lists are walked by index.
    """
    result: dict[str, str] = {}

    def recurse(value: Any, path: str) -> None:
        if isinstance(value, Mapping):
            items = value.items()
        elif isinstance(value, (list, tuple)):
            items = enumerate(value)
        else:
            result[f"{prefix}-{path}"] = stringify(value)
            return
        for key, child in items:
            recurse(child, f"{path}-{key}" if path else str(key))

    for key, value in theme.items():
        recurse(value, str(key))
    return result


def deep_merge(parent: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new mapping with *override* merged onto *parent*.

    Nested mappings merge recursively; any other override value replaces the
    parent's. Neither argument is modified.
    """
    merged: dict[str, Any] = copy.deepcopy(dict(parent))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def render_variables(variables: Mapping[str, str], selector: str = ":root") -> str:
    """Render a declaration block with keys in sorted order."""
    lines = "".join(f"  {name}: {variables[name]};\n" for name in sorted(variables))
    return f"{selector} {{\n{lines}}}"

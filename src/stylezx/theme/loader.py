"""Load theme values from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from stylezx.errors import ThemeError


def load_theme(path: str | Path) -> dict[str, Any]:
    """Read a JSON theme file; the top level must be an object."""
    theme_path = Path(path)
    try:
        data = json.loads(theme_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ThemeError(f"Cannot read theme {theme_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ThemeError(
            f"Invalid JSON in theme {theme_path}: {exc.msg}", line=exc.lineno, column=exc.colno
        ) from exc
    if not isinstance(data, dict):
        raise ThemeError(f"Theme {theme_path} must contain a JSON object at the top level")
    return data

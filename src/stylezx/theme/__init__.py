"""Theme store: flattening, scoped merging and subscriptions."""

from stylezx.theme.flatten import deep_merge, flatten_theme, render_variables
from stylezx.theme.loader import load_theme
from stylezx.theme.store import (
    ScopedTheme,
    ThemeStore,
    create_theme,
    default_store,
    get_global_theme,
)

__all__ = [
    "ScopedTheme",
    "ThemeStore",
    "create_theme",
    "deep_merge",
    "default_store",
    "flatten_theme",
    "get_global_theme",
    "load_theme",
    "render_variables",
]

"""Process-wide theme store with scoped derivation and change subscriptions."""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from stylezx.errors import ThemeError
from stylezx.theme.flatten import deep_merge, flatten_theme, render_variables

logger = logging.getLogger(__name__)

ThemeListener = Callable[[dict[str, Any]], None]


@dataclass(frozen=True)
class ScopedTheme:
    """A theme derived from a parent by merging overrides.

    Scoped themes are independent values: deriving never touches the parent
    or the global theme.
    """

    value: dict[str, Any]
    variables: dict[str, str]
    prefix: str = field(default="--theme")

    def derive(self, override: Mapping[str, Any]) -> ScopedTheme:
        """Derive a nested scope from this one."""
        merged = deep_merge(self.value, override)
        return ScopedTheme(merged, flatten_theme(merged, self.prefix), self.prefix)

    def css(self, selector: str) -> str:
        return render_variables(self.variables, selector)


class ThemeStore:
    """Holds the active global theme and its CSS variable flattening.

    Listeners registered with :meth:`subscribe` are called synchronously, in
    registration order, on every :meth:`set_theme`, after the flattening has
    been updated. A re-entrant lock lets listeners read the store.
    """

    def __init__(self, prefix: str = "--theme") -> None:
        self._lock = threading.RLock()
        self._prefix = prefix
        self._theme: dict[str, Any] = {}
        self._variables: dict[str, str] = {}
        self._listeners: list[ThemeListener] = []
        self._initialized = False

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def initialized(self) -> bool:
        with self._lock:
            return self._initialized

    # --- lifecycle ------------------------------------------------------------

    def init(self, theme: Mapping[str, Any]) -> dict[str, Any]:
        """Install the startup theme. Use :meth:`set_theme` to replace it later."""
        with self._lock:
            if self._initialized:
                raise ThemeError("Theme store is already initialized; use set_theme()")
            return self.set_theme(theme)

    def set_theme(self, theme: Mapping[str, Any]) -> dict[str, Any]:
        """Replace the global theme, recompute its variables and notify listeners."""
        value = copy.deepcopy(dict(theme))
        with self._lock:
            self._theme = value
            self._variables = flatten_theme(value, self._prefix)
            self._initialized = True
            logger.debug("Theme replaced: %d variables", len(self._variables))
            for listener in list(self._listeners):
                listener(copy.deepcopy(value))
        return copy.deepcopy(value)

    # --- readers --------------------------------------------------------------

    def get_theme(self) -> dict[str, Any]:
        """Return a copy of the active theme (empty before initialization)."""
        with self._lock:
            return copy.deepcopy(self._theme)

    @property
    def variables(self) -> dict[str, str]:
        with self._lock:
            return dict(self._variables)

    def root_css(self, selector: str = ":root") -> str:
        """Render the global variables as a declaration block, or "" if empty."""
        with self._lock:
            if not self._variables:
                return ""
            return render_variables(self._variables, selector)

    def derive_scoped(
        self, override: Mapping[str, Any], parent: Mapping[str, Any] | None = None
    ) -> ScopedTheme:
        """Merge *override* onto *parent* (default: the global theme).

        Missing leaves inherit from the parent, so the result is complete.
        """
        base = self.get_theme() if parent is None else parent
        merged = deep_merge(base, override)
        return ScopedTheme(merged, flatten_theme(merged, self._prefix), self._prefix)

    # --- subscriptions --------------------------------------------------------

    def subscribe(self, listener: ThemeListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ThemeListener) -> None:
        """Remove *listener*; unknown listeners are ignored."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def reset(self) -> None:
        """Forget the theme and all listeners."""
        with self._lock:
            self._theme = {}
            self._variables = {}
            self._listeners.clear()
            self._initialized = False

    def __repr__(self) -> str:
        with self._lock:
            return f"ThemeStore(variables={len(self._variables)}, listeners={len(self._listeners)})"


_default_store = ThemeStore()


def default_store() -> ThemeStore:
    """Return the process-wide theme store."""
    return _default_store


def create_theme(theme: Mapping[str, Any]) -> dict[str, Any]:
    """Set the process-wide theme and return it for direct access."""
    return _default_store.set_theme(theme)


def get_global_theme() -> dict[str, Any]:
    return _default_store.get_theme()

"""Thread-safe, append-only registry of compiled rules keyed by identity."""

from __future__ import annotations

import threading
from typing import Iterator

from stylezx.model.style import CompiledRule


class StyleRegistry:
    """Maps class identities to their compiled rules.

    The first rule registered for an identity is kept for the lifetime of the
    registry; later registrations for the same identity are no-ops. All public
    methods are protected by a lock so that per-file transforms may run
    concurrently.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rules: dict[str, CompiledRule] = {}

    def register(self, rule: CompiledRule) -> bool:
        """Insert *rule* under its identity if absent.

        Returns True if the rule was added, False if the identity was known.
        """
        with self._lock:
            if rule.identity in self._rules:
                return False
            self._rules[rule.identity] = rule
            return True

    def lookup(self, identity: str) -> CompiledRule | None:
        with self._lock:
            return self._rules.get(identity)

    def snapshot(self) -> dict[str, CompiledRule]:
        """Return a shallow copy of every registered rule."""
        with self._lock:
            return dict(self._rules)

    def select(self, identities: set[str] | frozenset[str]) -> dict[str, CompiledRule]:
        """Return the registered rules for *identities*; unknown ones are skipped."""
        with self._lock:
            return {i: self._rules[i] for i in identities if i in self._rules}

    def __contains__(self, identity: str) -> bool:
        with self._lock:
            return identity in self._rules

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(sorted(self._rules))

    def __repr__(self) -> str:
        with self._lock:
            return f"StyleRegistry(rules={len(self._rules)})"

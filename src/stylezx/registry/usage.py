"""Per-file usage tracking of class identities."""

from __future__ import annotations

import threading
from typing import Iterable


class UsageTracker:
    """Records which class identities each source file currently references.

    A file's set is replaced wholesale on every recompute; the union over all
    files is the authoritative set of live identities.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._usage: dict[str, frozenset[str]] = {}

    def recompute(self, file_id: str, identities: Iterable[str]) -> frozenset[str]:
        """Replace the usage set for *file_id* and return it.

        An empty iterable leaves the file tracked with no identities, so its
        previous contributions drop out of :meth:`all_live_identities`.
        """
        usage = frozenset(identities)
        with self._lock:
            self._usage[file_id] = usage
        return usage

    def remove_file(self, file_id: str) -> None:
        """Stop tracking *file_id*; unknown files are ignored."""
        with self._lock:
            self._usage.pop(file_id, None)

    def usage_for(self, file_id: str) -> frozenset[str]:
        with self._lock:
            return self._usage.get(file_id, frozenset())

    def all_live_identities(self) -> set[str]:
        """Return the union of every tracked file's usage set."""
        with self._lock:
            live: set[str] = set()
            for usage in self._usage.values():
                live.update(usage)
            return live

    def files(self) -> list[str]:
        with self._lock:
            return sorted(self._usage)

    def __contains__(self, file_id: str) -> bool:
        with self._lock:
            return file_id in self._usage

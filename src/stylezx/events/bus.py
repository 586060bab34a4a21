"""Synchronous event bus for compiler lifecycle notifications."""

from __future__ import annotations

import threading
from typing import Any, Callable

Listener = Callable[[Any], None]


class EventBus:
    """Publish-subscribe bus shared by the host hooks.

    Per-type listeners and catch-all listeners are called on the emitting
    thread, catch-all listeners first, each group in registration order.
    Registration is guarded by a lock because transforms may run on several
    threads at once; dispatch works on a copy of the listener lists.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_type: dict[type, list[Listener]] = {}
        self._catch_all: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> None:
        """Call *callback* for every event of exactly *event_type*."""
        with self._lock:
            self._by_type.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: type, callback: Listener) -> None:
        with self._lock:
            listeners = self._by_type.get(event_type, [])
            if callback in listeners:
                listeners.remove(callback)

    def on_all(self, callback: Listener) -> None:
        """Call *callback* for every event."""
        with self._lock:
            self._catch_all.append(callback)

    def emit(self, event: Any) -> None:
        with self._lock:
            listeners = [*self._catch_all, *self._by_type.get(type(event), [])]
        for callback in listeners:
            callback(event)

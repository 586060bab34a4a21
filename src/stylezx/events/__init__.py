"""Event system: bus and event types for the compiler lifecycle."""

from stylezx.events.bus import EventBus
from stylezx.events.types import BundleFinalized, FileDropped, FileUsageChanged, StyleRegistered

__all__ = [
    "BundleFinalized",
    "EventBus",
    "FileDropped",
    "FileUsageChanged",
    "StyleRegistered",
]

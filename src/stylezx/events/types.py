"""Event types emitted while compiling and bundling styles."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StyleRegistered:
    identity: str
    class_name: str
    path: str


@dataclass(frozen=True)
class FileUsageChanged:
    path: str
    added: frozenset[str]
    removed: frozenset[str]


@dataclass(frozen=True)
class FileDropped:
    path: str


@dataclass(frozen=True)
class BundleFinalized:
    retained: int
    dropped: int
    size: int

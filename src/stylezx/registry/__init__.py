"""Class identity, rule registry and per-file usage tracking."""

from stylezx.registry.identity import canonicalize, class_name, identify
from stylezx.registry.registry import StyleRegistry
from stylezx.registry.usage import UsageTracker

__all__ = ["StyleRegistry", "UsageTracker", "canonicalize", "class_name", "identify"]

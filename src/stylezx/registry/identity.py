"""Content-hash class identity for style objects."""

from __future__ import annotations

import hashlib
import json

from stylezx.model.style import StyleObject

__all__ = ["canonicalize", "class_name", "identify"]


def canonicalize(style: StyleObject) -> str:
    """Serialize *style* with sorted keys so equal objects serialize equally."""
    return json.dumps(style, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def identify(style: StyleObject, length: int = 8) -> str:
    """Return the class identity of *style*: a hex digest prefix.

    The default 8 hex characters give a 32-bit digest.
    """
    digest = hashlib.md5(canonicalize(style).encode("utf-8"), usedforsecurity=False)
    return digest.hexdigest()[:length]


def class_name(identity: str, prefix: str = "zx") -> str:
    return f"{prefix}-{identity}"

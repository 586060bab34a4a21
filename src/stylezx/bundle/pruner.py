"""Bundle-time dead-code elimination for compiled style rules."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping

from stylezx.model.style import CompiledRule

__all__ = ["inject_stylesheet_link", "partition", "prune", "render_rules"]

logger = logging.getLogger(__name__)

_HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)


def render_rules(rules: Mapping[str, CompiledRule]) -> str:
    """Concatenate *rules* in ascending identity order, one newline after each."""
    return "".join(rules[identity].css + "\n" for identity in sorted(rules))


def partition(
    candidates: Mapping[str, CompiledRule], artifact_texts: Iterable[str]
) -> tuple[list[str], list[str]]:
    """Split candidate identities into (retained, dropped), both sorted.

    A rule is retained if its class name occurs literally in at least one
    artifact text. Coincidental matches keep a rule alive; a referenced class
    is never dropped.
    """
    texts = list(artifact_texts)
    retained: list[str] = []
    dropped: list[str] = []
    for identity in sorted(candidates):
        name = candidates[identity].class_name
        if any(name in text for text in texts):
            retained.append(identity)
        else:
            dropped.append(identity)
    return retained, dropped


def prune(candidates: Mapping[str, CompiledRule], artifact_texts: Iterable[str]) -> str:
    """Return the CSS for every candidate whose class name survives in the output."""
    retained, dropped = partition(candidates, artifact_texts)
    logger.info("Pruned style rules: %d retained, %d dropped", len(retained), len(dropped))
    return render_rules({identity: candidates[identity] for identity in retained})


def inject_stylesheet_link(html: str, href: str) -> str:
    """Insert a stylesheet link right before ``</head>``.

    Markup without a closing head tag is returned unchanged, as is markup that
    already links *href*.
    """
    link = f'<link rel="stylesheet" href="{href}">'
    if link in html:
        return html
    match = _HEAD_CLOSE_RE.search(html)
    if match is None:
        return html
    return f"{html[: match.start()]}  {link}\n{html[match.start():]}"

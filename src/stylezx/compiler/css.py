"""Style compiler: style object + class name -> flat CSS rule blocks."""

from __future__ import annotations

import logging
import re

from stylezx.compiler.aliases import cascade_rank, is_unitless, resolve_property
from stylezx.errors import InvalidStyleValue
from stylezx.model.diagnostic import Diagnostic, Severity
from stylezx.model.style import CompiledRule, StyleLiteral, StyleObject, stringify

__all__ = ["NESTING_MARKERS", "THEME_MARKER", "compile_style", "resolve_theme_reference"]

logger = logging.getLogger(__name__)

# Keys starting with one of these describe a nested rule rather than a property.
NESTING_MARKERS = ("&", ":", "@")

THEME_MARKER = "$theme."

_THEME_PATH_RE = re.compile(r"^[A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)*$")
_INVALID_VAR_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")


def resolve_theme_reference(
    value: str, prefix: str = "--theme", diagnostics: list[Diagnostic] | None = None
) -> str:
    """Rewrite ``$theme.colors.primary`` to ``var(--theme-colors-primary)``.

    The concrete value is supplied at run time by the theme variables, so the
    reference is never looked up here. A path that is not a clean dotted path
    still compiles to a best-effort variable name and is reported as a warning.
    """
    path = value[len(THEME_MARKER) :]
    if not _THEME_PATH_RE.match(path):
        message = f"Malformed theme reference {value!r}; compiled best-effort"
        logger.warning(message)
        if diagnostics is not None:
            diagnostics.append(
                Diagnostic(rule="malformed_theme_reference", severity=Severity.WARNING, message=message)
            )
    name = _INVALID_VAR_CHARS_RE.sub("", path.replace(".", "-"))
    return f"var({prefix}-{name})"


def _resolve_value(
    prop: str, value: StyleLiteral, theme_prefix: str, diagnostics: list[Diagnostic] | None
) -> str:
    if isinstance(value, str) and value.startswith(THEME_MARKER):
        return resolve_theme_reference(value, theme_prefix, diagnostics)
    if isinstance(value, (int, float)) and not isinstance(value, bool) and not is_unitless(prop):
        return f"{stringify(value)}px"
    return stringify(value)


def _split_selector(selector: str) -> list[str]:
    """Split a selector list on commas outside parentheses, brackets and quotes."""
    parts: list[str] = []
    depth = 0
    quote = ""
    start = 0
    for i, ch in enumerate(selector):
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(selector[start:i])
            start = i + 1
    parts.append(selector[start:])
    return [part.strip() for part in parts if part.strip()]


def _nested_selector(key: str, selector: str) -> str:
    """Substitute the parent selector into a nested key.

    ``&`` is replaced by the parent everywhere; a key starting with ``:`` is
    appended to it. Comma lists on either side expand to every combination.
    """
    combined: list[str] = []
    for key_part in _split_selector(key):
        for parent in _split_selector(selector):
            if key_part.startswith(":"):
                combined.append(parent + key_part)
            else:
                combined.append(key_part.replace("&", parent))
    return ", ".join(combined)


def _compile_block(
    style: StyleObject,
    selector: str,
    theme_prefix: str,
    diagnostics: list[Diagnostic] | None,
) -> list[str]:
    declarations: list[tuple[int, str]] = []
    nested: list[str] = []
    for key in sorted(style):
        value = style[key]
        if key.startswith(NESTING_MARKERS):
            if not isinstance(value, dict):
                raise InvalidStyleValue(key, "a nested selector needs an object value")
            if key.startswith("@"):
                inner = "\n".join(_compile_block(value, selector, theme_prefix, diagnostics))
                nested.append(f"{key} {{\n{inner}\n}}")
            else:
                nested.extend(
                    _compile_block(value, _nested_selector(key, selector), theme_prefix, diagnostics)
                )
            continue
        if isinstance(value, dict):
            raise InvalidStyleValue(key, "a property value must be a string, number or boolean")
        if value is None:
            continue
        for prop in resolve_property(key):
            text = f"\n  {prop}: {_resolve_value(prop, value, theme_prefix, diagnostics)};"
            declarations.append((cascade_rank(prop), text))
    # Stable sort: equal ranks keep key order, then alias order.
    declarations.sort(key=lambda item: item[0])
    body = "".join(text for _, text in declarations)
    return [f"{selector} {{{body}\n}}", *nested]


def compile_style(
    style: StyleObject,
    class_name: str,
    *,
    identity: str | None = None,
    theme_prefix: str = "--theme",
    diagnostics: list[Diagnostic] | None = None,
) -> CompiledRule:
    """Compile *style* into the CSS rule for ``.class_name``.

    Keys are processed in sorted order so that one style object always yields
    one CSS text regardless of how its properties were written. Within a
    block, shorthands are emitted before the longhands they cover. Nested
    selector and at-rule keys become sibling blocks after the primary block.
    Warnings (malformed theme references) are appended to *diagnostics*.
    """
    blocks = _compile_block(style, f".{class_name}", theme_prefix, diagnostics)
    if identity is None:
        identity = class_name.rsplit("-", 1)[-1]
    return CompiledRule(
        identity=identity,
        class_name=class_name,
        primary=blocks[0],
        siblings=tuple(blocks[1:]),
    )

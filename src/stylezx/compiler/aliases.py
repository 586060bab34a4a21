"""Property alias table and unit policy for the style compiler."""

from __future__ import annotations

import re

# Short property names expanded to their canonical longhands. Each entry lists
# the properties that receive the same value, so only symmetric pairs (both
# horizontal sides, both vertical sides) share an entry; every individual edge
# has an alias of its own.
ALIASES: dict[str, tuple[str, ...]] = {
    "m": ("margin",),
    "mt": ("marginTop",),
    "mr": ("marginRight",),
    "mb": ("marginBottom",),
    "ml": ("marginLeft",),
    "mx": ("marginLeft", "marginRight"),
    "my": ("marginTop", "marginBottom"),
    "p": ("padding",),
    "pt": ("paddingTop",),
    "pr": ("paddingRight",),
    "pb": ("paddingBottom",),
    "pl": ("paddingLeft",),
    "px": ("paddingLeft", "paddingRight"),
    "py": ("paddingTop", "paddingBottom"),
    "bg": ("backgroundColor",),
}

# Canonical (kebab-case) properties whose numeric values carry no unit.
UNITLESS_PROPERTIES = frozenset(
    {
        "animation-iteration-count",
        "aspect-ratio",
        "column-count",
        "fill-opacity",
        "flex",
        "flex-grow",
        "flex-shrink",
        "font-weight",
        "grid-column",
        "grid-row",
        "line-height",
        "opacity",
        "order",
        "orphans",
        "stroke-opacity",
        "tab-size",
        "widows",
        "z-index",
        "zoom",
    }
)

_UPPER_RE = re.compile(r"[A-Z]")


def to_kebab_case(name: str) -> str:
    """Convert a camelCase property name to kebab-case.

    Custom properties (``--brandColor``) are returned unchanged.
    """
    if name.startswith("--"):
        return name
    return _UPPER_RE.sub(lambda m: "-" + m.group().lower(), name)


def resolve_property(key: str) -> tuple[str, ...]:
    """Return the kebab-case CSS properties that *key* stands for."""
    return tuple(to_kebab_case(prop) for prop in ALIASES.get(key, (key,)))


def is_unitless(prop: str) -> bool:
    return prop in UNITLESS_PROPERTIES or prop.startswith("--")


# Shorthand properties and how broad they are: a lower depth resets the
# properties of every higher one it covers (``border`` resets ``border-top``,
# which resets ``border-top-width``). Longhands sort after all shorthands.
SHORTHAND_DEPTH: dict[str, int] = {
    "all": 0,
    **dict.fromkeys(
        (
            "animation",
            "background",
            "border",
            "border-block",
            "border-image",
            "border-inline",
            "border-radius",
            "column-rule",
            "columns",
            "container",
            "flex",
            "flex-flow",
            "font",
            "gap",
            "grid",
            "inset",
            "list-style",
            "margin",
            "mask",
            "offset",
            "outline",
            "overflow",
            "padding",
            "place-content",
            "place-items",
            "place-self",
            "scroll-margin",
            "scroll-padding",
            "text-decoration",
            "text-emphasis",
            "transition",
        ),
        1,
    ),
    **dict.fromkeys(
        (
            "border-block-end",
            "border-block-start",
            "border-bottom",
            "border-color",
            "border-inline-end",
            "border-inline-start",
            "border-left",
            "border-right",
            "border-style",
            "border-top",
            "border-width",
            "font-variant",
            "grid-area",
            "grid-template",
            "inset-block",
            "inset-inline",
            "margin-block",
            "margin-inline",
            "padding-block",
            "padding-inline",
            "scroll-margin-block",
            "scroll-margin-inline",
            "scroll-padding-block",
            "scroll-padding-inline",
        ),
        2,
    ),
    **dict.fromkeys(("grid-column", "grid-row"), 3),
}

_LONGHAND_DEPTH = max(SHORTHAND_DEPTH.values()) + 1

_VENDOR_PREFIX_RE = re.compile(r"^-(?:webkit|moz|ms|o)-")


def cascade_rank(prop: str) -> int:
    """Return the emission rank of a kebab-case property.

    Declarations are written in ascending rank so a shorthand never follows,
    and silently overrides, a longhand it covers.
    """
    return SHORTHAND_DEPTH.get(_VENDOR_PREFIX_RE.sub("", prop), _LONGHAND_DEPTH)

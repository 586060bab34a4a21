"""Evaluator and CSS compiler for static style objects."""

from stylezx.compiler.aliases import (
    ALIASES,
    SHORTHAND_DEPTH,
    UNITLESS_PROPERTIES,
    cascade_rank,
    resolve_property,
    to_kebab_case,
)
from stylezx.compiler.css import compile_style, resolve_theme_reference
from stylezx.compiler.evaluator import evaluate, evaluate_object

__all__ = [
    "ALIASES",
    "SHORTHAND_DEPTH",
    "UNITLESS_PROPERTIES",
    "cascade_rank",
    "compile_style",
    "evaluate",
    "evaluate_object",
    "resolve_property",
    "resolve_theme_reference",
    "to_kebab_case",
]

"""Syntax tree model produced by the expression parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Span:
    """Absolute position of a node in its source file.

    ``start`` and ``end`` are character offsets; ``line`` and ``column`` are
    1-based and refer to ``start``.
    """

    start: int
    end: int
    line: int
    column: int


@dataclass(frozen=True)
class SyntaxNode:
    """A typed node in an expression tree.

    ``kind`` uses ESTree-style names (``ObjectExpression``, ``StringLiteral``,
    ``CallExpression`` ...). ``value`` holds the literal value, identifier name
    or operator; ``children`` holds sub-expressions in source order.
    """

    kind: str
    span: Span
    value: Any = None
    children: tuple[SyntaxNode, ...] = ()
    computed: bool = False  # only meaningful for ObjectProperty

    @property
    def key(self) -> SyntaxNode:
        return self.children[0]

    @property
    def property_value(self) -> SyntaxNode:
        return self.children[1]

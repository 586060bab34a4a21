"""Static evaluator: turns a style-literal syntax tree into a plain value."""

from __future__ import annotations

from stylezx.errors import UnsupportedExpression, UnsupportedKey
from stylezx.model.style import StyleLiteral, StyleObject
from stylezx.model.syntax import SyntaxNode

__all__ = ["evaluate", "evaluate_object"]

_SCALAR_KINDS = {"StringLiteral", "NumericLiteral", "BooleanLiteral", "NullLiteral"}


def _reject(node: SyntaxNode) -> UnsupportedExpression:
    return UnsupportedExpression(node.kind, node.span.line, node.span.column)


def _property_key(prop: SyntaxNode) -> str:
    key = prop.key
    if prop.computed:
        raise UnsupportedKey("computed key", key.span.line, key.span.column)
    if key.kind == "Identifier" or key.kind == "StringLiteral":
        return key.value
    raise UnsupportedKey(key.kind, key.span.line, key.span.column)


def evaluate_object(node: SyntaxNode) -> StyleObject:
    """Evaluate an ``ObjectExpression`` whose entries are all static."""
    if node.kind != "ObjectExpression":
        raise _reject(node)
    result: StyleObject = {}
    for prop in node.children:
        if prop.kind != "ObjectProperty":
            # SpreadElement and anything else that is not a plain key/value pair.
            raise _reject(prop)
        key = _property_key(prop)
        result[key] = evaluate(prop.property_value)
    return result


def evaluate(node: SyntaxNode) -> StyleLiteral:
    """Evaluate *node* to a StyleLiteral.

    Accepts string, number, boolean and null literals, a unary minus applied
    to a number literal, and object literals built from those. Raises
    :class:`UnsupportedExpression` for any other construct and
    :class:`UnsupportedKey` for computed or non-string keys.
    """
    if node.kind in _SCALAR_KINDS:
        return node.value
    if node.kind == "UnaryExpression":
        operand = node.children[0]
        if node.value == "-" and operand.kind == "NumericLiteral":
            negated = -operand.value
            return 0 if negated == 0 else negated  # no -0 in CSS output
        raise _reject(node)
    if node.kind == "ObjectExpression":
        return evaluate_object(node)
    raise _reject(node)

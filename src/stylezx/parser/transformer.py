"""Lark Transformer that converts an expression parse tree into SyntaxNodes."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from stylezx.errors import ParseError
from stylezx.model.syntax import Span, SyntaxNode

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# Punctuation kept in the tree only so that container spans are exact.
_DELIMITERS = {"LBRACE", "RBRACE", "LSQB", "RSQB", "LPAR", "RPAR"}

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\n|.)")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\n": "",  # line continuation
}


def _unescape(match: re.Match[str]) -> str:
    seq = match.group(1)
    if seq.startswith("u{"):
        return chr(int(seq[2:-1], 16))
    if seq[0] in "ux" and len(seq) > 1:
        return chr(int(seq[1:], 16))
    return _SIMPLE_ESCAPES.get(seq, seq)


def decode_string(raw: str) -> str:
    """Decode a quoted JavaScript string literal into its value."""
    return _ESCAPE_RE.sub(_unescape, raw[1:-1])


def decode_number(raw: str) -> int | float:
    """Decode a JavaScript numeric literal; integral values come back as int."""
    text = raw.replace("_", "")
    if text[:2] in ("0x", "0X"):
        return int(text, 16)
    value = float(text)
    if value.is_integer() and abs(value) < 2**53:
        return int(value)
    return value


class ExpressionTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into SyntaxNode objects.

    Token positions are relative to the parsed fragment; ``offset``, ``line``
    and ``column`` describe where the fragment starts in its file so that
    every span is absolute.
    """

    def __init__(self, offset: int = 0, line: int = 1, column: int = 1) -> None:
        super().__init__()
        self._offset = offset
        self._line = line
        self._column = column

    # ---- positions ----

    def _token_span(self, token: Token) -> Span:
        tok_line = token.line or 1
        tok_column = token.column or 1
        column = tok_column + self._column - 1 if tok_line == 1 else tok_column
        return Span(
            start=self._offset + (token.start_pos or 0),
            end=self._offset + (token.end_pos or 0),
            line=self._line + tok_line - 1,
            column=column,
        )

    def _span(self, items: list[object]) -> Span:
        spans = [
            self._token_span(item) if isinstance(item, Token) else item.span
            for item in items
            if isinstance(item, (Token, SyntaxNode))
        ]
        first, last = spans[0], spans[-1]
        return Span(start=first.start, end=last.end, line=first.line, column=first.column)

    @staticmethod
    def _nodes(items: list[object]) -> tuple[SyntaxNode, ...]:
        return tuple(item for item in items if isinstance(item, SyntaxNode))

    def _leaf(self, kind: str, token: Token, value: object) -> SyntaxNode:
        return SyntaxNode(kind=kind, span=self._token_span(token), value=value)

    # ---- literals ----

    def string(self, items: list[Token]) -> SyntaxNode:
        return self._leaf("StringLiteral", items[0], decode_string(str(items[0])))

    def number(self, items: list[Token]) -> SyntaxNode:
        return self._leaf("NumericLiteral", items[0], decode_number(str(items[0])))

    def true(self, items: list[Token]) -> SyntaxNode:
        return self._leaf("BooleanLiteral", items[0], True)

    def false(self, items: list[Token]) -> SyntaxNode:
        return self._leaf("BooleanLiteral", items[0], False)

    def null(self, items: list[Token]) -> SyntaxNode:
        return self._leaf("NullLiteral", items[0], None)

    def identifier(self, items: list[Token]) -> SyntaxNode:
        return self._leaf("Identifier", items[0], str(items[0]))

    def template(self, items: list[Token]) -> SyntaxNode:
        return self._leaf("TemplateLiteral", items[0], str(items[0])[1:-1])

    # ---- containers ----

    def object(self, items: list[object]) -> SyntaxNode:
        return SyntaxNode("ObjectExpression", self._span(items), children=self._nodes(items))

    def property(self, items: list[SyntaxNode]) -> SyntaxNode:
        return SyntaxNode("ObjectProperty", self._span(items), children=self._nodes(items))

    def computed_property(self, items: list[object]) -> SyntaxNode:
        return SyntaxNode(
            "ObjectProperty", self._span(items), children=self._nodes(items), computed=True
        )

    def shorthand(self, items: list[Token]) -> SyntaxNode:
        key = self.identifier(items)
        return SyntaxNode("ObjectProperty", key.span, value="shorthand", children=(key, key))

    def spread(self, items: list[object]) -> SyntaxNode:
        return SyntaxNode("SpreadElement", self._span(items), children=self._nodes(items))

    def array(self, items: list[object]) -> SyntaxNode:
        return SyntaxNode("ArrayExpression", self._span(items), children=self._nodes(items))

    # ---- operators ----

    def paren(self, items: list[object]) -> SyntaxNode:
        return self._nodes(items)[0]

    def member(self, items: list[object]) -> SyntaxNode:
        target = items[0]
        name = self.identifier([items[-1]])  # type: ignore[list-item]
        return SyntaxNode("MemberExpression", self._span(items), children=(target, name))  # type: ignore[arg-type]

    def index(self, items: list[object]) -> SyntaxNode:
        return SyntaxNode(
            "MemberExpression", self._span(items), children=self._nodes(items), computed=True
        )

    def call(self, items: list[object]) -> SyntaxNode:
        return SyntaxNode("CallExpression", self._span(items), children=self._nodes(items))

    def tagged_template(self, items: list[object]) -> SyntaxNode:
        quasi = self.template([items[-1]])  # type: ignore[list-item]
        return SyntaxNode(
            "TaggedTemplateExpression", self._span(items), children=(items[0], quasi)  # type: ignore[arg-type]
        )

    def unary(self, items: list[object]) -> SyntaxNode:
        operator = str(items[0])
        return SyntaxNode(
            "UnaryExpression", self._span(items), value=operator, children=self._nodes(items)
        )

    def binary(self, items: list[object]) -> SyntaxNode:
        operator = str(items[1])
        kind = "LogicalExpression" if operator in ("&&", "||", "??") else "BinaryExpression"
        return SyntaxNode(kind, self._span(items), value=operator, children=self._nodes(items))

    def conditional(self, items: list[SyntaxNode]) -> SyntaxNode:
        return SyntaxNode("ConditionalExpression", self._span(items), children=self._nodes(items))


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


def parse_expression(
    source: str, offset: int = 0, line: int = 1, column: int = 1
) -> SyntaxNode:
    """Parse a JavaScript expression fragment into a SyntaxNode tree.

    *offset*, *line* and *column* locate the fragment inside its file.
    """
    try:
        tree = _parser().parse(source)
    except LarkError as e:
        err_line = getattr(e, "line", None)
        err_column = getattr(e, "column", None)
        if isinstance(err_line, int) and err_line > 0:
            if err_line == 1 and isinstance(err_column, int):
                err_column += column - 1
            err_line += line - 1
        else:
            err_line, err_column = line, column
        raise ParseError(f"Cannot parse expression: {e}", line=err_line, column=err_column) from e
    return ExpressionTransformer(offset, line, column).transform(tree)

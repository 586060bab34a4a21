"""Hand-written scanner that locates style declaration sites in TSX/JSX source.

Two declaration forms are recognised:
    <div className="card" zx={{ p: 20, bg: '$theme.colors.surface' }} />
    const styles = createStyles({ title: { m: 0, fontSize: 24 } });

The scanner only finds boundaries; the attribute value or call argument is
handed to :func:`parse_expression` for a real parse.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "JsxAttribute",
    "JsxElement",
    "StyleCall",
    "match_bracket",
    "position",
    "scan_elements",
    "scan_style_calls",
]

# Opening tag: '<' immediately followed by a tag name.
_TAG_START_RE = re.compile(r"<(?P<tag>[A-Za-z_$][\w$.:-]*)")

_ATTR_NAME_RE = re.compile(r"[A-Za-z_$][\w$:.-]*")

_WS_RE = re.compile(r"\s*")

_CLOSERS = {"{": "}", "(": ")", "[": "]"}


@dataclass(frozen=True)
class JsxAttribute:
    """One attribute of a JSX opening element.

    ``kind`` is ``"string"`` (quoted value), ``"expression"`` (braced value),
    ``"spread"`` (``{...props}``) or ``"boolean"`` (no value). For expression
    attributes ``value_start``/``value_end`` bound the text between the braces;
    for string attributes they bound the quoted literal including its quotes.
    """

    name: str
    kind: str
    start: int
    end: int
    value_start: int
    value_end: int

    def value_text(self, source: str) -> str:
        return source[self.value_start : self.value_end]


@dataclass(frozen=True)
class JsxElement:
    """A JSX opening element: tag name, span and attributes."""

    tag: str
    start: int
    end: int
    attributes: tuple[JsxAttribute, ...]

    def attribute(self, name: str) -> JsxAttribute | None:
        """Return the first attribute called *name*, if any."""
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


@dataclass(frozen=True)
class StyleCall:
    """A ``createStyles(...)`` call: full span and argument span."""

    start: int
    end: int
    arg_start: int
    arg_end: int


def position(source: str, offset: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of *offset* in *source*."""
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _skip_string(source: str, pos: int) -> int:
    """Return the index just past the quoted string starting at *pos*."""
    quote = source[pos]
    i = pos + 1
    n = len(source)
    while i < n:
        ch = source[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote or (ch == "\n" and quote != "`"):
            return i + 1
        if quote == "`" and source.startswith("${", i):
            close = match_bracket(source, i + 1)
            if close is None:
                return n
            i = close + 1
            continue
        i += 1
    return n


def match_bracket(source: str, pos: int) -> int | None:
    """Return the index of the bracket closing the one at *pos*.

    Strings, template literals and comments are skipped. Returns None when
    the bracket is never closed.
    """
    stack = [_CLOSERS[source[pos]]]
    i = pos + 1
    n = len(source)
    while i < n:
        ch = source[i]
        if ch in "'\"`":
            i = _skip_string(source, i)
            continue
        if source.startswith("//", i):
            newline = source.find("\n", i)
            i = n if newline == -1 else newline + 1
            continue
        if source.startswith("/*", i):
            close = source.find("*/", i + 2)
            i = n if close == -1 else close + 2
            continue
        if ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in ")]}":
            if ch != stack[-1]:
                return None
            stack.pop()
            if not stack:
                return i
        i += 1
    return None


def _skip_ws(source: str, pos: int) -> int:
    return _WS_RE.match(source, pos).end()  # type: ignore[union-attr]


def _read_attributes(source: str, pos: int) -> tuple[list[JsxAttribute], int] | None:
    """Read attributes up to the end of an opening tag.

    Returns the attributes and the index just past ``>`` or ``/>``, or None if
    the text is not a well-formed opening tag (a comparison, a generic, ...).
    """
    attributes: list[JsxAttribute] = []
    n = len(source)
    while True:
        pos = _skip_ws(source, pos)
        if pos >= n:
            return None
        if source.startswith("/>", pos):
            return attributes, pos + 2
        if source[pos] == ">":
            return attributes, pos + 1
        if source[pos] == "{":
            close = match_bracket(source, pos)
            if close is None:
                return None
            attributes.append(JsxAttribute("...", "spread", pos, close + 1, pos + 1, close))
            pos = close + 1
            continue

        name_match = _ATTR_NAME_RE.match(source, pos)
        if name_match is None:
            return None
        name = name_match.group()
        start = pos
        pos = _skip_ws(source, name_match.end())
        if not source.startswith("=", pos):
            attributes.append(
                JsxAttribute(name, "boolean", start, name_match.end(), name_match.end(), name_match.end())
            )
            continue

        pos = _skip_ws(source, pos + 1)
        if pos >= n:
            return None
        ch = source[pos]
        if ch in "'\"":
            close = source.find(ch, pos + 1)  # JSX string attributes have no escapes
            if close == -1:
                return None
            attributes.append(JsxAttribute(name, "string", start, close + 1, pos, close + 1))
            pos = close + 1
        elif ch == "{":
            close = match_bracket(source, pos)
            if close is None:
                return None
            attributes.append(JsxAttribute(name, "expression", start, close + 1, pos + 1, close))
            pos = close + 1
        else:
            return None


class _SourceWalker:
    """Forward walk over TSX/JSX source.

    Code is walked bracket by bracket; string literals, template text,
    comments and JSX text are recorded as opaque ranges and never searched
    for declarations. Opening elements are collected in code and in JSX
    children, including elements nested inside attribute expressions.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.elements: list[JsxElement] = []
        self.opaque: list[tuple[int, int]] = []

    def _mark(self, start: int, end: int) -> None:
        if end > start:
            self.opaque.append((start, end))

    def code(self, pos: int, closer: str | None = None) -> int:
        """Walk code from *pos*; return the index of *closer* (or the end)."""
        source = self.source
        n = len(source)
        while pos < n:
            ch = source[pos]
            if closer is not None and ch == closer:
                return pos
            if ch in "'\"":
                end = _skip_string(source, pos)
                self._mark(pos, end)
                pos = end
            elif ch == "`":
                pos = self._template(pos)
            elif source.startswith("//", pos):
                newline = source.find("\n", pos)
                end = n if newline == -1 else newline + 1
                self._mark(pos, end)
                pos = end
            elif source.startswith("/*", pos):
                close = source.find("*/", pos + 2)
                end = n if close == -1 else close + 2
                self._mark(pos, end)
                pos = end
            elif ch in _CLOSERS:
                pos = self.code(pos + 1, _CLOSERS[ch]) + 1
            elif ch == "<":
                pos = self._tag(pos, in_children=False)
            else:
                pos += 1
        return n

    def _template(self, pos: int) -> int:
        source = self.source
        n = len(source)
        start = pos
        pos += 1
        while pos < n:
            ch = source[pos]
            if ch == "\\":
                pos += 2
            elif ch == "`":
                self._mark(start, pos + 1)
                return pos + 1
            elif source.startswith("${", pos):
                self._mark(start, pos)
                pos = self.code(pos + 2, "}") + 1
                start = pos
            else:
                pos += 1
        self._mark(start, n)
        return n

    def _tag(self, pos: int, in_children: bool) -> int:
        """Read the element opening at *pos*; return where walking resumes."""
        source = self.source
        if source.startswith("<>", pos):
            return self._children(pos + 2)
        match = _TAG_START_RE.match(source, pos)
        if match is None:
            return pos + 1
        if not in_children and pos > 0:
            prev = source[pos - 1]
            # `items<Foo>` and `f()<x` are generics or comparisons, not JSX.
            if prev.isalnum() or prev in "_$)]":
                return pos + 1
        result = _read_attributes(source, match.end())
        if result is None:
            return pos + 1
        attributes, end = result
        self.elements.append(JsxElement(match.group("tag"), pos, end, tuple(attributes)))
        for attr in attributes:
            if attr.kind == "string":
                self._mark(attr.value_start, attr.value_end)
            elif attr.kind in ("expression", "spread"):
                self.code(attr.value_start, "}")
        if source.startswith("/>", end - 2):
            return end
        return self._children(end)

    def _children(self, pos: int) -> int:
        """Walk JSX children up to and past the closing tag."""
        source = self.source
        n = len(source)
        text_start = pos
        while pos < n:
            ch = source[pos]
            if ch == "{":
                self._mark(text_start, pos)
                pos = self.code(pos + 1, "}") + 1
                text_start = pos
            elif ch == "<":
                self._mark(text_start, pos)
                if source.startswith("</", pos):
                    close = source.find(">", pos)
                    return n if close == -1 else close + 1
                pos = self._tag(pos, in_children=True)
                text_start = pos
            else:
                pos += 1
        self._mark(text_start, n)
        return n

    def is_opaque(self, offset: int) -> bool:
        return any(start <= offset < end for start, end in self.opaque)


def _walk(source: str) -> _SourceWalker:
    walker = _SourceWalker(source)
    walker.code(0)
    return walker


def scan_elements(source: str) -> list[JsxElement]:
    """Find every JSX opening element in *source*, in source order.

    Markup inside comments, string literals and template text is ignored.
    """
    return sorted(_walk(source).elements, key=lambda element: element.start)


def scan_style_calls(source: str, callee: str = "createStyles") -> list[StyleCall]:
    """Find every ``callee(...)`` call in *source*.

    Function definitions (``function createStyles(``), member calls
    (``obj.createStyles(``) and mentions inside comments, strings or JSX
    text are ignored.
    """
    pattern = re.compile(rf"(?<![\w$.]){re.escape(callee)}\s*\(")
    walker: _SourceWalker | None = None
    calls: list[StyleCall] = []
    for match in pattern.finditer(source):
        if walker is None:
            walker = _walk(source)
        if walker.is_opaque(match.start()):
            continue
        if re.search(r"\bfunction\s*$", source[max(0, match.start() - 20) : match.start()]):
            continue
        open_paren = match.end() - 1
        close = match_bracket(source, open_paren)
        if close is None:
            continue
        calls.append(StyleCall(match.start(), close + 1, open_paren + 1, close))
    return calls

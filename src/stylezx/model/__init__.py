"""Data model: syntax nodes, style literals, compiled rules, diagnostics."""

from stylezx.model.diagnostic import Diagnostic, Severity
from stylezx.model.style import CompiledRule, StyleLiteral, StyleObject, stringify
from stylezx.model.syntax import Span, SyntaxNode

__all__ = [
    "CompiledRule",
    "Diagnostic",
    "Severity",
    "Span",
    "StyleLiteral",
    "StyleObject",
    "SyntaxNode",
    "stringify",
]

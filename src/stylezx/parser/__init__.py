"""Source scanning and expression parsing."""

from stylezx.errors import ParseError
from stylezx.parser.scanner import (
    JsxAttribute,
    JsxElement,
    StyleCall,
    position,
    scan_elements,
    scan_style_calls,
)
from stylezx.parser.transformer import parse_expression

__all__ = [
    "JsxAttribute",
    "JsxElement",
    "ParseError",
    "StyleCall",
    "parse_expression",
    "position",
    "scan_elements",
    "scan_style_calls",
]

"""Error hierarchy for the style compiler."""

from __future__ import annotations


class StyleZxError(Exception):
    """Base error for all stylezx errors."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        self.line = line
        self.column = column
        super().__init__(message)


class ParseError(StyleZxError):
    """Raised when source text cannot be parsed into syntax nodes."""


class UnsupportedExpression(StyleZxError):
    """A style declaration contains a construct that is not a static literal."""

    def __init__(self, kind: str, line: int | None = None, column: int | None = None) -> None:
        self.kind = kind
        super().__init__(
            f"Dynamic expressions are not allowed in style declarations. "
            f"Found: {kind}. Use the 'style' prop for dynamic values.",
            line=line,
            column=column,
        )


class UnsupportedKey(StyleZxError):
    """An object key in a style declaration is not a fixed string."""

    def __init__(self, kind: str, line: int | None = None, column: int | None = None) -> None:
        self.kind = kind
        super().__init__(
            f"Unsupported key type in style declaration: {kind}",
            line=line,
            column=column,
        )


class InvalidStyleValue(StyleZxError):
    """A style value has the wrong shape for the key it is attached to."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        self.kind = "InvalidStyleValue"
        super().__init__(f"{key!r}: {message}")


class ConfigError(StyleZxError):
    """Raised when stylezx configuration is invalid."""


class ThemeError(StyleZxError):
    """Raised when a theme cannot be loaded or the store is misused."""


class TransformError(StyleZxError):
    """Raised by host hooks when a file cannot be transformed.

    Wraps the underlying error with the offending file path so the host can
    surface the exact declaration to the author.
    """

    def __init__(
        self,
        path: str,
        kind: str,
        detail: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.path = path
        self.kind = kind
        location = path
        if line is not None:
            location += f":{line}"
            if column is not None:
                location += f":{column}"
        super().__init__(f"Error parsing style declaration in {location}: {detail}", line, column)
